"""Signer role policy"""

import pytest

from pool_master.core.exceptions import RoleError
from pool_master.core.identity import Role
from pool_master.operations.roles import OPERATION_ROLES, operations_for, required_role


def test_admin_operations():
    assert operations_for(Role.ADMIN) == [
        "burnPosition", "decreaseLiquidity", "increaseLiquidity", "mintPosition"
    ]


def test_user_operations():
    assert operations_for(Role.USER) == ["collectPoolAllFees", "swapExactInputSingle"]


def test_every_write_has_a_role(descriptor):
    writes = {f.name for f in descriptor if not f.is_read_only}
    assert writes == set(OPERATION_ROLES)


def test_undeclared_operation():
    with pytest.raises(RoleError, match="getDynamicInfo"):
        required_role("getDynamicInfo")


def test_override_table():
    assert required_role("mintPosition", {"mintPosition": Role.USER}) is Role.USER
