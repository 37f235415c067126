"""Which identity signs each write operation"""

from ..core.exceptions import RoleError
from ..core.identity import Role

# Enforced on-chain as well; this table only selects the signer
OPERATION_ROLES = {
    "mintPosition": Role.ADMIN,
    "burnPosition": Role.ADMIN,
    "increaseLiquidity": Role.ADMIN,
    "decreaseLiquidity": Role.ADMIN,
    "swapExactInputSingle": Role.USER,
    "collectPoolAllFees": Role.USER,
}


def required_role(name, roles=None):
    """
    Look up the signer role for a write operation.

    Raises:
        RoleError: If the operation has no declared role
    """
    table = OPERATION_ROLES if roles is None else roles
    try:
        return table[name]
    except KeyError:
        raise RoleError(f"No signer role declared for write operation {name}")


def operations_for(role):
    """Names of the operations a role submits"""
    return sorted(name for name, r in OPERATION_ROLES.items() if r is Role(role))
