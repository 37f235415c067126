"""Signing identities"""

from dataclasses import dataclass
from enum import Enum

from eth_account.signers.local import LocalAccount


class Role(str, Enum):
    """Which configured identity submits a write operation"""

    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class Identity:
    """A key-derived signer bound to a role. Built once, never mutated."""

    role: Role
    account: LocalAccount

    @property
    def address(self):
        return self.account.address

    def sign_transaction(self, tx):
        return self.account.sign_transaction(tx)

    def __repr__(self):
        # Never expose key material
        return f"Identity(role={self.role.value}, address={self.address})"
