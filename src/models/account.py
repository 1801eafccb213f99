"""
Account and Wallet models.

A wallet is a seed phrase plus the accounts derived from it, in
derivation-index order.
"""

from dataclasses import dataclass, asdict, field
from typing import Optional


@dataclass(frozen=True)
class Account:
    """One derived account of a wallet."""
    derivation_path: str              # e.g. "m/44'/784'/0'/0'/0'"
    address: str                      # 0x... (20-byte hex)
    public_key: Optional[str] = None  # 0x... (32-byte Ed25519 hex)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Account":
        return cls(**data)


@dataclass
class Wallet:
    """A seed phrase and its discovered accounts (index 0 always first)."""
    code: str                         # BIP-39 seed phrase
    accounts: list[Account] = field(default_factory=list)

    @property
    def primary_account(self) -> Account:
        """The index-0 account."""
        return self.accounts[0]

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "accounts": [a.to_dict() for a in self.accounts],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Wallet":
        return cls(
            code=data["code"],
            accounts=[Account.from_dict(a) for a in data.get("accounts", [])],
        )
