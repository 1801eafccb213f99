"""
Coin models.

Read-only projections of remote coin objects. Selection only reads and
aggregates them.
"""

from dataclasses import dataclass, asdict
from decimal import Decimal


@dataclass(frozen=True)
class Coin:
    """A `0x2::coin::Coin<T>` object owned by an address."""
    object_id: str
    coin_type: str     # Inner type argument T, e.g. "0x2::sui::SUI"
    balance: int       # Smallest unit


@dataclass
class CoinInfo:
    """One entry of an address's coin inventory."""
    id: str
    symbol: str
    name: str
    balance: int
    decimals: int
    coin_type_arg: str

    def to_dict(self) -> dict:
        return asdict(self)

    def format_balance(self) -> str:
        """Format balance in whole units, e.g. '1.5 SUI'."""
        amount = format(Decimal(self.balance).scaleb(-self.decimals), "f")
        if "." in amount:
            amount = amount.rstrip("0").rstrip(".")
        return f"{amount} {self.symbol}"
