"""
Transaction intent models.

Signable transactions are tagged by `kind`:
- paySui: pay from native coins, gas taken from the same coins
- pay: pay from coins of any type, gas paid by a separate native coin
- transferObject: move an object to a recipient
- moveCall: call a Move function
- bytes: an already-serialized transaction
"""

from dataclasses import dataclass, asdict, field
from typing import Any, ClassVar, Optional, Union


def _check_pay_shape(recipients: list[str], amounts: list[int]) -> None:
    if len(recipients) != len(amounts):
        raise ValueError(
            f"recipients and amounts must have the same length ({len(recipients)} != {len(amounts)})"
        )
    for amount in amounts:
        if not isinstance(amount, int) or amount < 0:
            raise ValueError(f"amounts must be non-negative integers, got {amount}")


@dataclass(frozen=True)
class PaySuiTransaction:
    """Native transfer. Gas is deducted from the input coins."""
    kind: ClassVar[str] = "paySui"
    input_coins: list[str]
    recipients: list[str]
    amounts: list[int]
    gas_budget: int

    def __post_init__(self):
        _check_pay_shape(self.recipients, self.amounts)

    def to_dict(self) -> dict:
        return {"kind": self.kind, **asdict(self)}


@dataclass(frozen=True)
class PayTransaction:
    """Generic coin transfer with a separate native gas coin."""
    kind: ClassVar[str] = "pay"
    input_coins: list[str]
    recipients: list[str]
    amounts: list[int]
    gas_payment: str
    gas_budget: int

    def __post_init__(self):
        _check_pay_shape(self.recipients, self.amounts)
        if self.gas_payment in self.input_coins:
            raise ValueError(f"gas_payment {self.gas_payment} must not be one of input_coins")

    def to_dict(self) -> dict:
        return {"kind": self.kind, **asdict(self)}


@dataclass(frozen=True)
class TransferObjectTransaction:
    """Transfer an object (e.g. an NFT) to a recipient."""
    kind: ClassVar[str] = "transferObject"
    object_id: str
    recipient: str
    gas_budget: int
    gas_payment: Optional[str] = None

    def to_dict(self) -> dict:
        return {"kind": self.kind, **asdict(self)}


@dataclass(frozen=True)
class MoveCallTransaction:
    """Call a Move function."""
    kind: ClassVar[str] = "moveCall"
    package_object_id: str
    module: str
    function: str
    type_arguments: list[str]
    arguments: list[Any]
    gas_budget: int
    gas_payment: Optional[str] = None

    def to_dict(self) -> dict:
        return {"kind": self.kind, **asdict(self)}


@dataclass(frozen=True)
class BytesTransaction:
    """A transaction that is already serialized to transport bytes."""
    kind: ClassVar[str] = "bytes"
    data: bytes = field(repr=False)


TransactionIntent = Union[PaySuiTransaction, PayTransaction]

SignableTransaction = Union[
    PaySuiTransaction,
    PayTransaction,
    TransferObjectTransaction,
    MoveCallTransaction,
    BytesTransaction,
]
