"""
Transactions - Intent building and normalization.

TransactionBuilder turns a transfer request into one of two intent shapes:
- SUI: PaySuiTransaction, gas is taken from the selected coins
- any other coin: PayTransaction, gas is paid by a separate SUI coin that
  is not one of the input coins

TransactionNormalizer turns any accepted transaction representation into
base64 transport bytes for dry runs and submission.
"""

import base64
import logging
from typing import Iterable, Union, TYPE_CHECKING

from errors import GasSelectionFailed, InsufficientFunds
from models import (
    BytesTransaction,
    MoveCallTransaction,
    PaySuiTransaction,
    PayTransaction,
    TransactionIntent,
    TransferObjectTransaction,
)
from .coins import CoinSelector, SUI_TYPE_ARG

if TYPE_CHECKING:
    from .serializer import Serializer

logger = logging.getLogger(__name__)


# Fixed gas budget for coin transfers
DEFAULT_GAS_BUDGET = 1000

STRUCTURED_TRANSACTIONS = (
    PaySuiTransaction,
    PayTransaction,
    TransferObjectTransaction,
    MoveCallTransaction,
)

RawTransaction = Union[
    str, bytes, bytearray, memoryview, BytesTransaction,
    PaySuiTransaction, PayTransaction, TransferObjectTransaction, MoveCallTransaction,
]


# ============================================
# Builder
# ============================================

class TransactionBuilder:
    """Builds transfer intents from the sender's coins."""

    def __init__(self, selector: CoinSelector, gas_budget: int = DEFAULT_GAS_BUDGET):
        self.selector = selector
        self.gas_budget = gas_budget

    def build_transfer(self, amount: int, sender_address: str, recipient: str,
                       coin_type: str = SUI_TYPE_ARG) -> TransactionIntent:
        """
        Build an intent paying `amount` of `coin_type` to `recipient`.

        Raises:
            InsufficientFunds: not enough of `coin_type` (plus gas for SUI)
            GasSelectionFailed: no separate SUI coin can pay gas
        """
        if amount < 0:
            raise ValueError(f"amount must be non-negative, got {amount}")

        if coin_type == SUI_TYPE_ARG:
            coins = self.selector.select_combined(
                sender_address, amount + self.gas_budget, SUI_TYPE_ARG
            )
            return PaySuiTransaction(
                input_coins=[coin.object_id for coin in coins],
                recipients=[recipient],
                amounts=[amount],
                gas_budget=self.gas_budget,
            )

        coins = self.selector.select_combined(sender_address, amount, coin_type)
        input_coins = [coin.object_id for coin in coins]
        gas_payment = self.get_gas_object(sender_address, input_coins)
        return PayTransaction(
            input_coins=input_coins,
            recipients=[recipient],
            amounts=[amount],
            gas_payment=gas_payment,
            gas_budget=self.gas_budget,
        )

    def get_gas_object(self, address: str, exclude: Iterable[str] = ()) -> str:
        """
        Pick a SUI coin covering the gas budget that is not in `exclude`.

        Raises:
            GasSelectionFailed: no eligible SUI coin
        """
        try:
            coin = self.selector.select_single_at_least(
                address, self.gas_budget, SUI_TYPE_ARG, exclude
            )
        except InsufficientFunds as e:
            logger.info(f"No gas coin for {address}: {e}")
            raise GasSelectionFailed(self.gas_budget, e.available, SUI_TYPE_ARG) from e
        return coin.object_id


# ============================================
# Normalizer
# ============================================

class TransactionNormalizer:
    """
    Normalizes transactions to transport bytes.

    - raw bytes or a BytesTransaction: encoded directly
    - a str: already base64, passed through unchanged
    - a structured intent: serialized by the Serializer, then encoded
    """

    def __init__(self, serializer: "Serializer"):
        self.serializer = serializer

    def to_bytes(self, signer_address: str, tx: RawTransaction) -> bytes:
        """Transport bytes of `tx`."""
        if isinstance(tx, str):
            return base64.b64decode(tx)
        if isinstance(tx, (bytes, bytearray, memoryview)):
            return bytes(tx)
        if isinstance(tx, BytesTransaction):
            return bytes(tx.data)
        if isinstance(tx, STRUCTURED_TRANSACTIONS):
            return self.serializer.serialize_to_bytes(signer_address, tx)
        raise TypeError(f"Unsupported transaction type: {type(tx).__name__}")

    def normalize(self, signer_address: str, tx: RawTransaction) -> str:
        """Base64 transport bytes of `tx`."""
        if isinstance(tx, str):
            return tx
        return base64.b64encode(self.to_bytes(signer_address, tx)).decode("ascii")
