"""
Serializer - Converts structured transaction intents to transport bytes.

RpcTxnSerializer asks the full node to build the transaction bytes for an
intent and returns them decoded.
"""

import base64
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from errors import RemoteQueryFailed
from models import (
    PaySuiTransaction,
    PayTransaction,
    TransferObjectTransaction,
    MoveCallTransaction,
)

if TYPE_CHECKING:
    from .provider import JsonRpcProvider

logger = logging.getLogger(__name__)


class Serializer(ABC):
    """Structured intent -> canonical transaction bytes."""

    @abstractmethod
    def serialize_to_bytes(self, signer_address: str, tx) -> bytes:
        """Serialize `tx` for `signer_address`."""


class RpcTxnSerializer(Serializer):
    """Serializer backed by the node's transaction-building RPC methods."""

    def __init__(self, provider: "JsonRpcProvider"):
        self.provider = provider

    def _params(self, signer_address: str, tx) -> tuple[str, list]:
        if isinstance(tx, PaySuiTransaction):
            return "sui_paySui", [
                signer_address, tx.input_coins, tx.recipients, tx.amounts, tx.gas_budget,
            ]
        if isinstance(tx, PayTransaction):
            return "sui_pay", [
                signer_address, tx.input_coins, tx.recipients, tx.amounts,
                tx.gas_payment, tx.gas_budget,
            ]
        if isinstance(tx, TransferObjectTransaction):
            return "sui_transferObject", [
                signer_address, tx.object_id, tx.gas_payment, tx.gas_budget, tx.recipient,
            ]
        if isinstance(tx, MoveCallTransaction):
            return "sui_moveCall", [
                signer_address, tx.package_object_id, tx.module, tx.function,
                tx.type_arguments, tx.arguments, tx.gas_payment, tx.gas_budget,
            ]
        raise TypeError(f"Cannot serialize transaction of type {type(tx).__name__}")

    def serialize_to_bytes(self, signer_address: str, tx) -> bytes:
        method, params = self._params(signer_address, tx)
        result = self.provider.call(method, params)
        if not isinstance(result, dict) or "txBytes" not in result:
            raise RemoteQueryFailed(f"{method} did not return txBytes")
        logger.debug(f"Serialized {tx.kind} transaction for {signer_address}")
        return base64.b64decode(result["txBytes"])
