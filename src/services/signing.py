"""
Signing Service - Signs and submits transactions for one key pair.

RawSigner normalizes a transaction to transport bytes, signs them with the
account's Ed25519 key and submits the signed bytes to the provider.
"""

import base64
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from models import (
    MoveCallTransaction,
    PaySuiTransaction,
    PayTransaction,
    TransferObjectTransaction,
)
from .transactions import TransactionNormalizer

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from wallet import KeyPair
    from .provider import Provider
    from .serializer import Serializer


@dataclass(frozen=True)
class SignaturePubkeyPair:
    """A base64 signature and the base64 public key that produced it."""
    signature_scheme: str
    signature: str
    pub_key: str


class RawSigner:
    """
    Signer bound to a key pair, a provider and a serializer.

    Usage:
        signer = RawSigner(keypair, provider, serializer)
        effects = signer.pay_sui(intent)
    """

    def __init__(self, keypair: "KeyPair", provider: "Provider", serializer: "Serializer"):
        self.keypair = keypair
        self.provider = provider
        self.serializer = serializer
        self.normalizer = TransactionNormalizer(serializer)

    def get_address(self) -> str:
        return self.keypair.address()

    def sign_data(self, data: bytes) -> SignaturePubkeyPair:
        """Sign transport bytes with the account key."""
        signature = self.keypair.sign(data)
        return SignaturePubkeyPair(
            signature_scheme=self.keypair.SIGNATURE_SCHEME,
            signature=base64.b64encode(signature).decode("ascii"),
            pub_key=base64.b64encode(self.keypair.public_key_bytes()).decode("ascii"),
        )

    def sign_and_execute_transaction(self, tx) -> dict:
        """
        Sign and submit any signable transaction.

        Args:
            tx: A structured intent, a BytesTransaction, raw bytes or a
                base64 string

        Returns:
            The provider's execution response
        """
        address = self.get_address()
        tx_bytes = self.normalizer.to_bytes(address, tx)
        signed = self.sign_data(tx_bytes)

        logger.info(f"Submitting {getattr(tx, 'kind', 'bytes')} transaction from {address}")
        return self.provider.execute_transaction(
            base64.b64encode(tx_bytes).decode("ascii"),
            signed.signature_scheme,
            signed.signature,
            signed.pub_key,
        )

    def _execute(self, tx, expected: type) -> dict:
        if not isinstance(tx, expected):
            raise TypeError(f"Expected {expected.__name__}, got {type(tx).__name__}")
        return self.sign_and_execute_transaction(tx)

    def pay_sui(self, tx: PaySuiTransaction) -> dict:
        return self._execute(tx, PaySuiTransaction)

    def pay(self, tx: PayTransaction) -> dict:
        return self._execute(tx, PayTransaction)

    def transfer_object(self, tx: TransferObjectTransaction) -> dict:
        return self._execute(tx, TransferObjectTransaction)

    def execute_move_call(self, tx: MoveCallTransaction) -> dict:
        return self._execute(tx, MoveCallTransaction)
