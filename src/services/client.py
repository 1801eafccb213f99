"""
Wallet Client - Facade over accounts, coins, transactions, history and NFTs.

Usage:
    client = WalletClient(network="devnet")
    wallet = client.import_wallet(seed_phrase)
    keypair = WalletClient.get_account_from_metadata(seed_phrase, wallet.accounts[0])
    client.transfer_sui(1000, keypair, recipient)
"""

import copy
import logging
from typing import Optional

from models import Account, CoinInfo, HistoryEntry, Wallet
from networks import DEFAULT_REQUEST_TIMEOUT, resolve_network
from wallet import AccountManager, KeyPair
from .coins import CoinSelector, SUI_TYPE_ARG, is_coin
from .fanout import fan_out, DEFAULT_MAX_WORKERS
from .history import HistoryClassifier
from .nft import NftClient
from .provider import JsonRpcProvider, Provider
from .serializer import RpcTxnSerializer, Serializer
from .signing import RawSigner
from .transactions import TransactionBuilder, TransactionNormalizer

logger = logging.getLogger(__name__)


def _move_fields(response: dict) -> Optional[dict]:
    """details.data.fields of a Move object response."""
    details = response.get("details")
    if not isinstance(details, dict):
        return None
    data = details.get("data")
    if not isinstance(data, dict) or not isinstance(data.get("fields"), dict):
        return None
    return data["fields"]


class WalletClient:
    """
    Client-side wallet engine bound to one full node.

    Endpoints come from `node_url`/`faucet_url` when given, otherwise from
    the resolved network (explicit name, environment, settings, default).
    """

    def __init__(self, node_url: Optional[str] = None, faucet_url: Optional[str] = None,
                 network: Optional[str] = None, provider: Optional[Provider] = None,
                 serializer: Optional[Serializer] = None,
                 max_workers: Optional[int] = None, settings: Optional[dict] = None):
        settings = settings or {}

        if provider is None:
            if node_url is None:
                _, node_url, default_faucet = resolve_network(settings, network)
                faucet_url = faucet_url or default_faucet
            provider = JsonRpcProvider(
                node_url,
                faucet_url=faucet_url,
                timeout=settings.get("request_timeout", DEFAULT_REQUEST_TIMEOUT),
            )
        if serializer is None:
            serializer = RpcTxnSerializer(provider)

        self.provider = provider
        self.serializer = serializer
        self.max_workers = max_workers or settings.get("max_workers", DEFAULT_MAX_WORKERS)

        self.accounts = AccountManager(provider)
        self.selector = CoinSelector(provider)
        self.builder = TransactionBuilder(self.selector)
        self.normalizer = TransactionNormalizer(serializer)
        self.history = HistoryClassifier(provider, self.max_workers)
        self.nft_client = NftClient(provider, self.max_workers)

    def _signer(self, keypair: KeyPair) -> RawSigner:
        return RawSigner(keypair, self.provider, self.serializer)

    # ============================================
    # Accounts
    # ============================================

    @staticmethod
    def from_derive_path(mnemonics: str, derivation_path: Optional[str] = None) -> KeyPair:
        """Key pair at a derivation path (account 0 by default)."""
        return KeyPair.derive(mnemonics, derivation_path)

    @staticmethod
    def get_account_from_private_key(private_key: bytes) -> KeyPair:
        return KeyPair.from_private_key(private_key)

    @staticmethod
    def get_account_from_metadata(mnemonic: str, metadata: Account) -> KeyPair:
        return KeyPair.derive(mnemonic, metadata.derivation_path)

    def import_wallet(self, code: str) -> Wallet:
        return self.accounts.import_wallet(code)

    def create_wallet(self, code: Optional[str] = None) -> Wallet:
        return self.accounts.create_wallet(code)

    def create_new_account(self, code: str, index: int) -> Account:
        return self.accounts.create_new_account(code, index)

    # ============================================
    # Coins
    # ============================================

    def get_balance(self, address: str, type_arg: str = SUI_TYPE_ARG) -> int:
        return self.selector.get_balance(address, type_arg)

    def get_coins_with_required_balance(self, address: str, amount: int,
                                        type_arg: str = SUI_TYPE_ARG) -> list[str]:
        return self.selector.get_coins_with_required_balance(address, amount, type_arg)

    def get_gas_object(self, address: str, exclude: Optional[list[str]] = None) -> str:
        return self.builder.get_gas_object(address, exclude or ())

    def get_custom_coins(self, address: str) -> list[CoinInfo]:
        return self.selector.get_custom_coins(address)

    def airdrop(self, address: str) -> dict:
        return self.provider.request_sui_from_faucet(address)

    # ============================================
    # Transactions
    # ============================================

    def transfer_sui(self, amount: int, keypair: KeyPair, recipient: str,
                     type_arg: str = SUI_TYPE_ARG) -> dict:
        """
        Send `amount` of `type_arg` from the key pair's account.

        Raises:
            InsufficientFunds: not enough of the coin (plus gas for SUI)
            GasSelectionFailed: no separate SUI coin can pay gas
        """
        sender = keypair.address()
        intent = self.builder.build_transfer(amount, sender, recipient, type_arg)
        logger.info(f"Transferring {amount} {type_arg} from {sender} to {recipient}")

        signer = self._signer(keypair)
        if intent.kind == "paySui":
            return signer.pay_sui(intent)
        return signer.pay(intent)

    def dry_run_transaction(self, address: str, tx) -> dict:
        """Effects of `tx` computed by the node without committing."""
        return self.provider.dry_run_transaction(self.normalizer.normalize(address, tx))

    simulate_transaction = dry_run_transaction

    def get_transactions(self, address: str) -> list[HistoryEntry]:
        return self.history.get_transactions(address)

    # ============================================
    # NFTs
    # ============================================

    def get_nfts(self, address: str) -> list[dict]:
        """
        NFT object responses owned by `address`.

        Objects with a `url` field (other than coins) or a `metadata` field
        are returned as is. Objects that own a bag are resolved through the
        NFT client and its descriptive fields are merged into their fields.
        """
        infos = self.provider.get_objects_owned_by_address(address)
        object_ids = [info["objectId"] for info in infos]
        responses = fan_out(
            self.provider.get_object, object_ids,
            max_workers=self.max_workers, description="object lookup",
        )

        nfts = []
        bag_objects = []
        for object_id in responses:
            response = responses[object_id]
            fields = _move_fields(response)
            if fields is None:
                continue
            if fields.get("bag"):
                bag_objects.append(response)
            elif not is_coin(response) and fields.get("url"):
                nfts.append(response)
            elif fields.get("metadata"):
                nfts.append(response)

        by_id = {obj["details"]["reference"]["objectId"]: obj for obj in bag_objects}
        for record in self.nft_client.get_nfts_by_id(objects=bag_objects):
            obj = by_id.get(record.id)
            if obj is None:
                continue
            merged = copy.deepcopy(obj)
            merged["details"]["data"]["fields"].update(record.descriptive_fields)
            nfts.append(merged)

        return nfts

    def mint_nfts(self, keypair: KeyPair, name: Optional[str] = None,
                  description: Optional[str] = None, image_url: Optional[str] = None) -> dict:
        return NftClient.mint_example_nft(self._signer(keypair), name, description, image_url)

    def transfer_nft(self, keypair: KeyPair, nft_id: str, recipient: str) -> dict:
        return NftClient.transfer_nft(self._signer(keypair), nft_id, recipient)
