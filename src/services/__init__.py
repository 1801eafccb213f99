"""
Services package - Remote-facing services of the Sui wallet client.

Contains:
- Provider, JsonRpcProvider: Remote data capability (JSON-RPC)
- Serializer, RpcTxnSerializer: Intent -> transaction bytes
- CoinSelector: First-fit coin selection
- TransactionBuilder, TransactionNormalizer: Intent shaping and encoding
- RawSigner: Sign and submit transactions
- HistoryClassifier: Classified transaction history
- NftClient: NFT wrappers and bag resolution
- WalletClient: Facade over all of the above
"""

from .provider import Provider, JsonRpcProvider
from .serializer import Serializer, RpcTxnSerializer
from .coins import CoinSelector, SUI_TYPE_ARG
from .transactions import TransactionBuilder, TransactionNormalizer, DEFAULT_GAS_BUDGET
from .signing import RawSigner, SignaturePubkeyPair
from .history import HistoryClassifier
from .nft import NftClient
from .fanout import fan_out
from .client import WalletClient

__all__ = [
    "Provider",
    "JsonRpcProvider",
    "Serializer",
    "RpcTxnSerializer",
    "CoinSelector",
    "SUI_TYPE_ARG",
    "TransactionBuilder",
    "TransactionNormalizer",
    "DEFAULT_GAS_BUDGET",
    "RawSigner",
    "SignaturePubkeyPair",
    "HistoryClassifier",
    "NftClient",
    "fan_out",
    "WalletClient",
]
