"""
Models package - Data models for the Sui wallet client.

Contains:
- Account, Wallet: Derived accounts and their seed phrase
- Coin, CoinInfo: Coin object projections
- Transaction intents: PaySui, Pay, TransferObject, MoveCall, Bytes
- HistoryEntry, Classification: Classified transaction history
- NftRecord, DomainMatch: NFT wrappers and type classification
"""

from .account import Account, Wallet
from .coin import Coin, CoinInfo
from .transaction import (
    PaySuiTransaction,
    PayTransaction,
    TransferObjectTransaction,
    MoveCallTransaction,
    BytesTransaction,
    TransactionIntent,
    SignableTransaction,
)
from .history import (
    HistoryEntry,
    Classification,
    KIND_RECEIVE,
    KIND_SEND,
    LABEL_AIRDROP,
    LABEL_RECEIVED,
    LABEL_SENT,
    LABEL_NFT_RECEIVED,
    LABEL_NFT_SENT,
    LABEL_NFT_MINTED,
)
from .nft import NftRecord, DomainMatch, DomainKind, NO_MATCH

__all__ = [
    "Account",
    "Wallet",
    "Coin",
    "CoinInfo",
    "PaySuiTransaction",
    "PayTransaction",
    "TransferObjectTransaction",
    "MoveCallTransaction",
    "BytesTransaction",
    "TransactionIntent",
    "SignableTransaction",
    "HistoryEntry",
    "Classification",
    "KIND_RECEIVE",
    "KIND_SEND",
    "LABEL_AIRDROP",
    "LABEL_RECEIVED",
    "LABEL_SENT",
    "LABEL_NFT_RECEIVED",
    "LABEL_NFT_SENT",
    "LABEL_NFT_MINTED",
    "NftRecord",
    "DomainMatch",
    "DomainKind",
    "NO_MATCH",
]
