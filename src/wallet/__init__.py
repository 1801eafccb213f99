"""
Wallet package - Deterministic key management for Sui accounts.

Contains:
- KeyPair: Ed25519 key pair with Sui address derivation
- derive_path: SLIP-0010 Ed25519 derivation
- AccountManager: Wallet import (account discovery) and creation
"""

from .crypto import (
    KeyPair,
    COIN_TYPE,
    SUI_DERIVATION_PATH,
    derive_path,
    to_sui_address,
    generate_seed_phrase,
    is_valid_seed_phrase,
    is_valid_hardened_path,
)
from .manager import (
    AccountManager,
    MAX_ACCOUNTS,
    account_path,
    derive_account,
)

__all__ = [
    # Crypto
    "KeyPair",
    "COIN_TYPE",
    "SUI_DERIVATION_PATH",
    "derive_path",
    "to_sui_address",
    "generate_seed_phrase",
    "is_valid_seed_phrase",
    "is_valid_hardened_path",
    # Manager
    "AccountManager",
    "MAX_ACCOUNTS",
    "account_path",
    "derive_account",
]
