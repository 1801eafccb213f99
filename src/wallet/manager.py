"""
Account Manager - Wallet import and creation.

Each seed phrase corresponds to a single wallet; a wallet can contain
multiple accounts, one per derivation index.
"""

import logging
from typing import Optional, TYPE_CHECKING

from errors import MaxAccountsExceeded
from models import Account, Wallet
from .crypto import KeyPair, SUI_DERIVATION_PATH, generate_seed_phrase

if TYPE_CHECKING:
    from services.provider import Provider

logger = logging.getLogger(__name__)


MAX_ACCOUNTS = 20  # Indices 0-19


def account_path(index: int) -> str:
    """Derivation path of the account at `index`."""
    if index < 0:
        raise ValueError(f"Account index must be non-negative, got {index}")
    if index >= MAX_ACCOUNTS:
        raise MaxAccountsExceeded(index, MAX_ACCOUNTS)
    return SUI_DERIVATION_PATH.format(index)


def account_from_keypair(keypair: KeyPair, derivation_path: str) -> Account:
    """Build account metadata for a derived key pair."""
    return Account(
        derivation_path=derivation_path,
        address=keypair.address(),
        public_key=keypair.public_key_hex(),
    )


def derive_account(seed_phrase: str, index: int) -> Account:
    """Derive the account at `index` of a seed phrase."""
    path = account_path(index)
    return account_from_keypair(KeyPair.derive(seed_phrase, path), path)


class AccountManager:
    """Discovers and creates the accounts of a seed phrase."""

    def __init__(self, provider: "Provider"):
        self.provider = provider

    def import_wallet(self, code: str) -> Wallet:
        """
        Get the accounts of a user from their seed phrase.

        Index 0 is always included. Higher indices are included while the
        provider reports at least one owned object; the scan stops at the
        first index with none, so later accounts are never queried.

        Args:
            code: The seed phrase (12 or 24 words)

        Returns:
            Wallet with the discovered prefix of accounts
        """
        accounts: list[Account] = []
        for index in range(MAX_ACCOUNTS):
            account = derive_account(code, index)
            owned = self.provider.get_objects_owned_by_address(account.address)
            if index == 0 or len(owned) > 0:
                accounts.append(account)
            else:
                break

        logger.info(f"Imported wallet with {len(accounts)} account(s)")
        return Wallet(code=code, accounts=accounts)

    def create_wallet(self, code: Optional[str] = None) -> Wallet:
        """
        Create a wallet with a single account at index 0.

        A fresh seed phrase is generated when none is supplied. On-chain
        state is not consulted.
        """
        if not code:
            code = generate_seed_phrase()
        account = self.create_new_account(code, 0)
        return Wallet(code=code, accounts=[account])

    def create_new_account(self, code: str, index: int) -> Account:
        """
        Create the account at `index` of a wallet.

        Raises:
            MaxAccountsExceeded: index >= MAX_ACCOUNTS
        """
        return derive_account(code, index)

    @staticmethod
    def get_keypair(code: str, account: Account) -> KeyPair:
        """Re-derive the key pair for stored account metadata."""
        return KeyPair.derive(code, account.derivation_path)
