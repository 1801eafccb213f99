"""
Wallet error taxonomy.

Local input validation (bad seed phrase, malformed path or intent) raises
ValueError/TypeError. The classes below cover the conditions callers are
expected to handle.
"""

from typing import Optional


class WalletError(Exception):
    """Base exception for wallet client errors."""
    pass


class InsufficientFunds(WalletError):
    """Coin selection ran out of candidates below the requested target."""

    def __init__(self, required: int, available: int, coin_type: str):
        self.required = required
        self.available = available
        self.coin_type = coin_type
        super().__init__(f"Insufficient {coin_type}: need {required}, have {available}")


class GasSelectionFailed(WalletError):
    """
    No coin of the native asset is left to pay gas separately.

    Distinct from InsufficientFunds: the transfer amount itself is covered,
    only the gas payment is not.
    """

    def __init__(self, required: int, available: int, coin_type: str):
        self.required = required
        self.available = available
        self.coin_type = coin_type
        super().__init__(f"Not enough gas: no {coin_type} coin with balance >= {required}")


class MaxAccountsExceeded(WalletError):
    """Account index is outside the supported derivation range."""

    def __init__(self, index: int, limit: int):
        self.index = index
        self.limit = limit
        super().__init__(f"Max no. of accounts reached ({index} >= {limit})")


class RemoteQueryFailed(WalletError):
    """
    A provider, signer or serializer call failed.

    For concurrent lookups, `failures` maps each failed key to its exception
    and `partial` holds the results of the branches that succeeded.
    """

    def __init__(self, message: str, failures: Optional[dict] = None,
                 partial: Optional[dict] = None):
        super().__init__(message)
        self.failures = failures or {}
        self.partial = partial or {}
