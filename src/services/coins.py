"""
Coin Selector - Picks owned coin objects to cover a payment.

Selection is first-fit in the order the provider returns coins: coins are
accumulated until the running total reaches the target, and exactly that
prefix is returned. It is not a minimal or best-fit subset.
"""

import logging
import re
from typing import Iterable, Optional, TYPE_CHECKING

from errors import InsufficientFunds
from models import Coin, CoinInfo

if TYPE_CHECKING:
    from .provider import Provider

logger = logging.getLogger(__name__)


# Native asset type argument
SUI_TYPE_ARG = "0x2::sui::SUI"

# Decimals reported for every coin in the inventory
DEFAULT_COIN_DECIMALS = 9

COIN_TYPE_RE = re.compile(r"^0x2::coin::Coin<(.+)>$")


# ============================================
# Coin Objects
# ============================================

def coin_type_arg(object_type: str) -> Optional[str]:
    """Return T for a `0x2::coin::Coin<T>` type string, else None."""
    match = COIN_TYPE_RE.match(object_type or "")
    return match.group(1) if match else None


def coin_symbol(type_arg: str) -> str:
    """Symbol of a coin type: the text after its last ':'."""
    return type_arg[type_arg.rfind(":") + 1:]


def is_coin(response: dict) -> bool:
    """Check if an object response is a coin object."""
    details = response.get("details")
    if not isinstance(details, dict):
        return False
    data = details.get("data")
    return isinstance(data, dict) and coin_type_arg(data.get("type", "")) is not None


def coin_from_object(response: dict) -> Optional[Coin]:
    """Project an object response onto a Coin (None if it is not an existing coin)."""
    if response.get("status") != "Exists" or not is_coin(response):
        return None
    details = response["details"]
    data = details["data"]
    fields = data.get("fields", {})
    object_id = details.get("reference", {}).get("objectId") or fields.get("id", {}).get("id")
    return Coin(
        object_id=object_id,
        coin_type=coin_type_arg(data["type"]),
        balance=int(fields.get("balance", 0)),
    )


def total_balance(coins: Iterable[Coin]) -> int:
    return sum(coin.balance for coin in coins)


# ============================================
# Selector
# ============================================

class CoinSelector:
    """Reads coins owned by an address and selects subsets of them."""

    def __init__(self, provider: "Provider"):
        self.provider = provider

    def get_coins(self, address: str, coin_type: str = SUI_TYPE_ARG) -> list[Coin]:
        """All coins of `coin_type` owned by `address`, in provider order."""
        responses = self.provider.get_coin_balances_owned_by_address(address, coin_type)
        coins = []
        for response in responses:
            coin = coin_from_object(response)
            if coin is not None and coin.coin_type == coin_type:
                coins.append(coin)
        return coins

    def select_combined(self, address: str, target: int, coin_type: str = SUI_TYPE_ARG,
                        exclude: Iterable[str] = ()) -> list[Coin]:
        """
        Select coins whose combined balance is >= target.

        Coins are taken in provider order until the running sum reaches the
        target; the accumulated prefix is returned.

        Raises:
            InsufficientFunds: all candidates together are below target
        """
        excluded = set(exclude)
        selected: list[Coin] = []
        running = 0
        for coin in self.get_coins(address, coin_type):
            if running >= target:
                break
            if coin.object_id in excluded:
                continue
            selected.append(coin)
            running += coin.balance

        if running < target:
            raise InsufficientFunds(target, running, coin_type)

        logger.debug(f"Selected {len(selected)} {coin_type} coin(s) totalling {running} for {target}")
        return selected

    def select_single_at_least(self, address: str, target: int, coin_type: str = SUI_TYPE_ARG,
                               exclude: Iterable[str] = ()) -> Coin:
        """
        Select the first single coin with balance >= target.

        Raises:
            InsufficientFunds: no candidate coin is large enough
        """
        excluded = set(exclude)
        largest = 0
        for coin in self.get_coins(address, coin_type):
            if coin.object_id in excluded:
                continue
            if coin.balance >= target:
                return coin
            largest = max(largest, coin.balance)
        raise InsufficientFunds(target, largest, coin_type)

    def get_balance(self, address: str, coin_type: str = SUI_TYPE_ARG) -> int:
        """Total balance of `coin_type` owned by `address`."""
        return total_balance(self.get_coins(address, coin_type))

    def get_coins_with_required_balance(self, address: str, amount: int,
                                        coin_type: str = SUI_TYPE_ARG) -> list[str]:
        """Object ids of the coins selected to cover `amount`."""
        return [coin.object_id for coin in self.select_combined(address, amount, coin_type)]

    def get_custom_coins(self, address: str) -> list[CoinInfo]:
        """Every coin owned by `address`, of any type."""
        coins = []
        for response in self.provider.get_coin_balances_owned_by_address(address):
            coin = coin_from_object(response)
            if coin is None:
                continue
            symbol = coin_symbol(coin.coin_type)
            coins.append(CoinInfo(
                id=coin.object_id,
                symbol=symbol,
                name=symbol,
                balance=coin.balance,
                decimals=DEFAULT_COIN_DECIMALS,
                coin_type_arg=coin.coin_type,
            ))
        return coins
