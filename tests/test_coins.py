"""
We test first-fit coin selection and the coin inventory
"""
import pytest

from errors import InsufficientFunds
from models import CoinInfo
from services.coins import SUI_TYPE_ARG, CoinSelector, coin_symbol, coin_type_arg
from tests.fakes import make_address, make_coin, make_object

OWNER = make_address(7)
USDC = f"0x{'b' * 40}::usdc::USDC"


@pytest.fixture()
def selector(provider):
    for object_id, balance in (("0xc1", 30), ("0xc2", 50), ("0xc3", 20)):
        provider.add(make_coin(object_id, balance), owner=OWNER)
    provider.add(make_coin("0xu1", 500, USDC), owner=OWNER)
    provider.add(make_object("0xo1", "0x2::devnet_nft::DevNetNFT", {"name": "n"}), owner=OWNER)
    return CoinSelector(provider)


def test_first_fit_prefix(selector):
    coins = selector.select_combined(OWNER, 60)
    assert [c.object_id for c in coins] == ["0xc1", "0xc2"]


def test_exact_target(selector):
    assert [c.object_id for c in selector.select_combined(OWNER, 80)] == ["0xc1", "0xc2"]
    assert [c.object_id for c in selector.select_combined(OWNER, 100)] == ["0xc1", "0xc2", "0xc3"]


def test_insufficient_funds(selector):
    with pytest.raises(InsufficientFunds) as e:
        selector.select_combined(OWNER, 101)
    assert e.value.required == 101
    assert e.value.available == 100


def test_exclude(selector):
    coins = selector.select_combined(OWNER, 60, exclude=["0xc1"])
    assert [c.object_id for c in coins] == ["0xc2", "0xc3"]


def test_select_single_at_least(selector):
    assert selector.select_single_at_least(OWNER, 40).object_id == "0xc2"
    assert selector.select_single_at_least(OWNER, 10, exclude=["0xc1"]).object_id == "0xc2"
    with pytest.raises(InsufficientFunds) as e:
        selector.select_single_at_least(OWNER, 60)
    assert e.value.available == 50


def test_balance_per_coin_type(selector):
    assert selector.get_balance(OWNER) == 100
    assert selector.get_balance(OWNER, USDC) == 500
    assert selector.get_balance(make_address(99)) == 0


def test_coins_with_required_balance(selector):
    assert selector.get_coins_with_required_balance(OWNER, 10) == ["0xc1"]


def test_custom_coins(selector):
    coins = selector.get_custom_coins(OWNER)
    assert [(c.id, c.symbol, c.balance) for c in coins] == [
        ("0xc1", "SUI", 30), ("0xc2", "SUI", 50), ("0xc3", "SUI", 20), ("0xu1", "USDC", 500),
    ]
    assert all(c.decimals == 9 for c in coins)
    assert coins[3].coin_type_arg == USDC


def test_coin_type_helpers():
    assert coin_type_arg("0x2::coin::Coin<0x2::sui::SUI>") == "0x2::sui::SUI"
    assert coin_type_arg("0x2::devnet_nft::DevNetNFT") is None
    assert coin_symbol("0x2::sui::SUI") == "SUI"


@pytest.mark.parametrize("balance, decimals, display", [
    (1_500_000_000, 9, "1.5 SUI"),
    (30, 9, "0.00000003 SUI"),
    (2_000_000_000, 9, "2 SUI"),
    (0, 9, "0 SUI"),
    (7, 0, "7 SUI"),
])
def test_format_balance(balance, decimals, display):
    info = CoinInfo("0xc1", "SUI", "SUI", balance, decimals, SUI_TYPE_ARG)
    assert info.format_balance() == display
