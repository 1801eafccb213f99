"""
We test the command line entry point
"""
import json

import pytest

import app
from services import WalletClient
from tests.fakes import FakeProvider, FakeSerializer, PHRASE, make_address, make_coin
from utils import load_settings

OWNER = make_address(7)


@pytest.fixture()
def fake_client(tmp_path, monkeypatch):
    monkeypatch.setenv("SUI_WALLET_HOME", str(tmp_path))
    provider = FakeProvider()
    provider.add(make_coin("0xc1", 30), owner=OWNER)
    provider.add(make_coin("0xc2", 12), owner=OWNER)
    client = WalletClient(provider=provider, serializer=FakeSerializer())
    monkeypatch.setattr(app, "WalletClient", lambda **kwargs: client)
    return client


def _run(capsys, *argv):
    code = app.main(list(argv))
    return code, json.loads(capsys.readouterr().out)


def test_balance(fake_client, capsys):
    code, out = _run(capsys, "balance", OWNER)
    assert code == 0
    assert out == {"address": OWNER, "coin_type": "0x2::sui::SUI", "balance": 42}


def test_import(fake_client, capsys):
    code, out = _run(capsys, "import", PHRASE)
    assert code == 0
    assert out["code"] == PHRASE
    assert out["accounts"][0]["derivation_path"] == "m/44'/784'/0'/0'/0'"


def test_history_empty(fake_client, capsys):
    assert _run(capsys, "history", OWNER) == (0, [])


def test_errors_reported_as_json(fake_client, capsys):
    code, out = _run(capsys, "import", "not a valid phrase")
    assert code == 1
    assert out == {"error": "Invalid seed phrase"}


def test_command_required():
    with pytest.raises(SystemExit):
        app.build_parser().parse_args([])


def test_coins(fake_client, capsys):
    code, out = _run(capsys, "coins", OWNER)
    assert code == 0
    assert [(c["id"], c["balance"], c["display"]) for c in out] == [
        ("0xc1", 30, "0.00000003 SUI"),
        ("0xc2", 12, "0.000000012 SUI"),
    ]


def test_use_saves_network(fake_client, capsys):
    code, out = _run(capsys, "use", "testnet")
    assert code == 0
    assert out["network"] == "testnet"
    assert load_settings() == {"network": "testnet"}

    code, out = _run(capsys, "use", "mainnet-beta")
    assert code == 1
    assert "Unknown network" in out["error"]
    assert load_settings() == {"network": "testnet"}
