"""
We test network resolution, settings persistence and log cleanup
"""
import json
import os

import pytest

from networks import NETWORK_ENV_VAR, NETWORKS, resolve_network
from services import WalletClient
from services.logging import cleanup_old_logs, get_log_file_path
from utils import get_logs_dir, get_settings_path, load_settings, save_settings


@pytest.fixture(autouse=True)
def app_home(tmp_path, monkeypatch):
    monkeypatch.setenv("SUI_WALLET_HOME", str(tmp_path))
    monkeypatch.delenv(NETWORK_ENV_VAR, raising=False)
    return tmp_path


def test_default_network():
    network, fullnode, faucet = resolve_network()
    assert network.name == "devnet"
    assert fullnode == NETWORKS["devnet"].fullnode_url
    assert faucet == NETWORKS["devnet"].faucet_url


def test_network_precedence(monkeypatch):
    settings = {"network": "testnet"}
    assert resolve_network(settings)[0].name == "testnet"

    monkeypatch.setenv(NETWORK_ENV_VAR, "local")
    assert resolve_network(settings)[0].name == "local"
    assert resolve_network(settings, "devnet")[0].name == "devnet"


def test_custom_endpoints():
    settings = {
        "network": "local",
        "custom_rpcs": {"local": "http://10.0.0.2:9000"},
        "custom_faucets": {"local": "http://10.0.0.2:9123/gas"},
    }
    _, fullnode, faucet = resolve_network(settings)
    assert fullnode == "http://10.0.0.2:9000"
    assert faucet == "http://10.0.0.2:9123/gas"


def test_unknown_network():
    with pytest.raises(ValueError, match="Unknown network"):
        resolve_network(name="mainnet-beta")


def test_client_uses_resolved_endpoints():
    client = WalletClient(network="local", settings={"request_timeout": 3, "max_workers": 2})
    assert client.provider.endpoint == NETWORKS["local"].fullnode_url
    assert client.provider.faucet_url == NETWORKS["local"].faucet_url
    assert client.provider.timeout == 3
    assert client.max_workers == 2

    client = WalletClient(node_url="http://node", faucet_url="http://faucet")
    assert (client.provider.endpoint, client.provider.faucet_url) == ("http://node", "http://faucet")


def test_settings_roundtrip(app_home):
    assert load_settings() == {}
    save_settings({"network": "testnet"})
    assert get_settings_path().parent == app_home
    assert load_settings() == {"network": "testnet"}


def test_invalid_settings_ignored():
    get_settings_path().write_text("{not json")
    assert load_settings() == {}
    get_settings_path().write_text(json.dumps(["a list"]))
    assert load_settings() == {}


def test_cleanup_old_logs():
    old = get_logs_dir() / "sui-wallet-2020-01-01.log"
    old.write_text("old\n")
    today = get_log_file_path()
    today.write_text("today\n")
    (get_logs_dir() / "sui-wallet-notes.log").write_text("keep\n")

    assert cleanup_old_logs(7) == 1
    assert not old.exists()
    assert today.exists()
    assert os.path.exists(get_logs_dir() / "sui-wallet-notes.log")
