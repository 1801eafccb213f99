"""
Sui Networks - Network configurations and endpoint resolution

Supports Sui Devnet, Testnet and a local validator.
"""

import os
from dataclasses import dataclass
from typing import Optional

# ============================================
# Network Configurations
# ============================================

@dataclass
class NetworkConfig:
    """Configuration for a Sui network."""
    name: str
    display_name: str
    fullnode_url: str
    faucet_url: str
    explorer_url: str
    is_testnet: bool
    native_symbol: str = "SUI"
    native_decimals: int = 9


NETWORKS = {
    "devnet": NetworkConfig(
        name="devnet",
        display_name="Sui Devnet",
        fullnode_url="https://fullnode.devnet.sui.io:443",
        faucet_url="https://faucet.devnet.sui.io/gas",
        explorer_url="https://explorer.sui.io",
        is_testnet=True,
    ),
    "testnet": NetworkConfig(
        name="testnet",
        display_name="Sui Testnet",
        fullnode_url="https://fullnode.testnet.sui.io:443",
        faucet_url="https://faucet.testnet.sui.io/gas",
        explorer_url="https://explorer.sui.io",
        is_testnet=True,
    ),
    "local": NetworkConfig(
        name="local",
        display_name="Local Validator",
        fullnode_url="http://127.0.0.1:9000",
        faucet_url="http://127.0.0.1:9123/gas",
        explorer_url="http://127.0.0.1:3000",
        is_testnet=True,
    ),
}

# Default network
DEFAULT_NETWORK = "devnet"

# Environment override for the configured network
NETWORK_ENV_VAR = "SUI_WALLET_NETWORK"

# Request timeout for JSON-RPC calls (seconds)
DEFAULT_REQUEST_TIMEOUT = 30


# ============================================
# Utility Functions
# ============================================

def get_network(name: str) -> Optional[NetworkConfig]:
    """Get network config by name."""
    return NETWORKS.get(name)


def resolve_network(settings: Optional[dict] = None,
                    name: Optional[str] = None) -> tuple[NetworkConfig, str, str]:
    """
    Resolve the active network and its endpoints.

    Precedence for the network name: explicit `name`, then the
    SUI_WALLET_NETWORK environment variable, then settings["network"],
    then DEFAULT_NETWORK. Custom endpoints come from settings["custom_rpcs"]
    and settings["custom_faucets"] (keyed by network name).

    Returns: (network, fullnode_url, faucet_url)
    """
    settings = settings or {}
    name = (
        name
        or os.environ.get(NETWORK_ENV_VAR, "").strip()
        or settings.get("network")
        or DEFAULT_NETWORK
    )
    network = get_network(name)
    if network is None:
        raise ValueError(f"Unknown network: '{name}'. Expected one of {sorted(NETWORKS)}")

    custom_rpcs = settings.get("custom_rpcs", {})
    custom_faucets = settings.get("custom_faucets", {})
    fullnode_url = custom_rpcs.get(network.name) or network.fullnode_url
    faucet_url = custom_faucets.get(network.name) or network.faucet_url
    return network, fullnode_url, faucet_url

