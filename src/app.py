"""
Sui Wallet - Command line client.

Entry point for the `sui-wallet` console script. Every command prints its
result as JSON.

Usage:
    sui-wallet create
    sui-wallet import "<seed phrase>"
    sui-wallet balance 0x... [--coin-type 0x2::sui::SUI]
    sui-wallet coins 0x...
    sui-wallet history 0x...
    sui-wallet nfts 0x...
    sui-wallet airdrop 0x...
    sui-wallet use testnet
"""

import argparse
import json
import logging
import sys
from typing import Optional

from errors import WalletError
from networks import resolve_network
from services import SUI_TYPE_ARG, WalletClient
from services.logging import configure_logging
from utils import load_settings, save_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sui-wallet", description="Sui wallet client")
    parser.add_argument("--network", help="Network name (devnet, testnet, local)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("create", help="Create a wallet with a new seed phrase")

    import_cmd = commands.add_parser("import", help="Discover the accounts of a seed phrase")
    import_cmd.add_argument("phrase")

    balance = commands.add_parser("balance", help="Total balance of a coin type")
    balance.add_argument("address")
    balance.add_argument("--coin-type", default=SUI_TYPE_ARG)

    coins = commands.add_parser("coins", help="Coin inventory with formatted balances")
    coins.add_argument("address")

    history = commands.add_parser("history", help="Classified transaction history")
    history.add_argument("address")

    nfts = commands.add_parser("nfts", help="NFTs owned by an address")
    nfts.add_argument("address")

    airdrop = commands.add_parser("airdrop", help="Request SUI from the faucet")
    airdrop.add_argument("address")

    use = commands.add_parser("use", help="Save the default network to settings")
    use.add_argument("name")

    return parser


def run(args: argparse.Namespace, client: WalletClient):
    """Run a parsed command and return its JSON-serializable result."""
    if args.command == "create":
        return client.create_wallet().to_dict()
    if args.command == "import":
        return client.import_wallet(args.phrase).to_dict()
    if args.command == "balance":
        return {
            "address": args.address,
            "coin_type": args.coin_type,
            "balance": client.get_balance(args.address, args.coin_type),
        }
    if args.command == "coins":
        return [
            dict(coin.to_dict(), display=coin.format_balance())
            for coin in client.get_custom_coins(args.address)
        ]
    if args.command == "history":
        return [entry.to_dict() for entry in client.get_transactions(args.address)]
    if args.command == "nfts":
        return client.get_nfts(args.address)
    if args.command == "airdrop":
        return client.airdrop(args.address)
    if args.command == "use":
        network, _, _ = resolve_network(name=args.name)
        settings = load_settings()
        settings["network"] = network.name
        save_settings(settings)
        return {"network": network.name, "fullnode_url": network.fullnode_url}
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point."""
    args = build_parser().parse_args(argv)
    settings = load_settings()

    # Configure logging before anything else
    level = logging.DEBUG if args.verbose else getattr(
        logging, str(settings.get("log_level", "WARNING")).upper(), logging.WARNING
    )
    configure_logging(level, settings.get("log_retention_days", 0))

    try:
        client = WalletClient(network=args.network, settings=settings)
        result = run(args, client)
    except (WalletError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(json.dumps({"error": str(e)}, indent=2))
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
