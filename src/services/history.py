"""
History Classifier - Turns an address's transactions into display events.

Each successful transaction is reduced to one dominant Classification and a
signed balance delta:

1. Coin balance changes received by the address (Airdrop / Received)
2. Coin balance changes sent by the address (Sent)
3. Devnet NFT transfers override 1-2 (NFT Received / NFT Sent, +1 / -1)
4. Devnet NFT mints override everything (NFT Minted, +1)

Failed transactions are left out of the history.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING

from models import (
    Classification,
    HistoryEntry,
    KIND_RECEIVE,
    KIND_SEND,
    LABEL_AIRDROP,
    LABEL_RECEIVED,
    LABEL_SENT,
    LABEL_NFT_RECEIVED,
    LABEL_NFT_SENT,
    LABEL_NFT_MINTED,
)
from .fanout import fan_out, DEFAULT_MAX_WORKERS

if TYPE_CHECKING:
    from .provider import Provider

logger = logging.getLogger(__name__)


# Devnet faucet address
AIRDROP_SENDER = "0xc4173a804406a365e69dfb297d4eaaf002546ebd"

DEVNET_NFT_TYPE = "0x2::devnet_nft::DevNetNFT"
MINT_NFT_EVENT_TYPE = "0x2::devnet_nft::MintNFTEvent"

# Balance change types that never count toward the total
GAS_CHANGE_TYPE = "Gas"
PAY_CHANGE_TYPE = "Pay"


# ============================================
# Pure helpers
# ============================================

def format_date(timestamp_ms: Optional[int]) -> str:
    """Calendar date of a millisecond timestamp (UTC), e.g. '18 October 2026'."""
    dt = datetime.fromtimestamp((timestamp_ms or 0) / 1000, tz=timezone.utc)
    return f"{dt.day} {dt.strftime('%B %Y')}"


def coin_suffix(coin_type: Optional[str]) -> str:
    """' SUI' for '0x2::sui::SUI'."""
    parts = (coin_type or "").split("::")
    return f" {parts[2]}" if len(parts) > 2 else ""


def _owner_address(owner) -> Optional[str]:
    if isinstance(owner, dict):
        return owner.get("AddressOwner")
    return None


def classify_balance_changes(address: str, events: list[dict]) -> tuple[Classification, int]:
    """
    Classify the coinBalanceChange events of one transaction.

    Receives are examined before sends. The first qualifying event fixes
    the label; every qualifying event adds its amount to the total.
    """
    changes = [e["coinBalanceChange"] for e in events if e.get("coinBalanceChange")]
    classification = Classification()
    total = 0

    for change in changes:
        if (_owner_address(change.get("owner")) == address
                and change.get("changeType") != GAS_CHANGE_TYPE
                and int(change.get("amount", 0)) >= 0):
            total += int(change.get("amount", 0))
            if not classification.is_set:
                sender = change.get("sender")
                classification = Classification(
                    kind=KIND_RECEIVE,
                    label=LABEL_AIRDROP if sender == AIRDROP_SENDER else LABEL_RECEIVED,
                    from_address=sender,
                    to_address=_owner_address(change.get("owner")),
                    asset_type=change.get("coinType", ""),
                    suffix=coin_suffix(change.get("coinType")),
                )

    for change in changes:
        if (change.get("sender") == address
                and change.get("changeType") not in (GAS_CHANGE_TYPE, PAY_CHANGE_TYPE)):
            total += int(change.get("amount", 0))
            if not classification.is_set:
                classification = Classification(
                    kind=KIND_SEND,
                    label=LABEL_SENT,
                    from_address=change.get("sender"),
                    to_address=_owner_address(change.get("owner")),
                    asset_type=change.get("coinType", ""),
                    suffix=coin_suffix(change.get("coinType")),
                )

    return classification, total


def nft_transfer_events(events: list[dict]) -> list[dict]:
    """transferObject payloads that move a devnet NFT."""
    return [
        e["transferObject"] for e in events
        if e.get("transferObject") and e["transferObject"].get("objectType") == DEVNET_NFT_TYPE
    ]


def nft_mint_events(events: list[dict]) -> list[dict]:
    """moveEvent payloads that mint a devnet NFT."""
    return [
        e["moveEvent"] for e in events
        if e.get("moveEvent") and e["moveEvent"].get("type") == MINT_NFT_EVENT_TYPE
    ]


def _nft_name(details) -> str:
    if not isinstance(details, dict):
        return ""
    fields = (details.get("data") or {}).get("fields") or {}
    return f" {fields.get('name')}"


def apply_nft_events(address: str, classification: Classification, total: int,
                     transfers: list[dict], mints: list[dict],
                     details: dict[str, dict]) -> tuple[Classification, int]:
    """
    Override a balance classification with NFT events.

    Events are applied in order, so the last matching transfer wins, and
    any mint then wins over transfers. `details` maps object id to the
    object's details.
    """
    for transfer in transfers:
        received = _owner_address(transfer.get("recipient")) == address
        nft_details = details.get(transfer.get("objectId"))
        classification = Classification(
            kind=KIND_RECEIVE if received else KIND_SEND,
            label=LABEL_NFT_RECEIVED if received else LABEL_NFT_SENT,
            from_address=transfer.get("sender"),
            to_address=_owner_address(transfer.get("recipient")),
            asset_type=transfer.get("objectType", ""),
            suffix=_nft_name(nft_details),
            nft_data=nft_details,
        )
        total = 1 if received else -1

    for mint in mints:
        nft_details = details.get((mint.get("fields") or {}).get("object_id"))
        classification = Classification(
            kind=KIND_RECEIVE,
            label=LABEL_NFT_MINTED,
            asset_type=mint.get("type", ""),
            suffix=_nft_name(nft_details),
            nft_data=nft_details,
        )
        total = 1

    return classification, total


def is_successful(transaction: dict) -> bool:
    effects = transaction.get("effects") or {}
    return (effects.get("status") or {}).get("status") == "success"


# ============================================
# Classifier
# ============================================

class HistoryClassifier:
    """Builds the classified transaction history of an address."""

    def __init__(self, provider: "Provider", max_workers: int = DEFAULT_MAX_WORKERS):
        self.provider = provider
        self.max_workers = max_workers

    def _fetch_details(self, object_ids: list[str]) -> dict[str, dict]:
        responses = fan_out(
            self.provider.get_object, object_ids,
            max_workers=self.max_workers, description="NFT detail lookup",
        )
        return {object_id: response.get("details") for object_id, response in responses.items()}

    def classify_transaction(self, address: str, digest: str,
                             transaction: dict) -> Optional[HistoryEntry]:
        """Classify one transaction; None if it did not succeed."""
        if not is_successful(transaction):
            logger.debug(f"Skipping failed transaction {digest}")
            return None

        events = transaction["effects"].get("events") or []
        classification, total = classify_balance_changes(address, events)

        transfers = nft_transfer_events(events)
        mints = nft_mint_events(events)
        object_ids = [t.get("objectId") for t in transfers]
        object_ids += [(m.get("fields") or {}).get("object_id") for m in mints]
        details = self._fetch_details([i for i in object_ids if i]) if object_ids else {}

        classification, total = apply_nft_events(
            address, classification, total, transfers, mints, details
        )

        timestamp_ms = transaction.get("timestamp_ms") or 0
        return HistoryEntry(
            digest=digest,
            timestamp_ms=timestamp_ms,
            date=format_date(timestamp_ms),
            total_balance_change=total,
            classification=classification,
            raw=transaction,
        )

    def get_transactions(self, address: str) -> list[HistoryEntry]:
        """
        Classified successful transactions of `address`, newest first.

        Transactions with equal timestamps keep the order in which the
        provider listed their digests.

        Raises:
            RemoteQueryFailed: a digest listing or lookup failed
        """
        digests = list(dict.fromkeys(self.provider.get_transactions_for_address(address)))

        def fetch(digest: str) -> Optional[HistoryEntry]:
            transaction = self.provider.get_transaction_with_effects(digest)
            return self.classify_transaction(address, digest, transaction)

        results = fan_out(
            fetch, digests, max_workers=self.max_workers, description="transaction lookup"
        )
        entries = [results[digest] for digest in digests if results[digest] is not None]
        entries = sorted(entries, key=lambda entry: entry.timestamp_ms, reverse=True)

        logger.info(f"Classified {len(entries)} of {len(digests)} transaction(s) for {address}")
        return entries
