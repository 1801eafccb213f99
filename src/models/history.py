"""
Transaction history models.

A HistoryEntry is a successful transaction classified into a single
human-readable event, with the signed balance delta it caused.

Classification kinds and labels:
- Receive: Airdrop | Received | NFT Received | NFT Minted
- Send: Sent | NFT Sent
"""

from dataclasses import dataclass, asdict, field
from typing import Optional

KIND_RECEIVE = "Receive"
KIND_SEND = "Send"

LABEL_AIRDROP = "Airdrop"
LABEL_RECEIVED = "Received"
LABEL_SENT = "Sent"
LABEL_NFT_RECEIVED = "NFT Received"
LABEL_NFT_SENT = "NFT Sent"
LABEL_NFT_MINTED = "NFT Minted"


@dataclass
class Classification:
    """The dominant event of a transaction, from the viewpoint of one address."""
    kind: str = ""                        # "" until an event matches
    label: str = ""
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    asset_type: str = ""                  # coin type or object/event type
    suffix: str = ""                      # " SUI", " <nft name>"
    nft_data: Optional[dict] = None       # object details for NFT events

    @property
    def is_set(self) -> bool:
        return bool(self.kind)

    def describe(self) -> str:
        """Short display text, e.g. 'Received SUI'."""
        return f"{self.label}{self.suffix}".strip()

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class HistoryEntry:
    """A classified, successful transaction."""
    digest: str
    timestamp_ms: int
    date: str                              # e.g. "18 October 2026"
    total_balance_change: int
    classification: Classification
    raw: dict = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        return {
            "digest": self.digest,
            "timestamp_ms": self.timestamp_ms,
            "date": self.date,
            "total_balance_change": self.total_balance_change,
            "classification": self.classification.to_dict(),
        }
