"""
NFT Client - Recognizes NFT wrapper objects and resolves their display data.

An NFT wrapper has the type `<pkg>::nft::Nft<<pkg>::<module>::<Class>>` and
owns a bag (dynamic-field collection). The bag may hold a UrlDomain record
(url) and a DisplayDomain record (name, description); either may be
missing.
"""

import logging
import re
from dataclasses import replace
from typing import Optional, TYPE_CHECKING

from models import (
    DomainKind,
    DomainMatch,
    MoveCallTransaction,
    NO_MATCH,
    NftRecord,
    TransferObjectTransaction,
)
from .fanout import fan_out, DEFAULT_MAX_WORKERS

if TYPE_CHECKING:
    from .provider import Provider
    from .signing import RawSigner

logger = logging.getLogger(__name__)


DEFAULT_NFT_IMAGE = "ipfs://QmZPWWy5Si54R3d26toaqRiqvCH7HkGdXkxwUgCm2oKKM2?filename=img-sq-01.png"
DEFAULT_NFT_NAME = "Example NFT"
DEFAULT_NFT_DESCRIPTION = "An NFT created by Sui Wallet"

# Gas budget for NFT mint and transfer calls
NFT_GAS_BUDGET = 10000

NFT_REGEX = re.compile(
    r"(0x[a-f0-9]{39,40})::nft::Nft<0x[a-f0-9]{39,40}::([a-zA-Z]{1,})::([a-zA-Z]{1,})>"
)
URL_DOMAIN_REGEX = re.compile(
    r"0x2::dynamic_field::Field<(0x[a-f0-9]{39,40})::utils::Marker<(0x[a-f0-9]{39,40})"
    r"::display::UrlDomain>, (0x[a-f0-9]{39,40})::display::UrlDomain>"
)
DISPLAY_DOMAIN_REGEX = re.compile(
    r"0x2::dynamic_field::Field<(0x[a-f0-9]{39,40})::utils::Marker<(0x[a-f0-9]{39,40})"
    r"::display::DisplayDomain>, (0x[a-f0-9]{39,40})::display::DisplayDomain>"
)

_TEMPLATES = (
    (DomainKind.NFT, NFT_REGEX),
    (DomainKind.URL_DOMAIN, URL_DOMAIN_REGEX),
    (DomainKind.DISPLAY_DOMAIN, DISPLAY_DOMAIN_REGEX),
)


# ============================================
# Type classification
# ============================================

def classify_type(type_string: Optional[str]) -> DomainMatch:
    """Match an object type string against the known templates."""
    if not type_string:
        return NO_MATCH
    for kind, regex in _TEMPLATES:
        match = regex.search(type_string)
        if match:
            return DomainMatch(kind, match.groups())
    return NO_MATCH


def _object_data(response) -> Optional[dict]:
    """details.data of an object response, when it has one."""
    if not isinstance(response, dict):
        return None
    details = response.get("details")
    if not isinstance(details, dict):
        return None
    data = details.get("data")
    return data if isinstance(data, dict) else None


def parse_nft(fields: dict, sui_object: dict, response: dict) -> Optional[NftRecord]:
    """
    Build an NftRecord from an object response.

    Args:
        fields: The object's Move fields
        sui_object: The response's details
        response: The full object response

    Returns:
        NftRecord, or None if the type is not an NFT wrapper
    """
    data = sui_object.get("data") or {}
    match = classify_type(data.get("type"))
    if match.kind is not DomainKind.NFT:
        return None

    bag_id = (((fields.get("bag") or {}).get("fields") or {}).get("id") or {}).get("id")
    if not bag_id:
        logger.debug(f"NFT {sui_object.get('reference', {}).get('objectId')} has no bag")
        return None

    package_object_id, package_module, class_name = match.groups
    return NftRecord(
        id=sui_object.get("reference", {}).get("objectId"),
        logical_owner=fields.get("logical_owner"),
        bag_id=bag_id,
        owner=sui_object.get("owner"),
        data_type=data.get("dataType"),
        package_object_id=package_object_id,
        package_module=package_module,
        package_module_class_name=class_name,
        raw_response=response,
    )


def _domain_value(response: dict) -> dict:
    data = _object_data(response) or {}
    value = (data.get("fields") or {}).get("value") or {}
    return value.get("fields") or {}


def parse_domains(domain_objects: list[dict]) -> dict:
    """
    Fold bag contents into partial descriptive fields.

    The first UrlDomain record gives `url`; the first DisplayDomain record
    gives `name` and `description`. Missing records leave keys absent.
    """
    url_domain = None
    display_domain = None
    for obj in domain_objects:
        kind = classify_type((_object_data(obj) or {}).get("type")).kind
        if kind is DomainKind.URL_DOMAIN and url_domain is None:
            url_domain = obj
        elif kind is DomainKind.DISPLAY_DOMAIN and display_domain is None:
            display_domain = obj

    result = {}
    if url_domain is not None:
        value = _domain_value(url_domain)
        if "url" in value:
            result["url"] = value["url"]
    if display_domain is not None:
        value = _domain_value(display_domain)
        for key in ("name", "description"):
            if key in value:
                result[key] = value[key]
    return result


# ============================================
# Client
# ============================================

class NftClient:
    """Resolves NFT wrappers and their bag contents through a provider."""

    def __init__(self, provider: "Provider", max_workers: int = DEFAULT_MAX_WORKERS):
        self.provider = provider
        self.max_workers = max_workers

    def parse_objects(self, objects: list[dict]) -> list[NftRecord]:
        """Existing NFT wrappers among object responses."""
        nfts = []
        for obj in objects:
            if obj.get("status") != "Exists":
                continue
            data = _object_data(obj)
            if data is None or "type" not in data:
                continue
            nft = parse_nft(data.get("fields") or {}, obj["details"], obj)
            if nft is not None:
                nfts.append(nft)
        return nfts

    def fetch_and_parse_objects_by_id(self, ids: list[str]) -> list[NftRecord]:
        if not ids:
            return []
        return self.parse_objects(self.provider.get_object_batch(ids))

    def get_bag_content(self, bag_id: str) -> list[dict]:
        """Objects held by a bag, fetched in one batch."""
        bag_objects = self.provider.get_objects_owned_by_object(bag_id)
        return self.provider.get_object_batch([obj["objectId"] for obj in bag_objects])

    def get_nfts_by_id(self, object_ids: Optional[list[str]] = None,
                       objects: Optional[list[dict]] = None) -> list[NftRecord]:
        """
        NFT records with descriptive fields resolved from their bags.

        Bags are resolved concurrently and joined back by NFT id.

        Raises:
            RemoteQueryFailed: an object or bag lookup failed
        """
        if object_ids is not None:
            nfts = self.fetch_and_parse_objects_by_id(object_ids)
        elif objects is not None:
            nfts = self.parse_objects(objects)
        else:
            nfts = []

        bag_ids = {nft.id: nft.bag_id for nft in nfts}
        contents = fan_out(
            lambda nft_id: parse_domains(self.get_bag_content(bag_ids[nft_id])),
            bag_ids,
            max_workers=self.max_workers,
            description="bag lookup",
        )
        return [replace(nft, descriptive_fields=contents.get(nft.id, {})) for nft in nfts]

    # ============================================
    # Transactions
    # ============================================

    @staticmethod
    def mint_example_nft(signer: "RawSigner", name: Optional[str] = None,
                         description: Optional[str] = None,
                         image_url: Optional[str] = None) -> dict:
        """Mint a devnet example NFT. The signer must own enough gas."""
        return signer.execute_move_call(MoveCallTransaction(
            package_object_id="0x2",
            module="devnet_nft",
            function="mint",
            type_arguments=[],
            arguments=[
                name or DEFAULT_NFT_NAME,
                description or DEFAULT_NFT_DESCRIPTION,
                image_url or DEFAULT_NFT_IMAGE,
            ],
            gas_budget=NFT_GAS_BUDGET,
        ))

    @staticmethod
    def transfer_nft(signer: "RawSigner", nft_id: str, recipient: str,
                     transfer_cost: Optional[int] = None) -> dict:
        return signer.transfer_object(TransferObjectTransaction(
            object_id=nft_id,
            recipient=recipient,
            gas_budget=transfer_cost or NFT_GAS_BUDGET,
        ))
