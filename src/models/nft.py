"""
NFT models.

NftRecord is an object recognised as an NFT wrapper; its descriptive
fields (url, name, description) are resolved from the dynamic-field bag it
owns and may be partially or fully absent.

DomainMatch is the result of classifying an object type string against
the known templates.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class DomainKind(Enum):
    NO_MATCH = "no_match"
    NFT = "nft"
    URL_DOMAIN = "url_domain"
    DISPLAY_DOMAIN = "display_domain"


@dataclass(frozen=True)
class DomainMatch:
    """Classification of an object type string."""
    kind: DomainKind
    groups: tuple = ()

    @property
    def matched(self) -> bool:
        return self.kind is not DomainKind.NO_MATCH


NO_MATCH = DomainMatch(DomainKind.NO_MATCH)


@dataclass
class NftRecord:
    """An NFT wrapper object and its resolved descriptive fields."""
    id: str
    logical_owner: str
    bag_id: str
    owner: Any = None                     # Owner info as returned by the node
    data_type: Optional[str] = None       # "moveObject"
    package_object_id: Optional[str] = None
    package_module: Optional[str] = None
    package_module_class_name: Optional[str] = None
    descriptive_fields: dict = field(default_factory=dict)  # partial {url, name, description}
    raw_response: dict = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "logical_owner": self.logical_owner,
            "bag_id": self.bag_id,
            "owner": self.owner,
            "package_object_id": self.package_object_id,
            "package_module": self.package_module,
            "package_module_class_name": self.package_module_class_name,
            "fields": dict(self.descriptive_fields),
        }
