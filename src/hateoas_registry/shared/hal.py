"""
HAL resource model shared by the decoder, the object cache and the resolver.

A denormalized domain class subclasses HALResource and declares a class level
`type`; its normalized counterpart subclasses NormalizedObject and is paired
with it through `@maps_to`.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Union

from hateoas_registry.shared.resource_type import ResourceType


@dataclass(frozen=True)
class HALLink:
    href: str
    templated: bool = False
    name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "HALLink":
        return cls(
            href=payload["href"],
            templated=bool(payload.get("templated", False)),
            name=payload.get("name"),
        )


LinkValue = Union[HALLink, List[HALLink]]


def parse_links(raw: Optional[Dict[str, Any]]) -> Dict[str, LinkValue]:
    """Parse a `_links` table. Entries may be a single link object or a list of them."""
    links: Dict[str, LinkValue] = {}
    for name, value in (raw or {}).items():
        if isinstance(value, list):
            links[name] = [HALLink.from_payload(v) for v in value]
        else:
            links[name] = HALLink.from_payload(value)
    return links


def link_href(links: Dict[str, LinkValue], name: str) -> Optional[str]:
    """Return the href for a named link, or None if absent. List-valued links use their first entry."""
    value = links.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return value[0].href if value else None
    return value.href


class TypedObject:
    type: ClassVar[Optional[ResourceType]] = None


class HALResource(TypedObject):
    """Rich (denormalized) representation of a resource with a `_links` table."""

    def __init__(self, _links: Optional[Dict[str, LinkValue]] = None, **fields: Any):
        self._links: Dict[str, LinkValue] = dict(_links or {})
        for name, value in fields.items():
            setattr(self, name, value)

    @property
    def self_link(self) -> Optional[str]:
        return link_href(self._links, "self")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(self_link={self.self_link!r})"


class NormalizedObject(TypedObject):
    """
    Cache-storage representation of a resource.

    Link and relationship properties hold href strings (or lists of hrefs)
    instead of resolved objects.
    """

    def __init__(self, _links: Optional[Dict[str, LinkValue]] = None, **fields: Any):
        self._links: Dict[str, LinkValue] = dict(_links or {})
        for name, value in fields.items():
            setattr(self, name, value)

    @property
    def self_link(self) -> Optional[str]:
        return link_href(self._links, "self")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(self_link={self.self_link!r})"


@dataclass
class PaginatedList:
    """One page of a collection response."""
    page: List[Any] = field(default_factory=list)
    size: int = 0
    total_elements: int = 0
    total_pages: int = 0
    current_page: int = 0
    self_link: Optional[str] = None

    def __iter__(self) -> Iterator[Any]:
        return iter(self.page)

    def __len__(self) -> int:
        return len(self.page)


def payload_fields(obj: Any) -> Dict[str, Any]:
    """Instance attributes of a resource or cache entry, without its `_links` table."""
    return {k: v for k, v in vars(obj).items() if k != "_links"}
