from dataclasses import dataclass
from typing import Any, Optional, Tuple

from hateoas_registry.shared.resource_type import ResourceType


@dataclass(frozen=True)
class RelationshipDescriptor:
    target_class: type
    is_list: bool = False
    should_auto_resolve: bool = True

    @property
    def resource_type(self) -> Optional[ResourceType]:
        return getattr(self.target_class, "type", None)


@dataclass(frozen=True)
class LinkDescriptor:
    target_class: type
    is_list: bool = False
    link_name: str = ""


@dataclass(frozen=True)
class ResolvedLinkDescriptor:
    """How to compute a property by calling `service_class.method_name(*params)`."""
    service_class: type
    method_name: Optional[str] = None
    params: Tuple[Any, ...] = ()
