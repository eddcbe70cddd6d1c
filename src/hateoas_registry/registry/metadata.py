"""
MetadataRegistry - the six resource metadata tables behind one injectable object.

Construction order matters: the normalization table registers denormalized
classes into the type table, so the type table is built first.

Usage:
    registry = MetadataRegistry()
    registry.register_link(Item, "bundles", Bundle, is_list=True)
    registry.link_descriptor(Item, "bundles").link_name   # "bundles"

Application code normally goes through get_registry(), the process-wide
instance that the declarative helpers in `decorators` populate at import time.
"""

import threading
from typing import Any, Dict, List, Optional, Union

from hateoas_registry.registry.data_services import DataServiceRegistry
from hateoas_registry.registry.descriptors import LinkDescriptor, RelationshipDescriptor, ResolvedLinkDescriptor
from hateoas_registry.registry.links import LinkRegistry
from hateoas_registry.registry.normalization import NormalizationRegistry
from hateoas_registry.registry.relationships import RelationshipRegistry
from hateoas_registry.registry.resolved_links import ResolvedLinkRegistry
from hateoas_registry.registry.type_registry import TypeRegistry
from hateoas_registry.settings import get_settings
from hateoas_registry.shared.resource_type import ResourceType


class MetadataRegistry:

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.types = TypeRegistry(strict=strict)
        self.normalization = NormalizationRegistry(self.types, strict=strict)
        self.relationships = RelationshipRegistry(strict=strict)
        self.links = LinkRegistry(strict=strict)
        self.resolved_links = ResolvedLinkRegistry(strict=strict)
        self.data_services = DataServiceRegistry()

    # ---- type registry ----
    def register_type(self, resource_type: Union[str, ResourceType], cls: type) -> None:
        self.types.register_type(resource_type, cls)

    def class_for_type(self, resource_type: Union[str, ResourceType]) -> Optional[type]:
        return self.types.class_for_type(resource_type)

    # ---- normalization registry ----
    def register_normalization_mapping(self, normalized_cls: type, denormalized_cls: type) -> None:
        self.normalization.register_mapping(normalized_cls, denormalized_cls)

    def denormalized_class_for(self, normalized_cls: type) -> Optional[type]:
        return self.normalization.denormalized_class_for(normalized_cls)

    def normalized_class_for(self, denormalized_cls: type) -> Optional[type]:
        return self.normalization.normalized_class_for(denormalized_cls)

    # ---- relationship registry ----
    def register_relationship(self, owner: type, name: str, target_class: type,
                              is_list: bool = False, should_auto_resolve: bool = True) -> None:
        self.relationships.register_relationship(owner, name, target_class, is_list, should_auto_resolve)

    def relationship_descriptor(self, owner: type, name: str) -> Optional[RelationshipDescriptor]:
        return self.relationships.relationship_descriptor(owner, name)

    def relationship_properties(self, owner: type) -> Optional[List[str]]:
        return self.relationships.relationship_properties(owner)

    # ---- link registry ----
    def register_link(self, owner: type, name: str, target_class: type,
                      is_list: bool = False, link_name: Optional[str] = None) -> None:
        self.links.register_link(owner, name, target_class, is_list, link_name)

    def link_descriptors(self, owner: type) -> Optional[Dict[str, LinkDescriptor]]:
        return self.links.link_descriptors(owner)

    def link_descriptor(self, owner: type, name: str) -> Optional[LinkDescriptor]:
        return self.links.link_descriptor(owner, name)

    # ---- resolved-link registry ----
    def register_resolved_link(self, owner: type, name: str, service_class: type,
                               method_name: Optional[str] = None, *params: Any) -> None:
        self.resolved_links.register_resolved_link(owner, name, service_class, method_name, *params)

    def resolved_link_descriptor(self, owner: type, name: str) -> Optional[ResolvedLinkDescriptor]:
        return self.resolved_links.resolved_link_descriptor(owner, name)

    def resolved_link_properties(self, owner: type) -> Optional[List[str]]:
        return self.resolved_links.resolved_link_properties(owner)

    # ---- data-service registry ----
    def register_data_service(self, domain_class: Optional[type], service_class: type) -> None:
        self.data_services.register_data_service(domain_class, service_class)

    def data_service_for(self, domain_class: type) -> Optional[type]:
        return self.data_services.data_service_for(domain_class)

    def describe(self) -> Dict[str, Any]:
        """Plain-data dump of every table, keyed by qualified class names."""
        def name(cls: Any) -> str:
            return f"{cls.__module__}.{cls.__qualname__}" if isinstance(cls, type) else repr(cls)

        owners = set(self.relationships.owners()) | set(self.links.owners()) | set(self.resolved_links.owners())
        classes: Dict[str, Any] = {}
        for owner in sorted(owners, key=name):
            entry: Dict[str, Any] = {}
            links = self.link_descriptors(owner)
            if links:
                entry["links"] = {
                    prop: {"target": name(d.target_class), "is_list": d.is_list, "link_name": d.link_name}
                    for prop, d in links.items()
                }
            relationships = self.relationship_properties(owner)
            if relationships:
                entry["relationships"] = {}
                for prop in relationships:
                    d = self.relationship_descriptor(owner, prop)
                    entry["relationships"][prop] = {
                        "target": name(d.target_class),
                        "is_list": d.is_list,
                        "should_auto_resolve": d.should_auto_resolve,
                    }
            resolved = self.resolved_link_properties(owner)
            if resolved:
                entry["resolved_links"] = {}
                for prop in resolved:
                    d = self.resolved_link_descriptor(owner, prop)
                    entry["resolved_links"][prop] = {
                        "service": name(d.service_class),
                        "method": d.method_name,
                        "params": [repr(p) for p in d.params],
                    }
            classes[name(owner)] = entry

        return {
            "types": {key: name(cls) for key, cls in sorted(self.types.types().items())},
            "normalization": {name(n): name(d) for n, d in self.normalization.mappings().items()},
            "data_services": {name(d): name(s) for d, s in self.data_services.services().items()},
            "classes": classes,
        }


# Global singleton instance
_default_registry: Optional[MetadataRegistry] = None
_default_lock = threading.Lock()


def get_registry() -> MetadataRegistry:
    """Process-wide registry, created on first use with strictness taken from settings."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = MetadataRegistry(strict=get_settings().strict_registration)
    return _default_registry
