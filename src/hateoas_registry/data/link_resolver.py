"""
LinkResolver - wires an object's links, relationships and resolved links as lazy handles.

Metadata is gathered over the object's class hierarchy and, when the class
has a normalized counterpart, over that hierarchy too. Entries declared on a
subclass win over the same property on a base class.
"""

import logging
from functools import partial
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from hateoas_registry.cache.lazy import LazyResource
from hateoas_registry.registry.descriptors import LinkDescriptor, RelationshipDescriptor, ResolvedLinkDescriptor
from hateoas_registry.registry.metadata import MetadataRegistry
from hateoas_registry.shared.hal import link_href

if TYPE_CHECKING:
    from hateoas_registry.data.service_locator import ServiceLocator

logger = logging.getLogger(__name__)


class LinkResolver:

    def __init__(self, locator: "ServiceLocator", registry: MetadataRegistry):
        self.locator = locator
        self.registry = registry

    def _owners(self, cls: type) -> List[type]:
        owners = list(cls.__mro__)
        normalized_cls = self.registry.normalized_class_for(cls)
        if normalized_cls is not None:
            owners.extend(normalized_cls.__mro__)
        return owners

    def links_for(self, cls: type) -> Dict[str, LinkDescriptor]:
        merged: Dict[str, LinkDescriptor] = {}
        for owner in reversed(self._owners(cls)):
            merged.update(self.registry.link_descriptors(owner) or {})
        return merged

    def relationships_for(self, cls: type) -> Dict[str, RelationshipDescriptor]:
        merged: Dict[str, RelationshipDescriptor] = {}
        for owner in reversed(self._owners(cls)):
            for name in self.registry.relationship_properties(owner) or []:
                merged[name] = self.registry.relationship_descriptor(owner, name)
        return merged

    def resolved_links_for(self, cls: type) -> Dict[str, ResolvedLinkDescriptor]:
        merged: Dict[str, ResolvedLinkDescriptor] = {}
        for owner in reversed(self._owners(cls)):
            for name in self.registry.resolved_link_properties(owner) or []:
                merged[name] = self.registry.resolved_link_descriptor(owner, name)
        return merged

    def _data_service(self, target_class: type) -> Optional[Any]:
        try:
            return self.locator.service_for(target_class)
        except LookupError as e:
            logger.warning(f"{e}, leaving property unresolved")
            return None

    def resolve(self, obj: Any, *names: str) -> Any:
        """
        Replace unresolved properties of `obj` with LazyResource handles.

        With no `names`, every link and resolved link is wired, plus the
        relationships marked `should_auto_resolve`. Named relationships are
        wired regardless of that flag. Properties that already hold a value
        other than an href are left alone.
        """
        wanted = set(names) or None
        cls = type(obj)

        for name, descriptor in self.links_for(cls).items():
            if wanted is not None and name not in wanted:
                continue
            if getattr(obj, name, None) is not None:
                continue
            href = link_href(getattr(obj, "_links", {}), descriptor.link_name)
            if href is None:
                logger.warning(f"{cls.__qualname__}.{name}: no '{descriptor.link_name}' link in {obj!r}")
                continue
            service = self._data_service(descriptor.target_class)
            if service is None:
                continue
            fetch = service.find_all_by_href if descriptor.is_list else service.find_by_href
            setattr(obj, name, LazyResource(partial(fetch, href), href=href))

        for name, descriptor in self.relationships_for(cls).items():
            if wanted is None and not descriptor.should_auto_resolve:
                continue
            if wanted is not None and name not in wanted:
                continue
            handle = self._relationship_handle(getattr(obj, name, None), descriptor)
            if handle is not None:
                setattr(obj, name, handle)

        for name, descriptor in self.resolved_links_for(cls).items():
            if wanted is not None and name not in wanted:
                continue
            if getattr(obj, name, None) is not None:
                continue
            service = self.locator.instance_of(descriptor.service_class)
            method = getattr(service, descriptor.method_name or "find_by_href")
            setattr(obj, name, LazyResource(partial(method, *descriptor.params)))

        return obj

    def _relationship_handle(self, value: Any, descriptor: RelationshipDescriptor) -> Optional[LazyResource]:
        if isinstance(value, str):
            service = self._data_service(descriptor.target_class)
            if service is None:
                return None
            fetch = service.find_all_by_href if descriptor.is_list else service.find_by_href
            return LazyResource(partial(fetch, value), href=value)
        if descriptor.is_list and isinstance(value, list) and value and all(isinstance(v, str) for v in value):
            service = self._data_service(descriptor.target_class)
            if service is None:
                return None
            hrefs = list(value)
            return LazyResource(lambda: [service.find_by_href(h) for h in hrefs])
        return None
