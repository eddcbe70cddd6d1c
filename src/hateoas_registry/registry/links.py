from typing import Dict, Optional

from hateoas_registry.registry.descriptors import LinkDescriptor
from hateoas_registry.registry.property_table import PropertyTable


class LinkRegistry(PropertyTable[LinkDescriptor]):
    """
    Per-class table of property name -> HAL link to follow for that property.

    Link names are not checked against any payload here; a name missing from
    an object's `_links` only shows up when the resolver tries to follow it.
    """

    kind = "link"

    def register_link(
        self,
        owner: type,
        name: str,
        target_class: type,
        is_list: bool = False,
        link_name: Optional[str] = None,
    ) -> None:
        if owner is None or not name:
            return
        self._store(owner, name, LinkDescriptor(target_class, is_list, link_name or name))

    def link_descriptors(self, owner: type) -> Optional[Dict[str, LinkDescriptor]]:
        names = self._property_names(owner)
        if names is None:
            return None
        return {name: self._descriptors[(owner, name)] for name in names}

    def link_descriptor(self, owner: type, name: str) -> Optional[LinkDescriptor]:
        return self._descriptor(owner, name)
