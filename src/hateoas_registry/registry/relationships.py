from typing import List, Optional

from hateoas_registry.registry.descriptors import RelationshipDescriptor
from hateoas_registry.registry.property_table import PropertyTable


class RelationshipRegistry(PropertyTable[RelationshipDescriptor]):
    """
    Which properties of a class are relationships to other cacheable resources.

    The name list lets a generic resolver enumerate every relationship of an
    arbitrary object, then dispatch on each property's descriptor.
    """

    kind = "relationship"

    def register_relationship(
        self,
        owner: type,
        name: str,
        target_class: type,
        is_list: bool = False,
        should_auto_resolve: bool = True,
    ) -> None:
        if owner is None or not name:
            return
        self._store(owner, name, RelationshipDescriptor(target_class, is_list, should_auto_resolve))

    def relationship_descriptor(self, owner: type, name: str) -> Optional[RelationshipDescriptor]:
        return self._descriptor(owner, name)

    def relationship_properties(self, owner: type) -> Optional[List[str]]:
        return self._property_names(owner)
