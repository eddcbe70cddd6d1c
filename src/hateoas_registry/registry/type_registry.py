import logging
import threading
from typing import Dict, Optional, Union

from hateoas_registry.registry.errors import RegistrationConflictError
from hateoas_registry.shared.resource_type import ResourceType

logger = logging.getLogger(__name__)


def _type_key(resource_type: Union[str, ResourceType]) -> str:
    if isinstance(resource_type, ResourceType):
        return resource_type.value
    return resource_type


class TypeRegistry:
    """Maps resource-type strings to the domain class that represents them."""

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._classes: Dict[str, type] = {}
        self._lock = threading.RLock()

    def register_type(self, resource_type: Union[str, ResourceType, None], cls: Optional[type]) -> None:
        """
        Record `cls` under the string key of `resource_type`.

        A missing type or class is ignored. Re-registering a type to another
        class overwrites the previous mapping unless the registry is strict.
        """
        if not resource_type or cls is None:
            return
        key = _type_key(resource_type)
        with self._lock:
            existing = self._classes.get(key)
            if existing is not None and existing is not cls:
                if self.strict:
                    raise RegistrationConflictError(
                        f"Resource type '{key}' is already mapped to {existing.__qualname__}, "
                        f"refusing to remap it to {cls.__qualname__}"
                    )
                logger.debug(f"Remapping resource type '{key}': {existing.__qualname__} -> {cls.__qualname__}")
            self._classes[key] = cls

    def class_for_type(self, resource_type: Union[str, ResourceType]) -> Optional[type]:
        return self._classes.get(_type_key(resource_type))

    def types(self) -> Dict[str, type]:
        return dict(self._classes)
