import logging
import threading
from typing import Dict, Optional

from hateoas_registry.registry.errors import RegistrationConflictError
from hateoas_registry.registry.type_registry import TypeRegistry

logger = logging.getLogger(__name__)


class NormalizationRegistry:
    """
    Pairs each normalized (cache storage) class with its denormalized class.

    Registering a pair also registers the denormalized class under its
    declared resource type in the type registry.
    """

    def __init__(self, type_registry: TypeRegistry, strict: bool = False):
        self.type_registry = type_registry
        self.strict = strict
        self._denormalized: Dict[type, type] = {}
        self._normalized: Dict[type, type] = {}
        self._lock = threading.RLock()

    def register_mapping(self, normalized_cls: type, denormalized_cls: type) -> None:
        with self._lock:
            existing = self._denormalized.get(normalized_cls)
            if existing is not None and existing is not denormalized_cls and self.strict:
                raise RegistrationConflictError(
                    f"{normalized_cls.__qualname__} already maps to {existing.__qualname__}, "
                    f"refusing to map it to {denormalized_cls.__qualname__}"
                )
            # a strict type conflict raises here, before anything is stored
            self.type_registry.register_type(getattr(denormalized_cls, "type", None), denormalized_cls)
            if existing is not None and self._normalized.get(existing) is normalized_cls:
                del self._normalized[existing]
            self._denormalized[normalized_cls] = denormalized_cls
            self._normalized[denormalized_cls] = normalized_cls
        logger.debug(f"Mapped {normalized_cls.__qualname__} -> {denormalized_cls.__qualname__}")

    def denormalized_class_for(self, normalized_cls: type) -> Optional[type]:
        return self._denormalized.get(normalized_cls)

    def normalized_class_for(self, denormalized_cls: type) -> Optional[type]:
        return self._normalized.get(denormalized_cls)

    def mappings(self) -> Dict[type, type]:
        return dict(self._denormalized)
