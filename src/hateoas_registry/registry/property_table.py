import logging
import threading
from typing import Dict, Generic, List, Optional, Tuple, TypeVar

from hateoas_registry.registry.errors import RegistrationConflictError

logger = logging.getLogger(__name__)

D = TypeVar("D")


class PropertyTable(Generic[D]):
    """
    Per-class table of property names and the descriptor attached to each.

    Names are kept in first-registration order and appear once no matter how
    often a property is registered.
    """

    kind = "property"

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._names: Dict[type, List[str]] = {}
        self._descriptors: Dict[Tuple[type, str], D] = {}
        self._lock = threading.RLock()

    def _store(self, owner: type, name: str, descriptor: D) -> None:
        with self._lock:
            existing = self._descriptors.get((owner, name))
            if existing is not None and existing != descriptor:
                if self.strict:
                    raise RegistrationConflictError(
                        f"{self.kind} '{name}' on {owner.__qualname__} is already registered as "
                        f"{existing!r}, refusing to overwrite it with {descriptor!r}"
                    )
                logger.debug(f"Overwriting {self.kind} '{name}' on {owner.__qualname__}")
            names = self._names.setdefault(owner, [])
            if name not in names:
                names.append(name)
            self._descriptors[(owner, name)] = descriptor
        logger.debug(f"Registered {self.kind} {owner.__qualname__}.{name}: {descriptor!r}")

    def _descriptor(self, owner: type, name: str) -> Optional[D]:
        return self._descriptors.get((owner, name))

    def _property_names(self, owner: type) -> Optional[List[str]]:
        names = self._names.get(owner)
        if names is None:
            return None
        return list(names)

    def owners(self) -> List[type]:
        return list(self._names)
