"""
ObjectCache - resolved objects keyed by their self link.

Objects are stored in normalized form when their class has a normalized
counterpart: link and relationship values are reduced to hrefs. Reads
materialize the entry back into the denormalized class. The object passed
to `add` is handed out as-is until the entry is replaced or removed.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from hateoas_registry.cache.lazy import LazyResource
from hateoas_registry.registry.metadata import MetadataRegistry, get_registry
from hateoas_registry.shared.hal import HALResource, NormalizedObject, PaginatedList, payload_fields

logger = logging.getLogger(__name__)


def _as_reference(value: Any) -> Any:
    if isinstance(value, (HALResource, NormalizedObject, PaginatedList)):
        return value.self_link
    if isinstance(value, LazyResource):
        return value.href
    if isinstance(value, list):
        return [_as_reference(v) for v in value]
    return value


class ObjectCache:

    def __init__(self, registry: Optional[MetadataRegistry] = None):
        self.registry = registry if registry is not None else get_registry()
        self._entries: Dict[str, Any] = {}
        self._materialized: Dict[str, Any] = {}
        self._lock = threading.RLock()
        # href -> [lock, number of callers holding or waiting on it]
        self._fetch_locks: Dict[str, List[Any]] = {}

    def normalize(self, obj: Any) -> Any:
        """Reduce `obj` to its normalized class, or return it unchanged when it has none."""
        normalized_cls = self.registry.normalized_class_for(type(obj))
        if normalized_cls is None:
            return obj
        fields = {name: _as_reference(value) for name, value in payload_fields(obj).items()}
        return normalized_cls(_links=obj._links, **fields)

    def materialize(self, entry: Any) -> Optional[Any]:
        if not isinstance(entry, NormalizedObject):
            return entry
        denormalized_cls = self.registry.denormalized_class_for(type(entry))
        if denormalized_cls is None:
            logger.warning(f"No denormalized class mapped for {type(entry).__qualname__}, cannot materialize {entry.self_link}")
            return None
        return denormalized_cls(_links=entry._links, **payload_fields(entry))

    def add(self, obj: Any) -> Optional[str]:
        href = getattr(obj, "self_link", None)
        if href is None:
            logger.warning(f"Not caching {type(obj).__qualname__}: it has no self link")
            return None
        entry = self.normalize(obj)
        with self._lock:
            self._entries[href] = entry
            if isinstance(obj, NormalizedObject):
                self._materialized.pop(href, None)
            else:
                self._materialized[href] = obj
        logger.debug(f"Cached {type(obj).__qualname__} at {href}")
        return href

    def get_entry(self, href: str) -> Optional[Any]:
        """The stored (normalized) entry, without materializing it."""
        return self._entries.get(href)

    def get_by_href(self, href: str) -> Optional[Any]:
        cached = self._materialized.get(href)
        if cached is not None:
            return cached
        with self._lock:
            entry = self._entries.get(href)
            if entry is None:
                return None
            obj = self.materialize(entry)
            if obj is not None:
                self._materialized[href] = obj
            return obj

    def has(self, href: str) -> bool:
        return href in self._entries

    def remove(self, href: str) -> None:
        with self._lock:
            self._entries.pop(href, None)
            self._materialized.pop(href, None)

    @contextmanager
    def fetching(self, href: str) -> Iterator[None]:
        """
        Serialize fetches of one href, so concurrent misses trigger a single request.

        The lock is dropped once no caller holds or waits on it.
        """
        with self._lock:
            slot = self._fetch_locks.get(href)
            if slot is None:
                slot = self._fetch_locks[href] = [threading.Lock(), 0]
            slot[1] += 1
        try:
            with slot[0]:
                yield
        finally:
            with self._lock:
                slot[1] -= 1
                if slot[1] == 0:
                    del self._fetch_locks[href]

    def __len__(self) -> int:
        return len(self._entries)
