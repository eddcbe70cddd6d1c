import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class LazyResource(Generic[T]):
    """
    Pending handle for a linked value. The fetch runs on first access to
    `value` and its result is kept; a failed fetch is retried on the next access.
    """

    def __init__(self, fetch: Callable[[], T], href: Optional[str] = None):
        self._fetch = fetch
        self.href = href
        self._lock = threading.Lock()
        self._resolved = False
        self._value: Optional[T] = None

    @property
    def is_resolved(self) -> bool:
        return self._resolved

    @property
    def value(self) -> T:
        if not self._resolved:
            with self._lock:
                if not self._resolved:
                    self._value = self._fetch()
                    self._resolved = True
        return self._value

    def __repr__(self) -> str:
        state = "resolved" if self._resolved else "pending"
        return f"LazyResource({self.href!r}, {state})"
