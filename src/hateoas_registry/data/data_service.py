import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from hateoas_registry.cache.lazy import LazyResource
from hateoas_registry.shared.hal import PaginatedList

if TYPE_CHECKING:
    from hateoas_registry.data.service_locator import ServiceLocator

logger = logging.getLogger(__name__)


class DataService:
    """
    Generic fetch/mutate service for one domain class.

    Subclasses are bound to their domain class with `@data_service(DomainClass)`
    and add whatever finder methods the API offers for it.
    """

    def __init__(self, locator: "ServiceLocator"):
        self.locator = locator
        self.client = locator.client
        self.decoder = locator.decoder
        self.cache = locator.cache

    def find_by_href(self, href: str, follow: Sequence[str] = (), use_cache: bool = True) -> Any:
        """
        Return the object at `href`, from the cache when possible.

        Concurrent cache misses for the same href share one request. Links and
        relationships of the result are wired as lazy handles; the ones named
        in `follow` are fetched right away.
        """
        url = self.client.absolute_url(href)
        obj = self.cache.get_by_href(url) if use_cache else None
        if obj is None:
            with self.cache.fetching(url):
                obj = self.cache.get_by_href(url) if use_cache else None
                if obj is None:
                    logger.debug(f"Fetching {url}")
                    response = self.client.get(url)
                    obj = self.decoder.decode(response.payload)
        return self._wire(obj, follow)

    def find_all_by_href(self, href: str, params: Optional[Dict[str, Any]] = None,
                         follow: Sequence[str] = ()) -> PaginatedList:
        response = self.client.get(href, params=params)
        page = self.decoder.decode_list(response.payload)
        for obj in page:
            self._wire(obj, follow)
        return page

    def create(self, href: str, body: Dict[str, Any]) -> Any:
        response = self.client.post(href, body)
        return self._wire(self.decoder.decode(response.payload), ())

    def patch(self, href: str, operations: List[Dict[str, Any]]) -> Optional[Any]:
        """Send JSON Patch `operations`; the cached copy is dropped whatever the response holds."""
        url = self.client.absolute_url(href)
        self.cache.remove(url)
        response = self.client.patch(url, operations)
        if not response.payload:
            return None
        return self._wire(self.decoder.decode(response.payload), ())

    def _wire(self, obj: Any, follow: Sequence[str]) -> Any:
        self.locator.resolver.resolve(obj)
        for name in follow:
            value = getattr(obj, name, None)
            if isinstance(value, LazyResource):
                value.value
            else:
                logger.debug(f"Nothing to follow for '{name}' on {obj!r}")
        return obj
