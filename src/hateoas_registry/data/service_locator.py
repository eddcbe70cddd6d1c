import logging
import threading
from typing import Any, Dict, Optional

from hateoas_registry.cache.decoder import ResponseDecoder
from hateoas_registry.cache.object_cache import ObjectCache
from hateoas_registry.data.link_resolver import LinkResolver
from hateoas_registry.registry.metadata import MetadataRegistry, get_registry
from hateoas_registry.rest.client import HALRestClient

logger = logging.getLogger(__name__)


class ServiceLocator:
    """
    Wires the client, cache, decoder and resolver together and hands out one
    instance per service class.

    Usage:
        locator = ServiceLocator(HALRestClient())
        item = locator.service_for(Item).find_by_href(href)
    """

    def __init__(self, client: HALRestClient, registry: Optional[MetadataRegistry] = None,
                 cache: Optional[ObjectCache] = None):
        self.registry = registry if registry is not None else get_registry()
        self.client = client
        self.cache = cache if cache is not None else ObjectCache(self.registry)
        self.decoder = ResponseDecoder(self.registry, self.cache)
        self.resolver = LinkResolver(self, self.registry)
        self._instances: Dict[type, Any] = {}
        self._lock = threading.RLock()

    def instance_of(self, service_cls: type) -> Any:
        instance = self._instances.get(service_cls)
        if instance is None:
            with self._lock:
                instance = self._instances.get(service_cls)
                if instance is None:
                    logger.debug(f"Creating {service_cls.__qualname__}")
                    instance = service_cls(self)
                    self._instances[service_cls] = instance
        return instance

    def service_for(self, domain_class: type) -> Any:
        """
        Raises:
            LookupError: no data service is bound to `domain_class`
        """
        service_cls = self.registry.data_service_for(domain_class)
        if service_cls is None:
            raise LookupError(f"No data service registered for {domain_class.__qualname__}")
        return self.instance_of(service_cls)
