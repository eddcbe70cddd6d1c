import logging
import threading
from typing import Dict, Optional

from hateoas_registry.registry.errors import DataServiceConfigurationError

logger = logging.getLogger(__name__)


class DataServiceRegistry:
    """One data service class per domain class. Any second registration is a configuration error."""

    def __init__(self):
        self._services: Dict[type, type] = {}
        self._lock = threading.RLock()

    def register_data_service(self, domain_class: Optional[type], service_class: type) -> None:
        if domain_class is None:
            raise DataServiceConfigurationError(
                f"Invalid data service registration on {service_class!r}, domain class needs to be defined"
            )
        with self._lock:
            existing = self._services.get(domain_class)
            if existing is not None:
                raise DataServiceConfigurationError(
                    f"Multiple dataservices for {domain_class!r}: {existing!r} and {service_class!r}"
                )
            self._services[domain_class] = service_class
        logger.debug(f"Registered data service {service_class.__qualname__} for {domain_class.__qualname__}")

    def data_service_for(self, domain_class: type) -> Optional[type]:
        return self._services.get(domain_class)

    def services(self) -> Dict[type, type]:
        return dict(self._services)
