"""
Declarative registration at class-definition time.

    @maps_to(Item)
    class NormalizedItem(NormalizedObject):
        bundles = link(Bundle, is_list=True)

    class Item(HALResource):
        type = ResourceType("item")
        collection = link(Collection, link_name="owningCollection")
        thumbnail = resolved_link(BitstreamDataService, "find_thumbnail", "item-id")

    @data_service(Item)
    class ItemDataService(DataService):
        ...

Each helper takes an optional `registry`; without one it writes to get_registry().
"""

from typing import Any, Callable, Optional, Type, TypeVar

from hateoas_registry.registry.metadata import MetadataRegistry, get_registry

T = TypeVar("T", bound=type)


def _resolve(registry: Optional[MetadataRegistry]) -> MetadataRegistry:
    return registry if registry is not None else get_registry()


def maps_to(denormalized_cls: type, registry: Optional[MetadataRegistry] = None) -> Callable[[T], T]:
    """Map the decorated normalized class to its denormalized counterpart (and register that class's type)."""
    def decorator(normalized_cls: T) -> T:
        _resolve(registry).register_normalization_mapping(normalized_cls, denormalized_cls)
        return normalized_cls
    return decorator


def data_service(domain_class: Optional[type], registry: Optional[MetadataRegistry] = None) -> Callable[[T], T]:
    """Bind the decorated service class to `domain_class`. Raises DataServiceConfigurationError on conflicts."""
    def decorator(service_cls: T) -> T:
        _resolve(registry).register_data_service(domain_class, service_cls)
        return service_cls
    return decorator


class _RegisteredAttribute:
    """
    Class attribute that records metadata about itself when its owner class is created.

    On instances it behaves like a plain attribute defaulting to None.
    """

    def __init__(self, registry: Optional[MetadataRegistry] = None):
        self._registry = registry
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self._register(_resolve(self._registry), owner, name)

    def _register(self, registry: MetadataRegistry, owner: type, name: str) -> None:
        raise NotImplementedError

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return instance.__dict__.get(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__[self.name] = value


class link(_RegisteredAttribute):
    """Property fetched by following the HAL link `link_name` (defaults to the attribute name)."""

    def __init__(self, target_class: type, is_list: bool = False, link_name: Optional[str] = None,
                 registry: Optional[MetadataRegistry] = None):
        super().__init__(registry)
        self.target_class = target_class
        self.is_list = is_list
        self.link_name = link_name

    def _register(self, registry: MetadataRegistry, owner: type, name: str) -> None:
        registry.register_link(owner, name, self.target_class, self.is_list, self.link_name)


class relationship(_RegisteredAttribute):
    """Property holding a reference (href or list of hrefs) to other cacheable resources."""

    def __init__(self, target_class: type, is_list: bool = False, should_auto_resolve: bool = True,
                 registry: Optional[MetadataRegistry] = None):
        super().__init__(registry)
        self.target_class = target_class
        self.is_list = is_list
        self.should_auto_resolve = should_auto_resolve

    def _register(self, registry: MetadataRegistry, owner: type, name: str) -> None:
        registry.register_relationship(owner, name, self.target_class, self.is_list, self.should_auto_resolve)


class resolved_link(_RegisteredAttribute):
    """Property computed by calling `service_class.method_name(*params)`."""

    def __init__(self, service_class: Type[Any], method_name: Optional[str] = None, *params: Any,
                 registry: Optional[MetadataRegistry] = None):
        super().__init__(registry)
        self.service_class = service_class
        self.method_name = method_name
        self.params = params

    def _register(self, registry: MetadataRegistry, owner: type, name: str) -> None:
        registry.register_resolved_link(owner, name, self.service_class, self.method_name, *self.params)
