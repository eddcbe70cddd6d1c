import inspect
from typing import Any, List, Optional, Sequence

from hateoas_registry.registry.descriptors import ResolvedLinkDescriptor
from hateoas_registry.registry.errors import InvalidResolvedLinkError
from hateoas_registry.registry.property_table import PropertyTable


def _check_signature(service_class: type, method_name: str, params: Sequence[Any]) -> None:
    method = getattr(service_class, method_name, None)
    if method is None or not callable(method):
        raise InvalidResolvedLinkError(f"{service_class.__qualname__} has no method '{method_name}'")
    try:
        signature = inspect.signature(method)
    except (TypeError, ValueError):
        # no introspectable signature; params are checked when the method is called
        return
    raw = inspect.getattr_static(service_class, method_name)
    args = tuple(params) if isinstance(raw, (staticmethod, classmethod)) else (None, *params)
    try:
        signature.bind(*args)
    except TypeError as e:
        raise InvalidResolvedLinkError(
            f"Params {tuple(params)!r} do not fit {service_class.__qualname__}.{method_name}{signature}: {e}"
        ) from e


class ResolvedLinkRegistry(PropertyTable[ResolvedLinkDescriptor]):
    """Properties whose value is computed by calling a method on a service rather than following a link."""

    kind = "resolved link"

    def register_resolved_link(
        self,
        owner: type,
        name: str,
        service_class: type,
        method_name: Optional[str] = None,
        *params: Any,
    ) -> None:
        if owner is None or not name:
            return
        if method_name is not None:
            _check_signature(service_class, method_name, params)
        self._store(owner, name, ResolvedLinkDescriptor(service_class, method_name, tuple(params)))

    def resolved_link_descriptor(self, owner: type, name: str) -> Optional[ResolvedLinkDescriptor]:
        return self._descriptor(owner, name)

    def resolved_link_properties(self, owner: type) -> Optional[List[str]]:
        return self._property_names(owner)
