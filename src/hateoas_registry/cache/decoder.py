import logging
from typing import Any, Dict, Optional

from hateoas_registry.cache.object_cache import ObjectCache
from hateoas_registry.registry.metadata import MetadataRegistry, get_registry
from hateoas_registry.shared.hal import PaginatedList, link_href, parse_links

logger = logging.getLogger(__name__)

# keys handled by the decoder itself rather than copied onto the object
_RESERVED_KEYS = ("type", "_links", "_embedded")


class DecodingError(ValueError):
    """A payload cannot be turned into a domain object."""


class ResponseDecoder:
    """Turns decoded JSON payloads into domain objects, using the type registry to pick classes."""

    def __init__(self, registry: Optional[MetadataRegistry] = None, cache: Optional[ObjectCache] = None):
        self.registry = registry if registry is not None else get_registry()
        self.cache = cache

    def decode(self, payload: Dict[str, Any]) -> Any:
        """
        Decode a single resource payload.

        Raises:
            DecodingError: payload is not an object, has no `type`, or its type is unregistered
        """
        if not isinstance(payload, dict):
            raise DecodingError(f"Expected a JSON object, got {type(payload).__name__}")
        type_value = payload.get("type")
        if not type_value:
            raise DecodingError(f"Payload has no 'type': {sorted(payload)}")
        cls = self.registry.class_for_type(type_value)
        if cls is None:
            raise DecodingError(f"No class registered for resource type '{type_value}'")

        fields = {k: v for k, v in payload.items() if k not in _RESERVED_KEYS}
        obj = cls(_links=parse_links(payload.get("_links")), **fields)

        for name, embedded in (payload.get("_embedded") or {}).items():
            setattr(obj, name, self._decode_embedded(embedded))

        if self.cache is not None:
            self.cache.add(obj)
        return obj

    def decode_list(self, payload: Dict[str, Any]) -> PaginatedList:
        """Decode a collection response (`_embedded` members plus optional `page` block)."""
        objects = []
        for value in (payload.get("_embedded") or {}).values():
            if isinstance(value, list):
                objects.extend(self.decode(v) for v in value)
            elif isinstance(value, dict):
                objects.append(self.decode(value))
        page = payload.get("page") or {}
        return PaginatedList(
            page=objects,
            size=page.get("size", len(objects)),
            total_elements=page.get("totalElements", len(objects)),
            total_pages=page.get("totalPages", 1),
            current_page=page.get("number", 0),
            self_link=link_href(parse_links(payload.get("_links")), "self"),
        )

    def _decode_embedded(self, value: Any) -> Any:
        if isinstance(value, list):
            return [self._decode_embedded(v) for v in value]
        if isinstance(value, dict):
            if "type" in value:
                return self.decode(value)
            if "_embedded" in value or "page" in value:
                return self.decode_list(value)
            logger.warning(f"Leaving untyped embedded object as-is: {sorted(value)}")
        return value
