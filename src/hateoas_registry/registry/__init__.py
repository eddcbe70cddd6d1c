from hateoas_registry.registry.decorators import data_service, link, maps_to, relationship, resolved_link
from hateoas_registry.registry.descriptors import LinkDescriptor, RelationshipDescriptor, ResolvedLinkDescriptor
from hateoas_registry.registry.errors import (
    ConfigurationError,
    DataServiceConfigurationError,
    InvalidResolvedLinkError,
    RegistrationConflictError,
)
from hateoas_registry.registry.metadata import MetadataRegistry, get_registry

__all__ = [
    "ConfigurationError",
    "DataServiceConfigurationError",
    "InvalidResolvedLinkError",
    "LinkDescriptor",
    "MetadataRegistry",
    "RegistrationConflictError",
    "RelationshipDescriptor",
    "ResolvedLinkDescriptor",
    "data_service",
    "get_registry",
    "link",
    "maps_to",
    "relationship",
    "resolved_link",
]
