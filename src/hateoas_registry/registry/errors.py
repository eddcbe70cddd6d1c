"""
Configuration errors raised while registering resource metadata.

These abort startup. Lookup misses are never errors: every registry query
returns None for an unregistered key.
"""


class ConfigurationError(RuntimeError):
    """Base class for fatal registration errors."""


class DataServiceConfigurationError(ConfigurationError):
    """Missing domain class, or more than one data service for the same domain class."""


class RegistrationConflictError(ConfigurationError):
    """An existing registration would be overwritten with different values (strict mode only)."""


class InvalidResolvedLinkError(ConfigurationError):
    """A resolved link names a method the service lacks, or params that do not fit its signature."""
