"""
Exception hierarchy for the configuration registry.

Every error raised by the registry, the coercion layer, the unmarshaller and
the schema validator derives from ConfigError, so callers can catch the whole
family at once or a single failure class.
"""

from typing import Any, Optional


class ConfigError(Exception):
    """Base exception for configuration registry failures."""

    def __init__(self, message: str, path: Optional[str] = None, value: Any = None):
        self.message = message
        self.path = path
        self.value = value
        super().__init__(message)


class RegistryInitError(ConfigError):
    """Raised when the global registry cannot be constructed."""


class ConfigPathError(ConfigError):
    """Raised when a path is too short to address a value inside a section."""


class SectionNotFoundError(ConfigError, LookupError):
    """Raised when the first path segment names no registered section."""


class SectionNilError(ConfigError):
    """Raised when a section exists but its loader returned None."""


class KeyNotFoundError(ConfigError, LookupError):
    """Raised when a key along a path is absent."""


class NotAMapError(ConfigError):
    """Raised when traversal reaches a scalar before the path is exhausted."""


class TypeMismatchError(ConfigError, TypeError):
    """Raised when a value's type has no conversion to the requested type."""


class ConversionParseError(ConfigError, ValueError):
    """Raised when a string value cannot be parsed into the requested type."""


class ArrayElementError(TypeMismatchError):
    """Raised when a sequence element cannot be read as a string."""


class UnmarshalError(ConfigError):
    """Raised when a configuration tree cannot be projected into a dataclass."""


class ValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.field = field
        super().__init__(message, path=field, value=value)
