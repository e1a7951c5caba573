"""
Process-wide configuration registry with dot-notation access.

Configuration sections are produced by loader callbacks and read through
typed getters, unmarshalled into dataclasses, or validated against a schema:

    registry = get_config_registry("development")
    registry.register("app", static_loader({"database": {"port": 5432}}))
    port = registry.get_int("app.database.port")
"""

from .core import (
    ConfigRegistry, get_config_registry, reset_config_registry,
    PathCache, split_path, get_path_cache, ConfigTree, ConfigLoader, Value, traverse, set_value,
    Unsigned, to_tree,
    ConfigSchema, SchemaField, Kind, new_config_schema,
    ConfigError, RegistryInitError, ConfigPathError, SectionNotFoundError, SectionNilError,
    KeyNotFoundError, NotAMapError, TypeMismatchError, ConversionParseError, ArrayElementError,
    UnmarshalError, ValidationError
)
from .loaders import static_loader, env_loader, yaml_loader
from .logging_config import LoggingConfig
from .logger import get_dotconfig_logger, setup_logging

__version__ = '0.1.0'

__all__ = [
    # Registry
    'ConfigRegistry',
    'get_config_registry',
    'reset_config_registry',

    # Paths and trees
    'PathCache',
    'split_path',
    'get_path_cache',
    'ConfigTree',
    'ConfigLoader',
    'Value',
    'traverse',
    'set_value',

    # Unmarshalling
    'Unsigned',
    'to_tree',

    # Validation
    'ConfigSchema',
    'SchemaField',
    'Kind',
    'new_config_schema',

    # Loaders
    'static_loader',
    'env_loader',
    'yaml_loader',

    # Logging
    'LoggingConfig',
    'get_dotconfig_logger',
    'setup_logging',

    # Errors
    'ConfigError',
    'RegistryInitError',
    'ConfigPathError',
    'SectionNotFoundError',
    'SectionNilError',
    'KeyNotFoundError',
    'NotAMapError',
    'TypeMismatchError',
    'ConversionParseError',
    'ArrayElementError',
    'UnmarshalError',
    'ValidationError'
]
