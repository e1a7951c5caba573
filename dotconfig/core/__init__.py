"""
Core configuration management components.

This module provides the foundational components for configuration management:
- ConfigRegistry: Process-wide registry of loader-backed configuration sections
- PathCache: Memoized dot-notation path splitting
- ConfigSchema: Validation and default injection for configuration trees
- Unmarshalling of configuration sections into dataclasses
"""

from .errors import (
    ConfigError, RegistryInitError, ConfigPathError, SectionNotFoundError, SectionNilError,
    KeyNotFoundError, NotAMapError, TypeMismatchError, ConversionParseError, ArrayElementError,
    UnmarshalError, ValidationError
)
from .path import PathCache, split_path, get_path_cache
from .tree import ConfigTree, ConfigLoader, Value, traverse, set_value
from .registry import ConfigRegistry, get_config_registry, reset_config_registry
from .unmarshal import Unsigned, to_tree
from .validator import ConfigSchema, SchemaField, Kind, new_config_schema

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
