"""
Schema validation for assembled configuration trees.

A schema maps dotted paths to field rules. Validation walks each path in the
supplied tree, checks the kind of the value found there, runs the optional
custom validator and injects defaults for absent optional fields.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from .errors import ConfigError, ValidationError
from .path import PathCache, get_path_cache
from .tree import ConfigTree, Value, set_value, traverse, type_name

from dotconfig.logger import get_dotconfig_logger


class Kind(Enum):
    """Primitive kinds a schema field can require."""
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    LIST = "list"
    MAP = "map"

    @classmethod
    def of(cls, value: Any) -> Optional["Kind"]:
        """Get the kind of a value, or None for values outside the configuration model."""
        if isinstance(value, bool):
            return cls.BOOL
        if isinstance(value, int):
            return cls.INT
        if isinstance(value, float):
            return cls.FLOAT
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, (list, tuple)):
            return cls.LIST
        if isinstance(value, dict):
            return cls.MAP
        return None

    def __str__(self):
        return self.value


@dataclass
class SchemaField:
    """Rules for the value at one path."""
    type: Kind
    required: bool = False
    default: Value = None
    # Rejects a value by raising, or by returning False or an exception instance
    validator: Optional[Callable[[Any], Any]] = None


class ConfigSchema:
    """Schema-based configuration validator."""

    def __init__(self, path_cache: Optional[PathCache] = None):
        self._fields: Dict[str, SchemaField] = {}
        self._path_cache = path_cache or get_path_cache()
        self.logger = get_dotconfig_logger().bind(component="ConfigSchema")

    @property
    def fields(self) -> Mapping[str, SchemaField]:
        return MappingProxyType(self._fields)

    def add_field(self, path: str, field: SchemaField):
        """Add a field to the schema, replacing any rule already stored for ``path``."""
        self._fields[path] = field

    def validate(self, config: ConfigTree):
        """
        Validate ``config`` against the schema.

        Absent optional fields with a default get the default written into
        ``config`` in place.

        Raises:
            ValidationError: On the first field that fails
        """
        for path, field in self._fields.items():
            parts = self._path_cache.get(path)
            try:
                value = traverse(config, parts, path)
            except ConfigError:
                if field.required:
                    raise ValidationError(f"required field missing: {path}", field=path)
                if field.default is not None:
                    try:
                        set_value(config, parts, field.default)
                    except (TypeError, AttributeError) as e:
                        raise ValidationError(
                            f"failed to set default value for {path}: {e}", field=path, value=field.default
                        ) from e
                    self.logger.debug("Schema default applied", path=path)
                continue

            try:
                validate_value(value, field)
            except ValidationError as e:
                raise ValidationError(f"validation failed for {path}: {e.message}", field=path, value=value) from e
            except Exception as e:
                raise ValidationError(f"validation failed for {path}: {e}", field=path, value=value) from e

    def validate_section(self, registry, name: str):
        """Validate a copy of a registry section nested under its own name."""
        section = registry.snapshot().get(name)
        self.validate({name: section})


def validate_value(value: Any, field: SchemaField):
    """Check a single value against a schema field."""
    if value is None:
        if field.required:
            raise ValidationError("required field is nil")
        return

    kind = Kind.of(value)
    if kind is not field.type:
        got = kind.value if kind is not None else type_name(value)
        raise ValidationError(f"expected type {field.type.value}, got {got}", value=value)

    if field.validator is None:
        return

    result = field.validator(value)
    if result is False:
        name = getattr(field.validator, "__name__", "validator")
        raise ValidationError(f"{name} rejected value {value!r}", value=value)
    if isinstance(result, Exception):
        raise ValidationError(str(result), value=value)


def new_config_schema() -> ConfigSchema:
    """Create an empty schema."""
    return ConfigSchema()
