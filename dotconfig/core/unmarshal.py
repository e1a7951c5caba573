"""
Projection of configuration trees into dataclass records.

Field keys come from the ``config`` entry of a field's metadata, falling back
to the lowercased field name; ``config="-"`` skips the field. Keys are looked
up directly in the current mapping and never re-split on dots: nested records
are reached through nested dataclass fields.

Example:
    @dataclass
    class DatabaseConfig:
        host: str = field(default="", metadata={"config": "host", "required": True})
        port: int = 0
        options: PoolOptions = field(default_factory=PoolOptions)
"""

import dataclasses
import typing
from typing import Any, Dict, List, NewType

from .coercion import coerce_string_array, is_integer, parse_bool, parse_float, parse_int
from .errors import ConfigError, UnmarshalError
from .tree import ConfigTree, type_name

# Annotation marker for fields that only accept non-negative integers
Unsigned = NewType("Unsigned", int)

SKIP_KEY = "-"


def field_key(field: dataclasses.Field) -> str:
    """Get the configuration key a dataclass field is read from."""
    return field.metadata.get("config") or field.name.lower()


def check_target(target: Any):
    """
    Raises:
        UnmarshalError: If ``target`` is not a dataclass instance
    """
    if target is None or isinstance(target, type) or not dataclasses.is_dataclass(target):
        raise UnmarshalError("unmarshal target must be a non-nil dataclass instance", value=target)


def unmarshal_into(config: ConfigTree, target: Any):
    """
    Assign values from ``config`` onto the fields of the dataclass ``target``.

    Fields whose key is absent keep their current value unless the field is
    marked ``required`` in its metadata.

    Raises:
        UnmarshalError: If a required key is missing or a value cannot be converted
    """
    hints = _field_types(type(target))

    for field in dataclasses.fields(target):
        key = field_key(field)
        if key == SKIP_KEY:
            continue

        if key not in config:
            if field.metadata.get("required"):
                raise UnmarshalError(f"required field '{key}' not found in configuration")
            continue

        annotation = hints.get(field.name, field.type)
        try:
            value = _convert(annotation, config[key], getattr(target, field.name, None), key)
        except (ConfigError, ValueError, TypeError, OverflowError) as e:
            message = e.message if isinstance(e, ConfigError) else str(e)
            raise UnmarshalError(f"error setting field '{key}': {message}", path=key, value=config[key]) from e
        setattr(target, field.name, value)


def _convert(annotation: Any, value: Any, current: Any, key: str) -> Any:
    if annotation is str:
        return to_string(value)
    if annotation is Unsigned:
        return to_unsigned(value)
    if annotation is bool:
        return to_bool(value)
    if annotation is int:
        return to_int(value)
    if annotation is float:
        return to_float(value)
    if _is_string_list(annotation):
        return coerce_string_array(value, key)
    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        if not isinstance(value, dict):
            raise TypeError(f"cannot set struct field with value of type {type_name(value)}")
        nested = current if isinstance(current, annotation) else zero_value(annotation)
        unmarshal_into(value, nested)
        return nested
    raise TypeError(f"unsupported field type: {_annotation_name(annotation)}")


def _field_types(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except NameError:
        return {}


def _is_string_list(annotation: Any) -> bool:
    return typing.get_origin(annotation) in (list, List) and typing.get_args(annotation) == (str,)


def _annotation_name(annotation: Any) -> str:
    return getattr(annotation, "__name__", None) or str(annotation)


def to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    return str(value)


def to_int(value: Any) -> int:
    if is_integer(value):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return parse_int(value)
    raise TypeError(f"cannot convert {type_name(value)} to int")


def to_unsigned(value: Any) -> int:
    if is_integer(value):
        if value < 0:
            raise ValueError("cannot convert negative int to unsigned int")
        return value
    if isinstance(value, float):
        if value < 0:
            raise ValueError("cannot convert negative float to unsigned int")
        return int(value)
    if isinstance(value, str):
        parsed = parse_int(value)
        if parsed < 0 or value.startswith("-"):
            raise ValueError(f"invalid unsigned integer: '{value}'")
        return parsed
    raise TypeError(f"cannot convert {type_name(value)} to unsigned int")


def to_float(value: Any) -> float:
    if isinstance(value, float):
        return value
    if is_integer(value):
        return float(value)
    if isinstance(value, str):
        return parse_float(value)
    raise TypeError(f"cannot convert {type_name(value)} to float")


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return parse_bool(value)
    if is_integer(value):
        return value != 0
    raise TypeError(f"cannot convert {type_name(value)} to bool")


_ZERO_VALUES: Dict[Any, Any] = {str: "", int: 0, Unsigned: 0, float: 0.0, bool: False}


def zero_value(annotation: Any) -> Any:
    """
    Build the zero value for an annotation.

    Dataclasses are instantiated with zero values for every init field that
    has no default of its own.
    """
    if annotation in _ZERO_VALUES:
        return _ZERO_VALUES[annotation]
    if typing.get_origin(annotation) in (list, List):
        return []
    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        hints = _field_types(annotation)
        kwargs = {}
        for field in dataclasses.fields(annotation):
            if not field.init:
                continue
            if field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
                kwargs[field.name] = zero_value(hints.get(field.name, field.type))
        return annotation(**kwargs)
    return None


def to_tree(record: Any) -> ConfigTree:
    """
    Project a dataclass instance back into a configuration tree.

    Uses the same keys as ``unmarshal_into``; skipped fields are left out.
    """
    check_target(record)
    tree: ConfigTree = {}
    for field in dataclasses.fields(record):
        key = field_key(field)
        if key == SKIP_KEY:
            continue
        value = getattr(record, field.name)
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            value = to_tree(value)
        elif isinstance(value, list):
            value = list(value)
        tree[key] = value
    return tree
