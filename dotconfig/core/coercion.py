"""
Conversion of stored configuration values to requested Python types.

The ``coerce_*`` functions implement the typed getters of the registry: each
one accepts a fixed set of input types and raises a ConfigError subclass
naming the path for anything else. The ``parse_*`` helpers are shared with
the unmarshaller and the environment accessors.
"""

import re
from typing import Any, List

from .errors import ArrayElementError, ConversionParseError, TypeMismatchError
from .tree import type_name

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

TRUE_LITERALS = frozenset({"1", "t", "T", "true", "TRUE", "True"})
FALSE_LITERALS = frozenset({"0", "f", "F", "false", "FALSE", "False"})


def parse_int(text: str) -> int:
    """Parse a base-10 integer without surrounding whitespace or separators."""
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid base-10 integer: '{text}'")
    return int(text)


def parse_float(text: str) -> float:
    """Parse a decimal float literal."""
    if not text or text != text.strip() or "_" in text:
        raise ValueError(f"invalid float literal: '{text}'")
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"invalid float literal: '{text}'") from None


def parse_bool(text: str) -> bool:
    """Parse one of the literals 1/0, t/f, true/false in lower, upper or title case."""
    if text in TRUE_LITERALS:
        return True
    if text in FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean literal: '{text}'")


def split_list(text: str) -> List[str]:
    """Split a comma-separated string, stripping whitespace around each item."""
    if text == "":
        return []
    return [part.strip() for part in text.split(",")]


def is_integer(value: Any) -> bool:
    """True for ints that are not bools."""
    return isinstance(value, int) and not isinstance(value, bool)


def _mismatch(path: str, target: str, value: Any) -> TypeMismatchError:
    return TypeMismatchError(
        f"cannot convert value at path '{path}' to {target}: found type {type_name(value)}",
        path=path, value=value
    )


def _parse_failure(path: str, target: str, value: Any, error: Exception) -> ConversionParseError:
    return ConversionParseError(
        f"cannot convert value '{value}' at path '{path}' to {target}: {error}",
        path=path, value=value
    )


def coerce_string(value: Any, path: str) -> str:
    if isinstance(value, str):
        return value
    raise _mismatch(path, "string", value)


def coerce_int(value: Any, path: str) -> int:
    """Accept int, float (truncated toward zero) and base-10 strings."""
    if is_integer(value):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (OverflowError, ValueError) as e:
            raise _parse_failure(path, "int", value, e) from e
    if isinstance(value, str):
        try:
            return parse_int(value)
        except ValueError as e:
            raise _parse_failure(path, "int", value, e) from e
    raise _mismatch(path, "int", value)


def coerce_bool(value: Any, path: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return parse_bool(value)
        except ValueError as e:
            raise _parse_failure(path, "bool", value, e) from e
    raise _mismatch(path, "bool", value)


def coerce_float(value: Any, path: str) -> float:
    if isinstance(value, float):
        return value
    if is_integer(value):
        return float(value)
    if isinstance(value, str):
        try:
            return parse_float(value)
        except ValueError as e:
            raise _parse_failure(path, "float", value, e) from e
    raise _mismatch(path, "float", value)


def coerce_string_array(value: Any, path: str) -> List[str]:
    """
    Accept a list of strings, or a comma-separated string.

    Lists are copied so callers cannot mutate the stored tree through the result.
    """
    if isinstance(value, str):
        return split_list(value)
    if isinstance(value, (list, tuple)):
        result = []
        for i, item in enumerate(value):
            if not isinstance(item, str):
                raise ArrayElementError(
                    f"cannot convert item at index {i} in path '{path}' to string: found type {type_name(item)}",
                    path=path, value=item
                )
            result.append(item)
        return result
    raise _mismatch(path, "string array", value)
