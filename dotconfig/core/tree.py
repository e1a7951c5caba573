"""
Primitives over nested configuration mappings.

A configuration tree is a ``dict`` whose values are scalars (None, bool, int,
float, str), lists of values, or further trees.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .errors import KeyNotFoundError, NotAMapError
from .path import PATH_SEPARATOR

Value = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
ConfigTree = Dict[str, Value]
ConfigLoader = Callable[[Any], Optional[ConfigTree]]


def type_name(value: Any) -> str:
    """Name of a value's type as reported in error messages."""
    return type(value).__name__


def traverse(tree: ConfigTree, segments: Sequence[str], full_path: str) -> Value:
    """
    Walk ``tree`` one level per segment and return the value at the end.

    Args:
        tree: Root mapping to start from
        segments: Path segments relative to ``tree``
        full_path: Path reported in error messages

    Raises:
        KeyNotFoundError: If a key along the way is absent
        NotAMapError: If an intermediate value is not a mapping
    """
    current = tree
    for i, part in enumerate(segments[:-1]):
        next_value = current.get(part)
        if not isinstance(next_value, dict):
            current_path = PATH_SEPARATOR.join(segments[:i + 1])
            if part not in current:
                raise KeyNotFoundError(
                    f"key not found: '{current_path}' in path '{full_path}'", path=full_path
                )
            raise NotAMapError(
                f"value at '{current_path}' in path '{full_path}' is not a map, cannot traverse further",
                path=full_path, value=next_value
            )
        current = next_value

    last_part = segments[-1]
    if last_part not in current:
        raise KeyNotFoundError(f"key not found: '{last_part}' in path '{full_path}'", path=full_path)
    return current[last_part]


def set_value(tree: ConfigTree, segments: Sequence[str], value: Value):
    """
    Assign ``value`` at the path given by ``segments``.

    Missing intermediate keys, and intermediate keys holding anything other
    than a mapping, are replaced by empty mappings.
    """
    current = tree
    for part in segments[:-1]:
        next_value = current.get(part)
        if not isinstance(next_value, dict):
            next_value = {}
            current[part] = next_value
        current = next_value

    current[segments[-1]] = value
