"""
Ready-made loader callbacks.

A loader receives the registry and returns a fresh configuration tree each
time it is called, both on ``register`` and on every ``refresh``.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml

from dotconfig.core.tree import ConfigLoader, ConfigTree, set_value
from dotconfig.core.path import split_path


def static_loader(tree: ConfigTree) -> ConfigLoader:
    """Loader returning a deep copy of a constant tree."""
    def load(registry) -> ConfigTree:
        return copy.deepcopy(tree)
    return load


def env_loader(mapping: Dict[str, Tuple[str, Any]]) -> ConfigLoader:
    """
    Loader building a tree from environment variables.

    Args:
        mapping: Dotted key inside the section -> (environment variable, default).
            The default's type picks the accessor: bool, int, list or str.

    Example:
        registry.register("database", env_loader({
            "host": ("DB_HOST", "localhost"),
            "port": ("DB_PORT", 5432),
            "options.debug": ("DB_DEBUG", False),
        }))
    """
    def load(registry) -> ConfigTree:
        tree: ConfigTree = {}
        for key, (env_key, default) in mapping.items():
            if isinstance(default, bool):
                value = registry.get_env_bool(env_key, default)
            elif isinstance(default, int):
                value = registry.get_env_int(env_key, default)
            elif isinstance(default, list):
                value = registry.get_env_string_array(env_key, default)
            else:
                value = registry.get_env_string(env_key, default)
            set_value(tree, split_path(key), value)
        return tree
    return load


def yaml_loader(path: Union[str, Path]) -> ConfigLoader:
    """
    Loader parsing a YAML file on every call.

    An empty file yields an empty tree. A document whose top level is not a
    mapping makes the loader raise, which the registry isolates like any
    other loader failure.
    """
    config_file = Path(path)

    def load(registry) -> ConfigTree:
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"top level of {config_file} is not a mapping")
        return data
    return load
