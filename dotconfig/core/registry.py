"""
Configuration registry for managing named configuration sections.

Each section is produced by a loader callback and addressed with dot
notation, e.g. ``database.connections.mysql.host`` where ``database`` is the
section name. The registry is a process-wide singleton obtained through
``get_config_registry``.
"""

import copy
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from readerwriterlock import rwlock

from . import coercion, environment
from .errors import (
    ConfigError, ConfigPathError, RegistryInitError, SectionNilError, SectionNotFoundError, UnmarshalError
)
from .path import PathCache, get_path_cache
from .tree import ConfigLoader, ConfigTree, Value, set_value, traverse
from .unmarshal import check_target, unmarshal_into
from dotconfig.logger import get_dotconfig_logger, init_logger
from dotconfig.logging_config import LoggingConfig

_MISSING = object()

_registry: Optional["ConfigRegistry"] = None
_registry_lock = threading.Lock()


class ConfigRegistry:
    """
    Thread-safe registry of configuration sections.

    Readers share a read permit on the section map; ``register``, ``set`` and
    ``refresh`` take the exclusive write permit. Loaders run outside the lock
    and their trees are committed as a whole, so a reader sees either the
    previous tree of a section or the new one.
    """

    def __init__(self, env: str = "", path_cache: Optional[PathCache] = None):
        self.env = env
        self.logger = get_dotconfig_logger().bind(component="ConfigRegistry")
        self._lock = rwlock.RWLockFair()
        self._path_cache = path_cache or get_path_cache()

        self._sections: Dict[str, Optional[ConfigTree]] = {}
        self._loaders: Dict[str, ConfigLoader] = {}

    # Loader lifecycle

    def register(self, name: str, loader: ConfigLoader):
        """
        Register a section with its loader and populate it immediately.

        A loader that raises leaves an empty section behind; the failure is
        logged and not propagated.

        The loader runs before the write permit is taken, so it may call back
        into the registry (``get_env_*``, ``get`` on other sections). Only the
        resulting tree is committed under the lock.

        Args:
            name: Section name, the first segment of every path into it
            loader: Callable receiving this registry and returning the section tree
        """
        try:
            tree = loader(self)
            failed = False
        except Exception:
            self.logger.exception("Config loader failed", section=name)
            tree, failed = {}, True

        with self._lock.gen_wlock():
            self._loaders[name] = loader
            self._sections[name] = tree

        if not failed:
            self.logger.debug("Config section registered", section=name)

    def unregister(self, name: str) -> bool:
        """Drop a section and its loader. Returns False if the section was unknown."""
        with self._lock.gen_wlock():
            known = name in self._loaders or name in self._sections
            self._loaders.pop(name, None)
            self._sections.pop(name, None)
        return known

    def refresh(self):
        """
        Reload every section by calling its loader again.

        A failing loader keeps its previous tree and does not stop the others.
        """
        with self._lock.gen_rlock():
            loaders = list(self._loaders.items())

        results = []
        failures = []
        for name, loader in loaders:
            try:
                results.append((name, loader, loader(self)))
            except Exception:
                self.logger.exception("Config loader failed during refresh", section=name)
                failures.append((name, loader))

        with self._lock.gen_wlock():
            for name, loader, tree in results:
                # A section re-registered while its old loader ran keeps the newer tree
                if self._loaders.get(name) is loader:
                    self._sections[name] = tree
            for name, loader in failures:
                if self._loaders.get(name) is loader:
                    self._sections.setdefault(name, {})

        self.logger.debug("Config sections refreshed", sections=len(results), failed=len(failures))

    # Path access

    def get(self, path: str) -> Value:
        """
        Get a value by dot notation, e.g. ``get("database.connections.mysql.host")``.

        A single-segment path returns the whole section tree.

        Raises:
            SectionNotFoundError: If the section is not registered
            SectionNilError: If the section's loader returned None
            KeyNotFoundError: If a key along the path is absent
            NotAMapError: If the path runs through a scalar
        """
        with self._lock.gen_rlock():
            return self._lookup(path)

    def _lookup(self, path: str) -> Value:
        parts = self._path_cache.get(path)

        section = parts[0]
        if section not in self._sections:
            raise SectionNotFoundError(f"config section not found: '{section}' in path '{path}'", path=path)

        config = self._sections[section]
        if config is None:
            raise SectionNilError(f"config section is nil: '{section}' in path '{path}'", path=path)
        if len(parts) == 1:
            return config
        return traverse(config, parts[1:], path)

    def set(self, path: str, value: Value):
        """
        Set a value by dot notation, creating intermediate mappings as needed.

        Raises:
            ConfigPathError: If the path has fewer than two segments
            SectionNotFoundError: If the section is not registered
        """
        parts = self._path_cache.get(path)
        if len(parts) < 2:
            raise ConfigPathError(f"invalid config path: {path}", path=path)

        section = parts[0]
        with self._lock.gen_wlock():
            if section not in self._sections:
                raise SectionNotFoundError(f"config section not found: {section}", path=path)
            config = self._sections[section]
            if config is None:
                raise SectionNilError(f"config section is nil: '{section}' in path '{path}'", path=path)
            set_value(config, parts[1:], value)

    # Typed getters

    def _get_or_default(self, path: str, default: Any):
        try:
            return self.get(path), False
        except ConfigError:
            if default is _MISSING:
                raise
            return default, True

    def get_string(self, path: str, default: Union[str, object] = _MISSING) -> str:
        value, defaulted = self._get_or_default(path, default)
        if defaulted:
            return value
        return coercion.coerce_string(value, path)

    def get_int(self, path: str, default: Union[int, object] = _MISSING) -> int:
        """Get an int; floats are truncated and base-10 strings are parsed."""
        value, defaulted = self._get_or_default(path, default)
        if defaulted:
            return value
        return coercion.coerce_int(value, path)

    def get_bool(self, path: str, default: Union[bool, object] = _MISSING) -> bool:
        """Get a bool; strings such as ``true``, ``F`` or ``1`` are parsed."""
        value, defaulted = self._get_or_default(path, default)
        if defaulted:
            return value
        return coercion.coerce_bool(value, path)

    def get_float(self, path: str, default: Union[float, object] = _MISSING) -> float:
        value, defaulted = self._get_or_default(path, default)
        if defaulted:
            return value
        return coercion.coerce_float(value, path)

    def get_string_array(self, path: str, default: Union[List[str], object] = _MISSING) -> List[str]:
        """Get a list of strings; comma-separated strings are split and stripped."""
        value, defaulted = self._get_or_default(path, default)
        if defaulted:
            return value
        return coercion.coerce_string_array(value, path)

    # Environment accessors

    def get_env_string(self, key: str, default: str) -> str:
        return environment.env_string(key, default)

    def get_env_int(self, key: str, default: int) -> int:
        return environment.env_int(key, default)

    def get_env_bool(self, key: str, default: bool) -> bool:
        return environment.env_bool(key, default)

    def get_env_string_array(self, key: str, default: List[str]) -> List[str]:
        return environment.env_string_array(key, default)

    # Unmarshalling

    def unmarshal(self, section: str, target: Any):
        """
        Fill the dataclass instance ``target`` from a whole section.

        Raises:
            UnmarshalError: If the target is invalid or a field cannot be set
            SectionNotFoundError: If the section is not registered
        """
        check_target(target)
        with self._lock.gen_rlock():
            if section not in self._sections:
                raise SectionNotFoundError(f"config section not found: '{section}'", path=section)
            config = self._sections[section]
            if config is None:
                raise SectionNilError(f"config section is nil: '{section}'", path=section)
            unmarshal_into(config, target)

    def unmarshal_key(self, path: str, target: Any):
        """Fill the dataclass instance ``target`` from the mapping at ``path``."""
        check_target(target)
        with self._lock.gen_rlock():
            value = self._lookup(path)
            if not isinstance(value, dict):
                raise UnmarshalError(f"value at '{path}' is not a map", path=path, value=value)
            unmarshal_into(value, target)

    # Introspection

    def sections(self) -> List[str]:
        """List registered section names."""
        with self._lock.gen_rlock():
            return sorted(self._sections)

    def has_section(self, name: str) -> bool:
        with self._lock.gen_rlock():
            return name in self._sections

    def snapshot(self) -> Dict[str, Optional[ConfigTree]]:
        """Deep copy of every section."""
        with self._lock.gen_rlock():
            return copy.deepcopy(self._sections)


def get_config_registry(env: str, base_dir: Optional[Union[str, Path]] = None) -> ConfigRegistry:
    """
    Get or create the global configuration registry.

    The first successful call loads the dotenv file matching ``env``
    (``.env`` for development, staging and production, ``.env.testing`` for
    testing) and builds the registry. Later calls return the same instance
    whatever label they pass. A failed first call leaves nothing behind, so
    it can be retried.

    Args:
        env: Environment label
        base_dir: Directory holding the dotenv files, defaults to the working directory

    Raises:
        RegistryInitError: If ``env`` is empty or unknown, or its dotenv file cannot be loaded
    """
    global _registry

    registry = _registry
    if registry is None:
        with _registry_lock:
            registry = _registry
            if registry is None:
                registry = _build_registry(env, base_dir)
                _registry = registry
                return registry

    if env != registry.env:
        registry.logger.warning("Config registry already initialized, ignoring env",
                                env=env, active_env=registry.env)
    return registry


def _build_registry(env: str, base_dir: Optional[Union[str, Path]]) -> ConfigRegistry:
    if not env:
        raise RegistryInitError("env is required when initializing config registry")

    filename = environment.env_file_for(env)
    if filename is None:
        raise RegistryInitError(f"invalid env: {env}")

    try:
        environment.load_env_file(filename, base_dir)
    except OSError as e:
        raise RegistryInitError(f"error loading {filename} file: {e}") from e

    # Loggers bound before structlog is configured keep its defaults
    init_logger(LoggingConfig.from_environment())
    registry = ConfigRegistry(env)
    registry.logger.info("ConfigRegistry initialized", env=env, env_file=filename)
    return registry


def reset_config_registry():
    """Discard the global registry so the next ``get_config_registry`` call builds a new one."""
    global _registry
    with _registry_lock:
        _registry = None
