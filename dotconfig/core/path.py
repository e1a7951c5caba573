"""
Dot-notation path splitting with a process-wide memo cache.
"""

from typing import Dict, List

PATH_SEPARATOR = "."


def split_path(path: str) -> List[str]:
    """Split a dotted path on '.', keeping empty segments."""
    return path.split(PATH_SEPARATOR)


class PathCache:
    """
    Memoizes split paths.

    Entries never expire. Lookups are plain dict reads and inserts go through
    ``dict.setdefault``, so concurrent callers racing on the same path all get
    back the list that won the insert.
    """

    def __init__(self):
        self._cache: Dict[str, List[str]] = {}

    def get(self, path: str) -> List[str]:
        """Get the segments of ``path``, splitting it on first use."""
        parts = self._cache.get(path)
        if parts is None:
            parts = self._cache.setdefault(path, split_path(path))
        return parts

    def clear(self):
        """Drop every cached entry."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, path: str) -> bool:
        return path in self._cache


_default_cache = PathCache()


def get_path_cache() -> PathCache:
    """Get the cache shared by the registry and the schema validator."""
    return _default_cache
