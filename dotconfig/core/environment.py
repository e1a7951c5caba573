"""
Process environment access.

Covers the ``.env`` file loading done once at registry construction and the
typed accessors loaders use to read environment variables.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from dotenv import load_dotenv

from .coercion import parse_int

# Environment labels and the dotenv file each one loads
ENV_FILES: Dict[str, str] = {
    "development": ".env",
    "staging": ".env",
    "production": ".env",
    "testing": ".env.testing",
}


def env_file_for(env: str) -> Optional[str]:
    """Get the dotenv filename for an environment label, or None if the label is unknown."""
    return ENV_FILES.get(env)


def load_env_file(filename: str, base_dir: Optional[Union[str, Path]] = None) -> Path:
    """
    Load a dotenv file into ``os.environ``.

    Variables already present in the environment are left untouched.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    env_path = Path(base_dir or ".") / filename
    if not env_path.is_file():
        raise FileNotFoundError(f"open {env_path}: no such file or directory")

    load_dotenv(dotenv_path=env_path, override=False)
    return env_path


def env_string(key: str, default: str) -> str:
    return os.environ.get(key, default)


def env_int(key: str, default: int) -> int:
    """Read an integer variable, falling back to ``default`` when absent or unparsable."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return parse_int(value)
    except ValueError:
        return default


def env_bool(key: str, default: bool) -> bool:
    """Only ``true`` in any letter case reads as True; any other present value is False."""
    value = os.environ.get(key)
    if value is None:
        return default
    return value.lower() == "true"


def env_string_array(key: str, default: List[str]) -> List[str]:
    value = os.environ.get(key)
    if value is None:
        return default
    return [part.strip() for part in value.split(",")]
