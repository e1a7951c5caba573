"""
Logging settings for the dotconfig package itself.

The settings are read from the process environment once the registry has
loaded its dotenv file, so a ``.env`` file can tune the package's own output.
"""

from dataclasses import dataclass
from typing import Any, Dict

from dotconfig.core import environment

LOG_LEVEL_ENV = "DOTCONFIG_LOG_LEVEL"
JSON_LOGS_ENV = "DOTCONFIG_JSON_LOGS"
DEBUG_ENV = "DOTCONFIG_DEBUG"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    level: str = "INFO"
    json_logs: bool = False
    debug: bool = False

    def __post_init__(self):
        self.level = self.level.upper()
        if self.level not in LOG_LEVELS:
            self.level = "INFO"

    @classmethod
    def from_environment(cls) -> 'LoggingConfig':
        """Build the settings from the process environment."""
        return cls(
            level=environment.env_string(LOG_LEVEL_ENV, "INFO"),
            json_logs=environment.env_bool(JSON_LOGS_ENV, False),
            debug=environment.env_bool(DEBUG_ENV, False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'level': self.level,
            'json_logs': self.json_logs,
            'debug': self.debug,
        }
