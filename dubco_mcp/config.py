"""
Runtime configuration for the Dub.co MCP server.

Values come from the process environment, optionally seeded from a .env file:

    DUBCO_API_KEY       (required) Dub.co workspace API key
    DUBCO_API_BASE_URL  API root, default https://api.dub.co
    DUBCO_LOG_LEVEL     logging level name, default INFO
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

API_BASE_URL = "https://api.dub.co"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(RuntimeError):
    """Raised when the server cannot start with the given configuration."""


@dataclass
class Settings:
    api_key: str
    base_url: str = API_BASE_URL
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        if not self.api_key:
            raise ConfigurationError("DUBCO_API_KEY environment variable is required")
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.log_level} (expected one of {', '.join(LOG_LEVELS)})")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            api_key=env.get("DUBCO_API_KEY", "").strip(),
            base_url=env.get("DUBCO_API_BASE_URL") or API_BASE_URL,
            log_level=(env.get("DUBCO_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )


def load_env_file(path: Optional[Path] = None) -> bool:
    """Load a .env file (cwd by default) without overriding real env vars."""
    if path is None:
        return load_dotenv()
    return load_dotenv(path)
