"""
Centralized configuration management.

Values are resolved from, in increasing priority:
1) `env.example` (committed, safe placeholders)
2) `env.local` (optional, MUST NOT be committed)
3) System environment variables
"""

import os
from pathlib import Path

from dotenv import dotenv_values
from loguru import logger
from pydantic import BaseModel


class EnvironConfig:
    """
    Singleton configuration class that loads environment variables from env files
    and system environment, providing dictionary-like access with default values.
    """

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(EnvironConfig, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._config = {}
            self._load_config()
            EnvironConfig._initialized = True

    def _load_config(self):
        root = Path(__file__).parent.parent

        example_path = root / "env.example"
        if example_path.exists():
            self._config.update(dotenv_values(example_path))
            logger.debug("Loaded environment variables from {}", example_path)

        local_path = root / "env.local"
        if local_path.exists():
            self._config.update(dotenv_values(local_path))
            logger.debug("Loaded and overrode environment variables from {}", local_path)

        self._config.update(os.environ)

    def __getitem__(self, key):
        """
        Get configuration value by key.

        Raises:
            KeyError: If key not found
        """
        if key not in self._config:
            raise KeyError(f"Configuration key '{key}' not found")

        return self._config[key]

    def get(self, key, default=None):
        return self._config.get(key, default)

    def reload(self):
        """
        Reload configuration from files and environment.
        Useful for testing or when configuration files change.
        """
        self._config.clear()
        self._load_config()
        logger.info("Configuration reloaded")


config = EnvironConfig()


class WebinarEnvironConfig(BaseModel):
    DEBUG: bool = False

    # Prefix of the per-request tracking id: "<namespace>_<uuid4>"
    WEBINAR_CLIENT_NAMESPACE: str = "webinar-client"

    # Transport timeout, the gateway itself has no timeout layer
    WEBINAR_HTTP_TIMEOUT_SECONDS: float = 30.0

    # Optional static bearer token for StaticTokenProvider.from_config()
    WEBINAR_USER_TOKEN: str | None = None

    @classmethod
    def from_environ(cls, source: EnvironConfig | None = None) -> "WebinarEnvironConfig":
        source = source if source is not None else config
        return cls(
            DEBUG=str(source.get("DEBUG", "false")).strip().lower() == "true",
            WEBINAR_CLIENT_NAMESPACE=(source.get("WEBINAR_CLIENT_NAMESPACE") or "").strip()
            or "webinar-client",
            WEBINAR_HTTP_TIMEOUT_SECONDS=float(
                (source.get("WEBINAR_HTTP_TIMEOUT_SECONDS") or "").strip() or 30
            ),
            WEBINAR_USER_TOKEN=(source.get("WEBINAR_USER_TOKEN") or "").strip() or None,
        )


_webinar_environ_config: WebinarEnvironConfig | None = None


def get_webinar_environ_config() -> WebinarEnvironConfig:
    global _webinar_environ_config
    if _webinar_environ_config is None:
        _webinar_environ_config = WebinarEnvironConfig.from_environ()
    return _webinar_environ_config


def reset_webinar_environ_config() -> None:
    """Drop the cached settings so the next access re-reads the environment."""
    global _webinar_environ_config
    _webinar_environ_config = None
