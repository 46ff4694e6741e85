"""Configuration management for the image server.

Settings come from environment variables, optionally seeded from a ``.env``
file in the working directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_HA_URL = "http://localhost:8123"
DEFAULT_BIND = "0.0.0.0"  # nosec B104
DEFAULT_PORT = 3000
DEFAULT_API_TIMEOUT = 30
DEFAULT_MAX_IMAGE_DIMENSION = 2000

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_int(name: str, default: int) -> int:
    """Read a positive integer environment variable, falling back on bad input."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s: %r, using default %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Non-positive value for %s: %d, using default %d", name, value, default)
        return default
    return value


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass
class Config:
    """Image server configuration."""

    # Home Assistant backend
    ha_token: str
    ha_url: str = DEFAULT_HA_URL
    api_timeout: int = DEFAULT_API_TIMEOUT  # seconds

    # HTTP server
    server_bind: str = DEFAULT_BIND
    server_port: int = DEFAULT_PORT

    # Upper bound for width/height query parameters
    max_image_dimension: int = DEFAULT_MAX_IMAGE_DIMENSION

    # Logging
    log_level: str = "INFO"
    debug_logging: bool = False

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> Config:
        """Load configuration from environment variables.

        Environment Variables:
            HA_URL - Home Assistant base URL
            HA_TOKEN - Long-lived access token (required)
            HOST - Interface to bind the HTTP server to
            PORT - HTTP server port
            HA_API_TIMEOUT - Home Assistant request timeout in seconds
            HA_IMAGE_MAX_DIMENSION - Largest accepted width/height
            HA_IMAGE_LOG_LEVEL - Logging level (DEBUG, INFO, WARNING, ERROR)
            HA_IMAGE_DEBUG - Enable debug logging

        Args:
            env_file: Optional path of a .env file; defaults to ``.env`` lookup

        Returns:
            Config instance with values from environment

        Raises:
            ConfigurationError: If HA_TOKEN is not set
        """
        if load_dotenv(env_file):
            logger.debug("Loaded environment variables from %s", env_file or ".env")

        ha_token = os.getenv("HA_TOKEN", "").strip()
        if not ha_token:
            raise ConfigurationError("HA_TOKEN environment variable is required")

        ha_url = os.getenv("HA_URL", DEFAULT_HA_URL).strip() or DEFAULT_HA_URL

        # Strip trailing slash from base URL
        ha_url = ha_url.rstrip("/")

        return cls(
            ha_token=ha_token,
            ha_url=ha_url,
            api_timeout=_env_int("HA_API_TIMEOUT", DEFAULT_API_TIMEOUT),
            server_bind=os.getenv("HOST", DEFAULT_BIND),
            server_port=_env_int("PORT", DEFAULT_PORT),
            max_image_dimension=_env_int("HA_IMAGE_MAX_DIMENSION", DEFAULT_MAX_IMAGE_DIMENSION),
            log_level=os.getenv("HA_IMAGE_LOG_LEVEL", "INFO").upper(),
            debug_logging=_env_bool("HA_IMAGE_DEBUG"),
        )

    def get_api_endpoint(self, path: str) -> str:
        """Get full Home Assistant URL for a path.

        Args:
            path: API path (e.g., "/api/states/sensor.x")

        Returns:
            Full URL (e.g., "http://localhost:8123/api/states/sensor.x")
        """
        # Ensure path starts with /
        if not path.startswith("/"):
            path = "/" + path

        return f"{self.ha_url}{path}"
