"""
Central logging configuration for ha_image_server.

Console output goes through a colorlog formatter; noisy third-party loggers
are held at WARNING so rendering diagnostics stay readable, and every record
is stamped with the request id of the HTTP request that produced it.
"""

import logging
import os
import sys
from typing import Optional

from colorlog import ColoredFormatter

from .middleware import get_request_id

PACKAGE_LOGGER = "ha_image_server"

CONSOLE_FORMAT = (
    "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s [%(request_id)s] %(name)s: %(message)s"
)
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Third-party loggers and the level they are held at
SUPPRESSED_LOGGERS: dict[str, int] = {
    "aiohttp.access": logging.WARNING,
    "aiohttp.server": logging.WARNING,
    "aiohttp.client": logging.WARNING,
    "aiohttp.web": logging.INFO,
    "aiohttp.web_log": logging.WARNING,
    "asyncio": logging.WARNING,
    "PIL": logging.WARNING,
    "charset_normalizer": logging.WARNING,
    "multipart": logging.WARNING,
}

PACKAGE_MODULES = (
    PACKAGE_LOGGER,
    "ha_image_server.server",
    "ha_image_server.ha_client",
    "ha_image_server.routes",
    "ha_image_server.rendering",
)


class CorrelationIdFilter(logging.Filter):
    """Add the current request id to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def _has_correlation_filter(handler: logging.Handler) -> bool:
    return any(isinstance(f, CorrelationIdFilter) for f in handler.filters)


def init_console_logging(level_name: Optional[str] = "INFO") -> None:
    """Install a colorized console handler on the root logger.

    Does nothing to the handlers if the root logger already has one, so calling
    it twice never duplicates output. The level is always applied.

    Args:
        level_name: Logging level name, case-insensitive; unknown names mean INFO
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(
            ColoredFormatter(CONSOLE_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS)
        )
        handler.addFilter(CorrelationIdFilter())
        root.addHandler(handler)

    level = logging.INFO
    if isinstance(level_name, str):
        level = getattr(logging, level_name.upper(), logging.INFO)
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)
    logging.getLogger(__name__).debug(
        "Logging initialized at level %s", logging.getLevelName(level)
    )


def configure_logging(debug_mode: bool = False, force_debug: Optional[bool] = None) -> None:
    """
    Configure log levels for the server and its dependencies.

    Args:
        debug_mode: Whether to enable debug logging for ha_image_server modules
        force_debug: Override debug mode setting (None to use env var detection)

    Environment Variables:
        HA_IMAGE_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        HA_IMAGE_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("HA_IMAGE_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("HA_IMAGE_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if env_log_level in _VALID_LEVELS:
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    if not root_logger.handlers:
        init_console_logging(logging.getLevelName(root_level))
    else:
        for handler in root_logger.handlers:
            if not _has_correlation_filter(handler):
                handler.addFilter(CorrelationIdFilter())

    logger_config = dict(SUPPRESSED_LOGGERS)
    package_level = logging.DEBUG if final_debug else logging.INFO
    for module in PACKAGE_MODULES:
        logger_config[module] = package_level

    for logger_name, level in logger_config.items():
        logging.getLogger(logger_name).setLevel(level)

    if final_debug:
        root_logger.info(
            "Debug logging enabled for ha_image_server modules, third-party debug logs suppressed"
        )
    else:
        root_logger.info("Production logging configuration applied")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}

    key_loggers = [PACKAGE_LOGGER, "aiohttp.access", "aiohttp.server", "asyncio"]
    for logger_name in key_loggers:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)

    return status
