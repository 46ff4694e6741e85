"""ha_image_server - render Home Assistant entities as PNG images for small displays.

Serves camera snapshots and entity pictures from Home Assistant, and renders
status cards, multi-sensor panels and 800x480 1-bit TRMNL e-paper panels with a
built-in bitmap font rasterizer.
"""

__version__ = "0.1.0"

from typing import Any, Optional


def run_server(args: Optional[Any] = None) -> None:
    """Load configuration, set up logging and run the server.

    Args:
        args: Optional argparse namespace with ``host``, ``port`` and ``debug``

    Raises:
        ConfigurationError: If required configuration (HA_TOKEN) is missing
    """
    import logging
    import os

    from .config import Config
    from .logging_config import configure_logging, init_console_logging
    from .server import start_server

    init_console_logging(os.environ.get("HA_IMAGE_LOG_LEVEL"))
    logger = logging.getLogger(__name__)

    config = Config.from_env()

    if args is not None:
        host = getattr(args, "host", None)
        if host:
            config.server_bind = host
        port = getattr(args, "port", None)
        if port is not None:
            config.server_port = int(port)
            logger.debug("Applied command line port override: %d", config.server_port)
        if getattr(args, "debug", False):
            config.debug_logging = True

    configure_logging(debug_mode=config.debug_logging)
    logger.info("Starting Home Assistant Image Server")
    start_server(config)
