"""aiohttp server for the image server.

``make_app`` builds the application; ``start_server`` runs it until SIGINT or
SIGTERM.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import Optional

from aiohttp import web

from .config import Config
from .ha_client import HomeAssistantClient
from .middleware import correlation_id_middleware, cors_middleware, error_middleware
from .routes import (
    CONFIG_KEY,
    HA_CLIENT_KEY,
    register_api_routes,
    register_image_routes,
    register_render_routes,
)

logger = logging.getLogger(__name__)

ROUTE_SUMMARY = (
    ("/health", "Health check"),
    ("/image/entity/{entity_id}", "Serve image for Home Assistant entity"),
    ("/image/url?url={url}", "Serve image from Home Assistant URL"),
    ("/status/{entity_id}", "Render entity status as static image"),
    ("/multi-status?sensors={sensor1,sensor2}", "Render multiple sensors"),
    ("/trmnl?sensors={sensor1,sensor2}", "Render TRMNL 1-bit 800x480 display"),
    ("/cameras", "List all camera entities"),
)


def make_app(config: Config, client: Optional[HomeAssistantClient] = None) -> web.Application:
    """Create the aiohttp application.

    Args:
        config: Server configuration
        client: Home Assistant client; a new one is created from ``config`` when
            omitted. The client is closed when the application shuts down.

    Returns:
        Configured web.Application
    """
    app = web.Application(
        middlewares=[correlation_id_middleware, cors_middleware, error_middleware]
    )
    app[CONFIG_KEY] = config
    app[HA_CLIENT_KEY] = client if client is not None else HomeAssistantClient(config)

    register_api_routes(app)
    register_image_routes(app)
    register_render_routes(app)

    async def _close_client(app: web.Application) -> None:
        await app[HA_CLIENT_KEY].close()
        logger.debug("Home Assistant client closed")

    app.on_cleanup.append(_close_client)
    logger.debug("Web application created")
    return app


async def _serve(config: Config, stop_event: Optional[asyncio.Event] = None) -> None:
    """Run the server until ``stop_event`` is set.

    When no event is passed, one is created and wired to SIGINT/SIGTERM.
    """
    app = make_app(config)
    runner = web.AppRunner(app)
    await runner.setup()

    site = web.TCPSite(runner, host=config.server_bind, port=config.server_port)
    try:
        await site.start()
    except OSError:
        logger.exception("Failed to start server on %s:%d", config.server_bind, config.server_port)
        await runner.cleanup()
        raise

    logger.info("Server started on http://%s:%d", config.server_bind, config.server_port)
    logger.info("Home Assistant URL: %s", config.ha_url)
    for path, description in ROUTE_SUMMARY:
        logger.info("  GET %s - %s", path, description)

    if stop_event is None:
        stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()

        def _on_signal() -> None:
            logger.info("Shutdown signal received")
            stop_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                loop.add_signal_handler(sig, _on_signal)

    await stop_event.wait()
    logger.info("Stop event received, shutting down")

    await runner.cleanup()
    logger.info("Server shutdown complete")


def start_server(config: Config) -> None:
    """Start the asyncio event loop and HTTP server.

    Blocks the calling thread until SIGINT/SIGTERM is received.
    """
    try:
        asyncio.run(_serve(config))
    except KeyboardInterrupt:
        logger.info("Interrupted, server stopped")
