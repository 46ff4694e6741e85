"""Health and entity listing routes."""

from __future__ import annotations

import logging

from aiohttp import web

from .common import HA_CLIENT_KEY

logger = logging.getLogger(__name__)


def register_api_routes(app: web.Application) -> None:
    """Register ``/health`` and ``/cameras``.

    Args:
        app: aiohttp web application holding the Home Assistant client
    """

    async def health_check(_request: web.Request) -> web.Response:
        """Liveness probe; does not contact Home Assistant."""
        return web.Response(text="OK")

    async def list_cameras(request: web.Request) -> web.Response:
        """List the states of all camera entities."""
        client = request.app[HA_CLIENT_KEY]
        cameras = await client.list_camera_entities()
        logger.debug("Found %d camera entities", len(cameras))
        return web.json_response(cameras)

    app.router.add_get("/health", health_check)
    app.router.add_get("/cameras", list_cameras)
