"""Image proxy routes: camera snapshots and entity pictures."""

from __future__ import annotations

import logging

from aiohttp import web

from ..exceptions import BadRequestError, EntityImageNotFoundError, HomeAssistantError
from ..ha_client import CAMERA_DOMAIN_PREFIX
from .common import HA_CLIENT_KEY, image_response

logger = logging.getLogger(__name__)

# Attributes checked, in order, for an entity's image URL
IMAGE_ATTRIBUTES = (
    "entity_picture",
    "image_url",
    "picture",
    "thumbnail",
    "media_content_id",
)


def register_image_routes(app: web.Application) -> None:
    """Register ``/image/entity/{entity_id}`` and ``/image/url``.

    Args:
        app: aiohttp web application holding the Home Assistant client
    """

    async def entity_image(request: web.Request) -> web.Response:
        """Serve a camera snapshot or the first usable image attribute of an entity."""
        client = request.app[HA_CLIENT_KEY]
        entity_id = request.match_info["entity_id"]
        logger.info("Serving image for entity: %s", entity_id)

        if entity_id.startswith(CAMERA_DOMAIN_PREFIX):
            try:
                data, content_type = await client.get_camera_snapshot(entity_id)
                return image_response(data, content_type)
            except HomeAssistantError as error:
                logger.warning("Failed to get camera snapshot for %s: %s", entity_id, error)

        try:
            entity = await client.get_entity_state(entity_id)
        except HomeAssistantError as error:
            raise HomeAssistantError(
                f"Failed to get entity state: {error.message}", upstream_status=error.upstream_status
            ) from error

        for attribute in IMAGE_ATTRIBUTES:
            url = entity.string_attribute(attribute)
            if not url:
                continue
            try:
                data, content_type = await client.fetch_image(url)
                return image_response(data, content_type)
            except HomeAssistantError as error:
                logger.warning("Failed to fetch image from %s: %s", url, error)

        raise EntityImageNotFoundError(f"No image found for entity: {entity_id}")

    async def url_image(request: web.Request) -> web.Response:
        """Proxy an absolute or Home Assistant relative image URL."""
        client = request.app[HA_CLIENT_KEY]
        url = request.query.get("url")
        if not url:
            raise BadRequestError("Missing 'url' parameter")

        logger.info("Serving image from URL: %s", url)
        data, content_type = await client.fetch_image(url)
        return image_response(data, content_type)

    app.router.add_get("/image/entity/{entity_id}", entity_image)
    app.router.add_get("/image/url", url_image)
