"""Rendered PNG routes: status card, multi-sensor panel and TRMNL panel."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from aiohttp import web

from ..exceptions import HomeAssistantError
from ..models import EntityRecord
from ..rendering import PNG_CONTENT_TYPE, encode_png
from ..rendering.layouts import multi_sensor, status_card, trmnl_panel
from .common import (
    CONFIG_KEY,
    HA_CLIENT_KEY,
    image_response,
    parse_dimension,
    parse_sensor_ids,
    run_blocking,
)

logger = logging.getLogger(__name__)


def _render_status_png(entity: EntityRecord, width: int, height: int) -> bytes:
    return encode_png(status_card.render_status_card(entity, width, height))


def _render_multi_png(
    entities: Sequence[EntityRecord], width: int, height: Optional[int], title: Optional[str]
) -> bytes:
    return encode_png(multi_sensor.render_multi_sensor(entities, width, height, title))


def _render_trmnl_png(entities: Sequence[EntityRecord], title: Optional[str]) -> bytes:
    return encode_png(trmnl_panel.render_trmnl_panel(entities, title), bilevel=True)


def register_render_routes(app: web.Application) -> None:
    """Register ``/status/{entity_id}``, ``/multi-status`` and ``/trmnl``.

    Rendering runs in the default executor so large panels do not stall the
    event loop.

    Args:
        app: aiohttp web application holding config and the Home Assistant client
    """

    async def entity_status(request: web.Request) -> web.Response:
        """Render the status card for one entity."""
        config = request.app[CONFIG_KEY]
        client = request.app[HA_CLIENT_KEY]
        entity_id = request.match_info["entity_id"]
        logger.info("Rendering status image for entity: %s", entity_id)

        width = parse_dimension(request.query.get("width"), "width", config.max_image_dimension)
        height = parse_dimension(request.query.get("height"), "height", config.max_image_dimension)

        try:
            entity = await client.get_entity_state(entity_id)
        except HomeAssistantError as error:
            raise HomeAssistantError(
                f"Failed to get entity state: {error.message}", upstream_status=error.upstream_status
            ) from error

        png = await run_blocking(
            _render_status_png,
            entity,
            width or status_card.DEFAULT_WIDTH,
            height or status_card.DEFAULT_HEIGHT,
        )
        return image_response(png, PNG_CONTENT_TYPE)

    async def multi_status(request: web.Request) -> web.Response:
        """Render the multi-sensor list panel."""
        config = request.app[CONFIG_KEY]
        client = request.app[HA_CLIENT_KEY]
        logger.info("Rendering multi-sensor status image")

        sensor_ids = parse_sensor_ids(request.query.get("sensors"), multi_sensor.MAX_ENTITIES)
        width = parse_dimension(request.query.get("width"), "width", config.max_image_dimension)
        height = parse_dimension(request.query.get("height"), "height", config.max_image_dimension)
        title = request.query.get("title")

        entities = await client.get_entities(sensor_ids)
        png = await run_blocking(
            _render_multi_png, entities, width or multi_sensor.DEFAULT_WIDTH, height, title
        )
        return image_response(png, PNG_CONTENT_TYPE)

    async def trmnl(request: web.Request) -> web.Response:
        """Render the 800x480 1-bit TRMNL panel."""
        client = request.app[HA_CLIENT_KEY]
        logger.info("Rendering TRMNL sensor display")

        sensor_ids = parse_sensor_ids(request.query.get("sensors"), trmnl_panel.MAX_ENTITIES)
        title = request.query.get("title")

        entities = await client.get_entities(sensor_ids)
        png = await run_blocking(_render_trmnl_png, entities, title)
        return image_response(png, PNG_CONTENT_TYPE)

    app.router.add_get("/status/{entity_id}", entity_status)
    app.router.add_get("/multi-status", multi_status)
    app.router.add_get("/trmnl", trmnl)
