"""Shared helpers for route handlers: app keys, query parsing and image responses."""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from typing import Optional, TypeVar

from aiohttp import web

from ..config import Config
from ..exceptions import BadRequestError
from ..ha_client import HomeAssistantClient

T = TypeVar("T")

CONFIG_KEY = web.AppKey("config", Config)
HA_CLIENT_KEY = web.AppKey("ha_client", HomeAssistantClient)

IMAGE_CACHE_CONTROL = "public, max-age=300"


def parse_sensor_ids(raw: Optional[str], limit: Optional[int] = None) -> list[str]:
    """Split a comma separated ``sensors`` query value.

    Blank items are dropped and surrounding whitespace trimmed.

    Args:
        raw: Query value, may be None
        limit: Maximum number of ids accepted

    Returns:
        Entity ids in request order

    Raises:
        BadRequestError: If no ids remain or more than ``limit`` are given
    """
    sensor_ids = [part.strip() for part in (raw or "").split(",") if part.strip()]
    if not sensor_ids:
        raise BadRequestError("No sensors provided. Use ?sensors=sensor1,sensor2")
    if limit is not None and len(sensor_ids) > limit:
        raise BadRequestError(f"Too many sensors (max {limit} allowed)")
    return sensor_ids


def parse_dimension(raw: Optional[str], name: str, maximum: int) -> Optional[int]:
    """Parse a ``width``/``height`` query value.

    Returns:
        The integer value, or None when the parameter is absent

    Raises:
        BadRequestError: If the value is not an integer in ``1..maximum``
    """
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except ValueError:
        raise BadRequestError(f"Invalid '{name}' parameter: {raw!r}") from None
    if value < 1 or value > maximum:
        raise BadRequestError(f"'{name}' must be between 1 and {maximum}, got {value}")
    return value


def image_response(data: bytes, content_type: str) -> web.Response:
    """Response for rendered or proxied images, cacheable for five minutes."""
    return web.Response(
        body=data,
        content_type=content_type.split(";", 1)[0].strip() or "application/octet-stream",
        headers={"Cache-Control": IMAGE_CACHE_CONTROL},
    )


async def run_blocking(func: Callable[..., T], *args: object) -> T:
    """Run a CPU-bound render in the default executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args))
