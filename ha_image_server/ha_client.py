"""Async Home Assistant REST client.

Wraps the handful of Home Assistant endpoints the image server needs:
entity states, camera snapshots and image proxying. Every failure (non-2xx
status, timeout, refused connection, malformed payload) surfaces as
``HomeAssistantError`` so route handlers deal with a single exception type.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote, urlsplit

import aiohttp

from .config import Config
from .exceptions import HomeAssistantError
from .models import EntityRecord

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_CONTENT_TYPE = "image/jpeg"
CAMERA_DOMAIN_PREFIX = "camera."


class HomeAssistantClient:
    """Async HTTP client for the Home Assistant REST API.

    The ``aiohttp.ClientSession`` is created on first use and must be released
    with ``close()``.
    """

    def __init__(self, config: Config):
        """Initialize the client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session.

        Returns:
            Active ClientSession
        """
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.api_timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)

        return self._session

    async def close(self) -> None:
        """Close the underlying session, if one was opened."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
            logger.debug("Home Assistant client session closed")
        self._session = None

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.config.ha_token}"}

    def resolve_url(self, url: str) -> str:
        """Turn a Home Assistant relative path into an absolute URL.

        Absolute ``http``/``https`` URLs are returned unchanged; anything else
        is appended to the configured base URL.
        """
        if url.startswith("http://") or url.startswith("https://"):
            return url
        if not url.startswith("/"):
            url = "/" + url
        return f"{self.config.ha_url}{url}"

    def _is_home_assistant_url(self, url: str) -> bool:
        base = urlsplit(self.config.ha_url)
        target = urlsplit(url)
        return (target.scheme, target.netloc) == (base.scheme, base.netloc)

    async def _get_json(self, path: str, what: str) -> Any:
        url = self.config.get_api_endpoint(path)
        headers = {**self._auth_headers(), "Content-Type": "application/json"}
        try:
            session = await self._get_session()
            async with session.get(url, headers=headers) as response:
                if response.status < 200 or response.status >= 300:
                    raise HomeAssistantError(
                        f"Failed to get {what}: {response.status} {response.reason}",
                        upstream_status=response.status,
                    )
                return await response.json(content_type=None)
        except HomeAssistantError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as error:
            raise HomeAssistantError(f"Failed to get {what}: {error}") from error

    async def _get_bytes(self, url: str, what: str) -> tuple[bytes, str]:
        # Only send the token to the Home Assistant origin
        headers = self._auth_headers() if self._is_home_assistant_url(url) else {}
        try:
            session = await self._get_session()
            async with session.get(url, headers=headers) as response:
                if response.status < 200 or response.status >= 300:
                    raise HomeAssistantError(
                        f"Failed to fetch {what}: {response.status} {response.reason}",
                        upstream_status=response.status,
                    )
                content_type = response.headers.get("Content-Type", DEFAULT_IMAGE_CONTENT_TYPE)
                data = await response.read()
        except HomeAssistantError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as error:
            raise HomeAssistantError(f"Failed to fetch {what}: {error}") from error

        logger.debug("Fetched %s: %d bytes (%s)", what, len(data), content_type)
        return data, content_type

    async def get_entity_state(self, entity_id: str) -> EntityRecord:
        """Fetch one entity from ``/api/states/<entity_id>``.

        Raises:
            HomeAssistantError: On any request or payload failure
        """
        payload = await self._get_json(f"/api/states/{quote(entity_id, safe='')}", "entity state")
        if not isinstance(payload, dict):
            raise HomeAssistantError(f"Unexpected state payload for {entity_id}")
        try:
            return EntityRecord.from_api(payload)
        except ValueError as error:
            raise HomeAssistantError(f"Invalid state payload for {entity_id}: {error}") from error

    async def _get_entity_or_placeholder(self, entity_id: str) -> EntityRecord:
        try:
            return await self.get_entity_state(entity_id)
        except HomeAssistantError as error:
            logger.warning("Failed to get state for sensor %s: %s", entity_id, error)
            return EntityRecord.placeholder(entity_id)

    async def get_entities(self, entity_ids: Sequence[str]) -> list[EntityRecord]:
        """Fetch several entities concurrently.

        Order matches ``entity_ids``. Entities that fail to load are replaced by
        an unavailable placeholder instead of failing the whole batch.
        """
        return list(
            await asyncio.gather(*(self._get_entity_or_placeholder(eid) for eid in entity_ids))
        )

    async def list_states(self) -> list[dict[str, Any]]:
        """Fetch every entity state from ``/api/states``."""
        states = await self._get_json("/api/states", "states")
        if not isinstance(states, list):
            raise HomeAssistantError("Unexpected payload from /api/states")
        return [state for state in states if isinstance(state, dict)]

    async def list_camera_entities(self) -> list[dict[str, Any]]:
        """States of all ``camera.*`` entities."""
        states = await self.list_states()
        return [
            {
                "entity_id": state.get("entity_id"),
                "state": state.get("state"),
                "attributes": state.get("attributes") or {},
            }
            for state in states
            if str(state.get("entity_id", "")).startswith(CAMERA_DOMAIN_PREFIX)
        ]

    async def get_camera_snapshot(self, entity_id: str) -> tuple[bytes, str]:
        """Fetch a still image from ``/api/camera_proxy/<entity_id>``."""
        url = self.config.get_api_endpoint(f"/api/camera_proxy/{quote(entity_id, safe='')}")
        return await self._get_bytes(url, "camera snapshot")

    async def fetch_image(self, url: str) -> tuple[bytes, str]:
        """Fetch an image by absolute or Home Assistant relative URL.

        Returns:
            Image bytes and content type (``image/jpeg`` when not reported)
        """
        return await self._get_bytes(self.resolve_url(url), "image")
