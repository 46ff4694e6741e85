"""Shared fixtures for the ha_image_server test suite."""

from collections.abc import Generator
from typing import Any, Callable, Optional

import pytest

from ha_image_server.config import Config
from ha_image_server.models import EntityRecord

ENV_VARS = (
    "HA_URL",
    "HA_TOKEN",
    "HOST",
    "PORT",
    "HA_API_TIMEOUT",
    "HA_IMAGE_MAX_DIMENSION",
    "HA_IMAGE_LOG_LEVEL",
    "HA_IMAGE_DEBUG",
)


def pytest_configure(config: Any) -> None:
    """Register markers used across the suite."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: In-process aiohttp application tests")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, Any, None]:
    """Keep host environment variables out of configuration tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def test_config() -> Config:
    """Deterministic configuration pointing at a fake Home Assistant."""
    return Config(
        ha_token="test-token",
        ha_url="http://ha.local:8123",
        api_timeout=5,
        server_bind="127.0.0.1",
        server_port=3000,
        max_image_dimension=2000,
    )


@pytest.fixture
def make_entity() -> Callable[..., EntityRecord]:
    """Factory for EntityRecord instances.

    Usage: ``make_entity("sensor.power", "12.5", unit="kWh", friendly_name="Power")``
    """

    def _make(
        entity_id: str = "sensor.test",
        state: str = "on",
        unit: Optional[str] = None,
        friendly_name: Optional[str] = None,
        **attributes: Any,
    ) -> EntityRecord:
        attrs: dict[str, Any] = {}
        if unit is not None:
            attrs["unit_of_measurement"] = unit
        if friendly_name is not None:
            attrs["friendly_name"] = friendly_name
        attrs.update(attributes)
        return EntityRecord(entity_id=entity_id, state=state, attributes=attrs)

    return _make
