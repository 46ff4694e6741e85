"""Tests for ha_image_server.logging_config."""

import logging
import os
from collections.abc import Generator
from typing import Any
from unittest.mock import patch

import pytest
from colorlog import ColoredFormatter

from ha_image_server.logging_config import (
    PACKAGE_MODULES,
    SUPPRESSED_LOGGERS,
    CorrelationIdFilter,
    configure_logging,
    get_logging_status,
    init_console_logging,
)
from ha_image_server.middleware import request_id_var

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, Any, None]:
    """Restore root handlers and logger levels touched by these tests."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_filters = {handler: list(handler.filters) for handler in saved_handlers}
    names = [*SUPPRESSED_LOGGERS, *PACKAGE_MODULES]
    saved_levels = {name: logging.getLogger(name).level for name in names}
    saved_root_level = root.level

    yield

    root.handlers[:] = saved_handlers
    for handler, filters in saved_filters.items():
        handler.filters[:] = filters
    root.setLevel(saved_root_level)
    for name, level in saved_levels.items():
        logging.getLogger(name).setLevel(level)


class TestInitConsoleLogging:
    """Tests for init_console_logging."""

    def test_init_when_no_handlers_then_installs_colored_handler(self) -> None:
        # Arrange
        logging.getLogger().handlers[:] = []

        # Act
        init_console_logging("WARNING")

        # Assert
        root = logging.getLogger()
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler.formatter, ColoredFormatter)
        assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)
        assert root.level == logging.WARNING

    def test_init_when_called_twice_then_single_handler(self) -> None:
        logging.getLogger().handlers[:] = []

        init_console_logging()
        init_console_logging("DEBUG")

        assert len(logging.getLogger().handlers) == 1
        assert logging.getLogger().level == logging.DEBUG

    @pytest.mark.parametrize("level_name", [None, "nonsense", "basic_format"])
    def test_init_when_unknown_level_then_info(self, level_name: Any) -> None:
        init_console_logging(level_name)

        assert logging.getLogger().level == logging.INFO


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_configure_when_default_then_production_levels(self) -> None:
        configure_logging()

        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("ha_image_server").level == logging.INFO
        assert logging.getLogger("aiohttp.access").level == logging.WARNING
        assert logging.getLogger("PIL").level == logging.WARNING

    def test_configure_when_debug_then_package_debug_third_party_suppressed(self) -> None:
        configure_logging(debug_mode=True)

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("ha_image_server").level == logging.DEBUG
        assert logging.getLogger("aiohttp.access").level == logging.WARNING

    def test_configure_when_force_debug_false_then_overrides_debug_mode(self) -> None:
        configure_logging(debug_mode=True, force_debug=False)

        assert logging.getLogger("ha_image_server").level == logging.INFO

    @patch.dict(os.environ, {"HA_IMAGE_DEBUG": "true"})
    def test_configure_when_env_debug_then_debug(self) -> None:
        configure_logging(debug_mode=False)

        assert logging.getLogger("ha_image_server").level == logging.DEBUG

    @patch.dict(os.environ, {"HA_IMAGE_LOG_LEVEL": "ERROR"})
    def test_configure_when_env_log_level_then_root_level(self) -> None:
        configure_logging()

        assert logging.getLogger().level == logging.ERROR

    def test_configure_when_existing_handler_then_filter_added_once(self) -> None:
        # Arrange
        handler = logging.StreamHandler()
        logging.getLogger().handlers[:] = [handler]

        # Act
        configure_logging()
        configure_logging()

        # Assert
        filters = [f for f in handler.filters if isinstance(f, CorrelationIdFilter)]
        assert len(filters) == 1


class TestCorrelationIdFilter:
    """Tests for request id stamping."""

    def test_filter_when_request_active_then_record_has_id(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        token = request_id_var.set("req-123")
        try:
            assert CorrelationIdFilter().filter(record) is True
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-123"  # type: ignore[attr-defined]

    def test_filter_when_no_request_then_placeholder(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.request_id == "no-request-id"  # type: ignore[attr-defined]


class TestLoggingStatus:
    """Tests for get_logging_status."""

    def test_status_when_debug_configured_then_reports_levels(self) -> None:
        configure_logging(debug_mode=True)

        status = get_logging_status()

        assert status["root"] == "DEBUG"
        assert status["ha_image_server"] == "DEBUG"
        assert status["aiohttp.access"] == "WARNING"
        assert status["asyncio"] == "WARNING"
        assert set(status) == {"root", "ha_image_server", "aiohttp.access", "aiohttp.server", "asyncio"}
