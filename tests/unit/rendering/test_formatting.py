"""Tests for value formatting and state classification."""

from typing import Any, Callable

import pytest

from ha_image_server.models import ColorClass, EntityRecord
from ha_image_server.rendering.formatting import (
    classify_state,
    format_status_line,
    format_value,
    parse_number,
    truncate,
)

pytestmark = pytest.mark.unit

EntityFactory = Callable[..., EntityRecord]


class TestClassifyState:
    """Test suite for classify_state."""

    @pytest.mark.parametrize(
        "state,expected",
        [
            ("on", ColorClass.POSITIVE),
            ("HOME", ColorClass.POSITIVE),
            ("Detected", ColorClass.POSITIVE),
            ("AWAY", ColorClass.NEGATIVE),
            ("closed", ColorClass.NEGATIVE),
            ("clear", ColorClass.NEGATIVE),
            ("unknown", ColorClass.UNAVAILABLE),
            ("unavailable", ColorClass.UNAVAILABLE),
            ("sometimes", ColorClass.NEUTRAL),
            ("23.5", ColorClass.NEUTRAL),
            ("", ColorClass.NEUTRAL),
        ],
    )
    def test_classify_state_when_called_then_case_insensitive(
        self, state: str, expected: ColorClass
    ) -> None:
        assert classify_state(state) is expected


class TestParseNumber:
    """Test suite for parse_number."""

    @pytest.mark.parametrize(
        "text,expected",
        [("12.5", 12.5), ("-3", -3.0), ("1e3", 1000.0), ("0", 0.0)],
    )
    def test_parse_number_when_numeric_then_returns_float(self, text: str, expected: float) -> None:
        assert parse_number(text) == expected

    @pytest.mark.parametrize("text", ["", "on", " 5", "5 ", "1_000", "12.5kWh"])
    def test_parse_number_when_not_plain_number_then_returns_none(self, text: str) -> None:
        assert parse_number(text) is None


class TestTruncate:
    """Test suite for truncate."""

    def test_truncate_when_short_then_unchanged(self) -> None:
        assert truncate("Kitchen", 25) == "Kitchen"
        assert truncate("x" * 25, 25) == "x" * 25

    def test_truncate_when_long_then_ends_with_ellipsis(self) -> None:
        result = truncate("x" * 30, 25)

        assert result == "x" * 22 + "..."
        assert len(result) == 25


class TestFormatValue:
    """Test suite for format_value."""

    def test_format_value_when_percentage_then_rounded_percent(self, make_entity: EntityFactory) -> None:
        # Act
        result = format_value(make_entity("sensor.battery", "73.4", unit="%"))

        # Assert
        assert result.text == "73%"
        assert result.is_percentage is True

    def test_format_value_when_decimal_with_unit_then_one_decimal(self, make_entity: EntityFactory) -> None:
        result = format_value(make_entity("sensor.energy", "12.5", unit="kWh"))

        assert result.text == "12.5 kWh"
        assert result.is_percentage is False

    def test_format_value_when_integral_then_no_decimals(self, make_entity: EntityFactory) -> None:
        assert format_value(make_entity("sensor.count", "12.0")).text == "12"
        assert format_value(make_entity("sensor.count", "12.04")).text == "12.0"

    def test_format_value_when_non_numeric_then_raw_state(self, make_entity: EntityFactory) -> None:
        assert format_value(make_entity("sensor.mode", "n/a")).text == "n/a"
        assert format_value(make_entity("sensor.mode", "eco", unit="lvl")).text == "eco lvl"

    def test_format_value_when_percentage_not_numeric_then_raw_state(
        self, make_entity: EntityFactory
    ) -> None:
        result = format_value(make_entity("sensor.battery", "charging", unit="%"))

        assert result.text == "charging %"
        assert result.is_percentage is True

    def test_format_value_when_unavailable_then_unavailable_text(self, make_entity: EntityFactory) -> None:
        assert format_value(make_entity("sensor.x", "unavailable", unit="%")).text == "Unavailable"
        assert format_value(EntityRecord.placeholder("sensor.y")).text == "Unavailable"


class TestFormatStatusLine:
    """Test suite for the domain-aware status label."""

    @pytest.mark.parametrize(
        "state,expected",
        [("on", "DETECTED"), ("off", "CLEAR"), ("tilted", "State: TILTED")],
    )
    def test_binary_sensor_labels(self, make_entity: EntityFactory, state: str, expected: str) -> None:
        assert format_status_line(make_entity("binary_sensor.door", state)) == expected

    @pytest.mark.parametrize(
        "kwargs,expected",
        [
            ({"state": "21", "unit": "°C"}, "21.0 °C"),
            ({"state": "21.25"}, "Value: 21.2"),
            ({"state": "rising"}, "State: RISING"),
        ],
    )
    def test_sensor_labels(self, make_entity: EntityFactory, kwargs: dict[str, Any], expected: str) -> None:
        assert format_status_line(make_entity("sensor.temp", **kwargs)) == expected

    @pytest.mark.parametrize("domain", ["switch", "light", "fan"])
    def test_switch_like_labels(self, make_entity: EntityFactory, domain: str) -> None:
        assert format_status_line(make_entity(f"{domain}.x", "on")) == "ON"
        assert format_status_line(make_entity(f"{domain}.x", "off")) == "OFF"
        assert format_status_line(make_entity(f"{domain}.x", "unavailable")) == "State: UNAVAILABLE"

    def test_presence_labels(self, make_entity: EntityFactory) -> None:
        assert format_status_line(make_entity("person.alex", "home")) == "AT HOME"
        assert format_status_line(make_entity("device_tracker.phone", "not_home")) == "AWAY"
        assert format_status_line(make_entity("person.alex", "work")) == "Location: WORK"

    def test_climate_labels(self, make_entity: EntityFactory) -> None:
        heating = make_entity("climate.hall", "heat", current_temperature=20.5)
        fahrenheit = make_entity("climate.hall", "heat", current_temperature=70, unit_of_measurement="°F")
        no_reading = make_entity("climate.hall", "off", current_temperature="warm")

        assert format_status_line(heating) == "Temp: 20.5°C"
        assert format_status_line(fahrenheit) == "Temp: 70.0°F"
        assert format_status_line(no_reading) == "Mode: OFF"

    def test_weather_labels(self, make_entity: EntityFactory) -> None:
        with_temp = make_entity("weather.home", "sunny", temperature=18, temperature_unit="°F")
        without_temp = make_entity("weather.home", "rainy")

        assert format_status_line(with_temp) == "SUNNY - 18.0°F"
        assert format_status_line(without_temp) == "Weather: RAINY"

    def test_media_player_labels(self, make_entity: EntityFactory) -> None:
        assert format_status_line(make_entity("media_player.tv", "playing")) == "PLAYING"
        assert format_status_line(make_entity("media_player.tv", "idle")) == "IDLE"
        assert format_status_line(make_entity("media_player.tv", "buffering")) == "State: BUFFERING"

    def test_generic_domain_labels(self, make_entity: EntityFactory) -> None:
        assert format_status_line(make_entity("counter.visits", "4", unit="ppl")) == "4 ppl"
        assert format_status_line(make_entity("input_select.mode", "eco")) == "State: ECO"
