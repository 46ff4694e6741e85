"""Value formatting and state classification for entity records.

Turns a raw Home Assistant state plus its attributes into the short strings
drawn on the panels, and maps states to the ColorClass used to pick colors.
None of these functions raise on unexpected input: anything that cannot be
interpreted falls back to the upper-cased raw state.
"""

import math
from typing import Optional

from ..models import ColorClass, EntityRecord, FormattedValue

UNAVAILABLE_TEXT = "Unavailable"
PERCENT_UNIT = "%"
DEFAULT_TEMPERATURE_UNIT = "°C"
ELLIPSIS = "..."

_POSITIVE_STATES = frozenset({"on", "open", "active", "home", "detected"})
_NEGATIVE_STATES = frozenset({"off", "closed", "inactive", "away", "clear"})
_UNAVAILABLE_STATES = frozenset({"unavailable", "unknown"})

_SWITCH_LABELS = {"on": "ON", "off": "OFF"}
_BINARY_SENSOR_LABELS = {"on": "DETECTED", "off": "CLEAR"}
_PRESENCE_LABELS = {"home": "AT HOME", "not_home": "AWAY"}
_MEDIA_PLAYER_LABELS = {"playing": "PLAYING", "paused": "PAUSED", "idle": "IDLE", "off": "OFF"}


def classify_state(state: str) -> ColorClass:
    """Map a raw state to its ColorClass, case-insensitively."""
    normalized = state.lower()
    if normalized in _POSITIVE_STATES:
        return ColorClass.POSITIVE
    if normalized in _NEGATIVE_STATES:
        return ColorClass.NEGATIVE
    if normalized in _UNAVAILABLE_STATES:
        return ColorClass.UNAVAILABLE
    return ColorClass.NEUTRAL


def parse_number(text: str) -> Optional[float]:
    """Parse a state string as a float, or None.

    Surrounding whitespace and digit-group underscores are rejected, so
    ``" 5"`` and ``"1_000"`` stay non-numeric.
    """
    if not text or text != text.strip() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def truncate(text: str, limit: int) -> str:
    """Shorten ``text`` to ``limit`` characters, ending in '...' when cut."""
    if len(text) <= limit:
        return text
    return text[: max(limit - len(ELLIPSIS), 0)] + ELLIPSIS


def is_percentage(entity: EntityRecord) -> bool:
    """True iff the unit is exactly '%'."""
    return entity.unit == PERCENT_UNIT


def _format_number(value: float) -> str:
    if math.isfinite(value) and value.is_integer():
        return f"{value:.0f}"
    return f"{value:.1f}"


def _with_unit(text: str, unit: str) -> str:
    return f"{text} {unit}" if unit else text


def format_value(entity: EntityRecord) -> FormattedValue:
    """Short display value for list and panel rows.

    Rules, first match wins:

    1. unavailable entity -> ``"Unavailable"``
    2. unit ``%`` with a numeric state -> rounded percentage (``"73%"``)
    3. numeric state -> 0 decimals when integral, else 1, plus the unit
    4. the raw state, plus the unit
    """
    percentage = is_percentage(entity)
    if not entity.is_available:
        return FormattedValue(UNAVAILABLE_TEXT, percentage)

    unit = entity.unit
    value = parse_number(entity.state)

    if percentage and value is not None:
        return FormattedValue(f"{value:.0f}{PERCENT_UNIT}", True)

    if value is not None:
        return FormattedValue(_with_unit(_format_number(value), unit), percentage)

    return FormattedValue(_with_unit(entity.state, unit), percentage)


def _generic_state(state: str) -> str:
    return f"State: {state.upper()}"


def _format_sensor(entity: EntityRecord) -> str:
    value = parse_number(entity.state)
    if value is None:
        return _generic_state(entity.state)
    if entity.unit:
        return f"{value:.1f} {entity.unit}"
    return f"Value: {value:.1f}"


def _format_climate(entity: EntityRecord) -> str:
    temperature = entity.number_attribute("current_temperature")
    if temperature is None:
        return f"Mode: {entity.state.upper()}"
    unit = entity.string_attribute("unit_of_measurement") or DEFAULT_TEMPERATURE_UNIT
    return f"Temp: {temperature:.1f}{unit}"


def _format_weather(entity: EntityRecord) -> str:
    temperature = entity.number_attribute("temperature")
    if temperature is None:
        return f"Weather: {entity.state.upper()}"
    unit = entity.string_attribute("temperature_unit") or DEFAULT_TEMPERATURE_UNIT
    return f"{entity.state.upper()} - {temperature:.1f}{unit}"


def _format_generic(entity: EntityRecord) -> str:
    if entity.unit:
        return f"{entity.state} {entity.unit}"
    return _generic_state(entity.state)


def format_status_line(entity: EntityRecord) -> str:
    """Domain-aware status label drawn in the status card's status band.

    Examples:
        ``binary_sensor`` ``on`` -> ``"DETECTED"``; ``off`` -> ``"CLEAR"``;
        anything else -> ``"State: <STATE>"``.
    """
    domain = entity.domain
    state = entity.state.lower()

    if domain == "sensor":
        return _format_sensor(entity)
    if domain in ("switch", "light", "fan"):
        return _SWITCH_LABELS.get(state) or _generic_state(entity.state)
    if domain == "binary_sensor":
        return _BINARY_SENSOR_LABELS.get(state) or _generic_state(entity.state)
    if domain in ("device_tracker", "person"):
        return _PRESENCE_LABELS.get(state) or f"Location: {entity.state.upper()}"
    if domain == "climate":
        return _format_climate(entity)
    if domain == "weather":
        return _format_weather(entity)
    if domain == "media_player":
        return _MEDIA_PLAYER_LABELS.get(state) or _generic_state(entity.state)
    return _format_generic(entity)
