"""Single-entity status card.

Layout, top to bottom inside a 3 px border:

* header band (rows 8-40): entity display name on a dark gradient
* status band (rows 48-85): domain-aware status label on a ColorClass gradient,
  with a round status indicator at its right edge
* info band (rows 92 to height-8): entity id and selected attributes
"""

import logging
from typing import Optional

from ...exceptions import InvalidDimensionsError
from ...models import AttributeValue, EntityRecord
from ..canvas import Canvas
from ..colors import PanelColors, StatusPalette, palette_for
from ..formatting import classify_state, format_status_line, truncate
from ..text import centered_x, draw_text

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 200

BORDER_THICKNESS = 3
BAND_MARGIN = 8

HEADER_TOP = 8
HEADER_BOTTOM = 40
HEADER_TEXT_Y = 20
HEADER_ACCENT_HEIGHT = 2

STATUS_TOP = 48
STATUS_BOTTOM = 85
STATUS_TEXT_Y = 65

INFO_TOP = 92
INFO_TEXT_X = 15
INFO_FIRST_LINE_Y = 95
INFO_LINE_HEIGHT = 18
INFO_BOTTOM_PADDING = 10
MAX_ENTITY_ID_CHARS = 35
MAX_ATTRIBUTE_VALUE_CHARS = 25
MAX_INFO_LINE_CHARS = 45

INDICATOR_SIZE = 24
INDICATOR_RIGHT_MARGIN = 15
INDICATOR_Y = 52
INDICATOR_RING_WIDTH = 2
HIGHLIGHT_OFFSET = 6
HIGHLIGHT_RADIUS = 3

# Attribute key -> label, in display order
INFO_ATTRIBUTES = (
    ("device_class", "Type"),
    ("unit_of_measurement", "Unit"),
    ("temperature", "Temp"),
    ("humidity", "Humidity"),
    ("battery", "Battery"),
    ("brightness", "Brightness"),
    ("last_changed", "Changed"),
)


def _attribute_text(value: AttributeValue) -> Optional[str]:
    """Render an attribute value for the info band, None for unsupported types."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return truncate(value, MAX_ATTRIBUTE_VALUE_CHARS)
    if isinstance(value, (int, float)):
        return str(value)
    return None


def info_lines(entity: EntityRecord) -> list[str]:
    """All candidate info band lines, before any height limit is applied."""
    lines = [f"Entity: {truncate(entity.entity_id, MAX_ENTITY_ID_CHARS)}"]
    for key, label in INFO_ATTRIBUTES:
        if key not in entity.attributes:
            continue
        text = _attribute_text(entity.attributes[key])
        if text is None:
            continue
        line = f"{label}: {text}"
        if len(line) <= MAX_INFO_LINE_CHARS:
            lines.append(line)
    return lines


def _draw_header(canvas: Canvas, name: str, palette: StatusPalette) -> None:
    right = canvas.width - BAND_MARGIN
    canvas.fill_gradient(
        BAND_MARGIN, HEADER_TOP, right, HEADER_BOTTOM, PanelColors.HEADER_START, PanelColors.HEADER_END
    )
    accent_top = HEADER_BOTTOM - 1 - HEADER_ACCENT_HEIGHT
    canvas.fill_rect(BAND_MARGIN + 1, accent_top, right - 1, HEADER_BOTTOM - 1, palette.band_start)
    canvas.stroke_rect(BAND_MARGIN, HEADER_TOP, right, HEADER_BOTTOM, 1, PanelColors.HEADER_FRAME)
    draw_text(canvas, centered_x(name, canvas.width), HEADER_TEXT_Y, name, PanelColors.WHITE)


def _draw_status_band(canvas: Canvas, status: str, palette: StatusPalette) -> None:
    right = canvas.width - BAND_MARGIN
    canvas.fill_gradient(BAND_MARGIN, STATUS_TOP, right, STATUS_BOTTOM, palette.band_start, palette.band_end)
    canvas.stroke_rect(BAND_MARGIN, STATUS_TOP, right, STATUS_BOTTOM, 1, PanelColors.STATUS_FRAME)

    text_x = centered_x(status, canvas.width)
    draw_text(canvas, text_x + 1, STATUS_TEXT_Y + 1, status, PanelColors.BLACK)
    draw_text(canvas, text_x, STATUS_TEXT_Y, status, PanelColors.WHITE)


def _draw_info_band(canvas: Canvas, entity: EntityRecord) -> None:
    right = canvas.width - BAND_MARGIN
    bottom = canvas.height - BAND_MARGIN
    canvas.fill_rect(BAND_MARGIN, INFO_TOP, right, bottom, PanelColors.INFO_FILL)
    canvas.stroke_rect(BAND_MARGIN, INFO_TOP, right, bottom, 1, PanelColors.INFO_FRAME)

    limit = canvas.height - INFO_BOTTOM_PADDING
    y = INFO_FIRST_LINE_Y
    for index, line in enumerate(info_lines(entity)):
        if y + INFO_LINE_HEIGHT >= limit:
            break
        color = PanelColors.INFO_ENTITY_TEXT if index == 0 else PanelColors.INFO_ATTRIBUTE_TEXT
        draw_text(canvas, INFO_TEXT_X, y, line, color)
        y += INFO_LINE_HEIGHT


def _draw_indicator(canvas: Canvas, palette: StatusPalette) -> None:
    x = canvas.width - INDICATOR_SIZE - INDICATOR_RIGHT_MARGIN
    y = INDICATOR_Y
    if x < 0 or x + INDICATOR_SIZE >= canvas.width or y + INDICATOR_SIZE >= canvas.height:
        return

    radius = INDICATOR_SIZE // 2
    canvas.fill_disc(
        x + radius,
        y + radius,
        radius,
        radius - INDICATOR_RING_WIDTH,
        palette.indicator_fill,
        palette.indicator_ring,
    )
    canvas.fill_disc(
        x + HIGHLIGHT_OFFSET,
        y + HIGHLIGHT_OFFSET,
        HIGHLIGHT_RADIUS,
        HIGHLIGHT_RADIUS,
        PanelColors.WHITE,
        PanelColors.WHITE,
    )


def render_status_card(
    entity: EntityRecord, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT
) -> Canvas:
    """Render the status card for one entity.

    Args:
        entity: Entity to render
        width: Canvas width in pixels
        height: Canvas height in pixels

    Returns:
        RGB canvas of exactly ``width`` x ``height``

    Raises:
        InvalidDimensionsError: If a dimension is not positive
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(f"Invalid image dimensions: {width}x{height}")

    color_class = classify_state(entity.state)
    palette = palette_for(color_class)
    logger.debug(
        "Rendering status card for %s (%dx%d, %s)", entity.entity_id, width, height, color_class.value
    )

    canvas = Canvas(width, height, PanelColors.WHITE)
    canvas.fill_gradient(0, 0, width, height, palette.background_start, palette.background_end)
    canvas.stroke_rect(0, 0, width, height, BORDER_THICKNESS, PanelColors.BORDER)

    _draw_header(canvas, entity.display_name, palette)
    _draw_status_band(canvas, format_status_line(entity), palette)
    _draw_info_band(canvas, entity)
    _draw_indicator(canvas, palette)

    return canvas
