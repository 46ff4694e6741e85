"""Multi-sensor list panel: one row per entity under a shared title header."""

import logging
from collections.abc import Sequence
from typing import Optional

from ...exceptions import InvalidDimensionsError, TooManyEntitiesError
from ...models import EntityRecord
from ..canvas import Canvas
from ..colors import PanelColors
from ..formatting import format_value, truncate
from ..text import centered_x, draw_text, text_width

logger = logging.getLogger(__name__)

MAX_ENTITIES = 10
DEFAULT_WIDTH = 500
DEFAULT_TITLE = "Sensor Status"

BASE_HEIGHT = 80
ROW_PITCH = 40
BOTTOM_PADDING = 20

BORDER_THICKNESS = 3
HEADER_MARGIN = 8
HEADER_TOP = 8
HEADER_BOTTOM = 50
HEADER_TEXT_Y = 25

ROWS_TOP = 60
ROW_HEIGHT = 35
ROW_MARGIN = 15
ROW_FIT_HEIGHT = 30
NAME_X = 20
NAME_OFFSET_Y = 8
VALUE_OFFSET_Y = 20
MAX_NAME_CHARS = 25
VALUE_MAX_WIDTH = 150
VALUE_PADDING = 20
NARROW_PANEL_WIDTH = 200

DOT_SIZE = 8
DOT_RIGHT_OFFSET = 25
DOT_OFFSET_Y = 10


def default_height(count: int) -> int:
    """Panel height that fits ``count`` rows."""
    return BASE_HEIGHT + ROW_PITCH * count + BOTTOM_PADDING


def _value_x(value: str, width: int) -> int:
    if width > NARROW_PANEL_WIDTH:
        return width - min(VALUE_MAX_WIDTH, text_width(value) + VALUE_PADDING)
    return NAME_X


def _draw_header(canvas: Canvas, title: str) -> None:
    right = canvas.width - HEADER_MARGIN
    canvas.fill_gradient(
        HEADER_MARGIN,
        HEADER_TOP,
        right,
        HEADER_BOTTOM,
        PanelColors.MULTI_HEADER_START,
        PanelColors.MULTI_HEADER_END,
    )
    canvas.stroke_rect(HEADER_MARGIN, HEADER_TOP, right, HEADER_BOTTOM, 1, PanelColors.HEADER_FRAME)
    draw_text(canvas, centered_x(title, canvas.width), HEADER_TEXT_Y, title, PanelColors.WHITE)


def _draw_row(canvas: Canvas, y: int, entity: EntityRecord) -> None:
    width = canvas.width
    available = entity.is_available

    canvas.fill_rect(
        ROW_MARGIN,
        y,
        width - ROW_MARGIN,
        y + ROW_HEIGHT,
        PanelColors.ROW_AVAILABLE if available else PanelColors.ROW_UNAVAILABLE,
    )
    canvas.fill_rect(ROW_MARGIN, y, width - ROW_MARGIN, y + 1, PanelColors.ROW_SEPARATOR)
    canvas.fill_rect(
        ROW_MARGIN, y + ROW_HEIGHT - 1, width - ROW_MARGIN, y + ROW_HEIGHT, PanelColors.ROW_SEPARATOR
    )

    name = truncate(entity.display_name, MAX_NAME_CHARS)
    draw_text(
        canvas,
        NAME_X,
        y + NAME_OFFSET_Y,
        name,
        PanelColors.NAME_AVAILABLE if available else PanelColors.NAME_UNAVAILABLE,
    )

    value = format_value(entity).text
    draw_text(
        canvas,
        _value_x(value, width),
        y + VALUE_OFFSET_Y,
        value,
        PanelColors.VALUE_AVAILABLE if available else PanelColors.VALUE_UNAVAILABLE,
    )

    radius = DOT_SIZE // 2
    canvas.fill_disc(
        width - DOT_RIGHT_OFFSET + radius,
        y + DOT_OFFSET_Y + radius,
        radius,
        radius - 1,
        PanelColors.DOT_AVAILABLE if available else PanelColors.DOT_UNAVAILABLE,
        PanelColors.DOT_RING_AVAILABLE if available else PanelColors.DOT_RING_UNAVAILABLE,
    )


def render_multi_sensor(
    entities: Sequence[EntityRecord],
    width: int = DEFAULT_WIDTH,
    height: Optional[int] = None,
    title: Optional[str] = None,
) -> Canvas:
    """Render a list panel with one row per entity.

    Rows that would not fit in ``height`` are skipped.

    Args:
        entities: Entities in display order (at most 10)
        width: Canvas width in pixels
        height: Canvas height, defaults to ``80 + 40 * len(entities) + 20``
        title: Header text, defaults to "Sensor Status"

    Returns:
        RGB canvas

    Raises:
        TooManyEntitiesError: If more than 10 entities are given
        InvalidDimensionsError: If a dimension is not positive
    """
    if len(entities) > MAX_ENTITIES:
        raise TooManyEntitiesError(MAX_ENTITIES, len(entities))

    if height is None:
        height = default_height(len(entities))
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(f"Invalid image dimensions: {width}x{height}")

    logger.debug("Rendering multi-sensor panel with %d entities (%dx%d)", len(entities), width, height)

    canvas = Canvas(width, height, PanelColors.WHITE)
    canvas.fill_gradient(
        0, 0, width, height, PanelColors.MULTI_BACKGROUND_START, PanelColors.MULTI_BACKGROUND_END
    )
    canvas.stroke_rect(0, 0, width, height, BORDER_THICKNESS, PanelColors.BORDER)

    _draw_header(canvas, title or DEFAULT_TITLE)

    for index, entity in enumerate(entities):
        y = ROWS_TOP + index * ROW_PITCH
        if y + ROW_FIT_HEIGHT < height:
            _draw_row(canvas, y, entity)

    return canvas
