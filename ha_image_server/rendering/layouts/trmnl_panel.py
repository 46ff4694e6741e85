"""800x480 e-paper panel for TRMNL displays.

Everything is drawn in black on white at double text scale so the panel
survives 1-bit quantization and stays readable from across a room.
Percentage sensors get a patterned gauge bar; other sensors get a
right-aligned value and a small status square.
"""

import logging
import math
from collections.abc import Sequence
from typing import Optional

from ...exceptions import TooManyEntitiesError
from ...models import EntityRecord
from ..canvas import BLACK_L, WHITE_L, Canvas
from ..formatting import format_value, is_percentage, parse_number, truncate
from ..quantize import quantize
from ..text import MAX_PANEL_TEXT_CHARS, draw_text, text_width

logger = logging.getLogger(__name__)

PANEL_WIDTH = 800
PANEL_HEIGHT = 480
MAX_ENTITIES = 15
DEFAULT_TITLE = "SENSOR STATUS"
TEXT_SCALE = 2

# Header
TOP_RULE = (20, 5, 780, 15)
TITLE_Y = 25
TITLE_MARGIN = 40
TITLE_CHAR_WIDTH = 12
TITLE_FALLBACK_X = 30
DIVIDER_X0 = 40
DIVIDER_X1 = 760
DIVIDER_Y = 65
DIVIDER_THICKNESS = 2

# Rows
CONTENT_TOP = 80
CONTENT_BOTTOM_PADDING = 20
ROW_LIMIT_Y = PANEL_HEIGHT - 10
DENSE_ROW_THRESHOLD = 6
DENSE_ROW_MAX_HEIGHT = 55
ROW_HEIGHT = 65
NAME_X = 40
NAME_OFFSET_Y = 8
VALUE_OFFSET_Y = 25
VALUE_RIGHT_MARGIN = 40
MAX_NAME_CHARS = 35
MAX_GAUGE_NAME_CHARS = 25

# Status square for non-gauge rows
SQUARE_X = PANEL_WIDTH - 25
SQUARE_OFFSET_Y = 25
SQUARE_SIZE = 6

# Gauge for percentage rows
GAUGE_WIDTH = 200
GAUGE_HEIGHT = 16
GAUGE_X = PANEL_WIDTH - GAUGE_WIDTH - 120
GAUGE_OFFSET_Y = 30
GAUGE_VALUE_GAP = 10
GAUGE_TICKS = (25, 50, 75)
GAUGE_TICK_LENGTH = 4

# Row separators
SEPARATOR_X0 = 60
SEPARATOR_X1 = PANEL_WIDTH - 60
SEPARATOR_LIMIT_Y = PANEL_HEIGHT - 20
SEPARATOR_DOT_PITCH = 2

FRAME_THICKNESS = 3


def row_height(count: int) -> int:
    """Row height for ``count`` entities."""
    if count > DENSE_ROW_THRESHOLD:
        available = PANEL_HEIGHT - CONTENT_TOP - CONTENT_BOTTOM_PADDING
        return min(available // count, DENSE_ROW_MAX_HEIGHT)
    return ROW_HEIGHT


def gauge_fraction(entity: EntityRecord) -> float:
    """Percentage state as a fraction in [0, 1]; 0 for non-numeric states."""
    value = parse_number(entity.state)
    if value is None or math.isnan(value):
        return 0.0
    return min(max(value, 0.0), 100.0) / 100.0


def _draw_text(canvas: Canvas, x: int, y: int, text: str) -> int:
    return draw_text(canvas, x, y, text, BLACK_L, scale=TEXT_SCALE, max_chars=MAX_PANEL_TEXT_CHARS)


def _draw_header(canvas: Canvas, title: str) -> None:
    x0, y0, x1, y1 = TOP_RULE
    canvas.fill_rect(x0, y0, x1, y1, BLACK_L)

    # Centered on a 12 px nominal advance, narrower than the drawn 14 px
    title_width = len(title) * TITLE_CHAR_WIDTH
    if title_width < PANEL_WIDTH - TITLE_MARGIN:
        title_x = (PANEL_WIDTH - title_width) // 2
    else:
        title_x = TITLE_FALLBACK_X
    _draw_text(canvas, title_x, TITLE_Y, title)

    canvas.fill_rect(DIVIDER_X0, DIVIDER_Y, DIVIDER_X1, DIVIDER_Y + DIVIDER_THICKNESS, BLACK_L)


def _draw_gauge(canvas: Canvas, y: int, entity: EntityRecord, value: str) -> None:
    gauge_y = y + GAUGE_OFFSET_Y
    canvas.fill_gauge(GAUGE_X, gauge_y, GAUGE_WIDTH, GAUGE_HEIGHT, gauge_fraction(entity))

    interior = GAUGE_WIDTH - 6
    for percent in GAUGE_TICKS:
        tick_x = GAUGE_X + 3 + interior * percent // 100
        canvas.fill_rect(tick_x, gauge_y - GAUGE_TICK_LENGTH, tick_x + 1, gauge_y, BLACK_L)

    _draw_text(canvas, GAUGE_X + GAUGE_WIDTH + GAUGE_VALUE_GAP, y + VALUE_OFFSET_Y, value)


def _draw_value(canvas: Canvas, y: int, entity: EntityRecord, value: str) -> None:
    value_x = max(PANEL_WIDTH - text_width(value, TEXT_SCALE) - VALUE_RIGHT_MARGIN, 0)
    _draw_text(canvas, value_x, y + VALUE_OFFSET_Y, value)

    square_y = y + SQUARE_OFFSET_Y
    if entity.is_available:
        canvas.fill_rect(SQUARE_X, square_y, SQUARE_X + SQUARE_SIZE, square_y + SQUARE_SIZE, BLACK_L)
    else:
        canvas.stroke_rect(
            SQUARE_X, square_y, SQUARE_X + SQUARE_SIZE, square_y + SQUARE_SIZE, 1, BLACK_L
        )


def _draw_separator(canvas: Canvas, y: int) -> None:
    for x in range(SEPARATOR_X0, SEPARATOR_X1, SEPARATOR_DOT_PITCH):
        canvas.set_pixel(x, y, BLACK_L)


def _draw_row(canvas: Canvas, y: int, line_height: int, entity: EntityRecord) -> None:
    percentage = is_percentage(entity)
    name_limit = MAX_GAUGE_NAME_CHARS if percentage else MAX_NAME_CHARS
    _draw_text(canvas, NAME_X, y + NAME_OFFSET_Y, truncate(entity.display_name, name_limit))

    value = format_value(entity).text
    if percentage and entity.is_available:
        _draw_gauge(canvas, y, entity, value)
    else:
        _draw_value(canvas, y, entity, value)

    if y + line_height < SEPARATOR_LIMIT_Y:
        _draw_separator(canvas, y + line_height - 2)


def compose_trmnl_panel(entities: Sequence[EntityRecord], title: Optional[str] = None) -> Canvas:
    """Compose the grayscale TRMNL panel without quantizing it.

    Args:
        entities: Entities in display order (at most 15)
        title: Header text, defaults to "SENSOR STATUS"

    Returns:
        800x480 grayscale canvas

    Raises:
        TooManyEntitiesError: If more than 15 entities are given
    """
    if len(entities) > MAX_ENTITIES:
        raise TooManyEntitiesError(MAX_ENTITIES, len(entities))

    line_height = row_height(len(entities))
    logger.debug("Composing TRMNL panel with %d entities, row height %d", len(entities), line_height)

    canvas = Canvas(PANEL_WIDTH, PANEL_HEIGHT, WHITE_L)
    _draw_header(canvas, title or DEFAULT_TITLE)

    for index, entity in enumerate(entities):
        y = CONTENT_TOP + index * line_height
        if y + line_height <= ROW_LIMIT_Y:
            _draw_row(canvas, y, line_height, entity)

    canvas.stroke_rect(0, 0, PANEL_WIDTH, PANEL_HEIGHT, FRAME_THICKNESS, BLACK_L)
    return canvas


def render_trmnl_panel(entities: Sequence[EntityRecord], title: Optional[str] = None) -> Canvas:
    """Compose the TRMNL panel and quantize it to pure black and white."""
    return quantize(compose_trmnl_panel(entities, title))
