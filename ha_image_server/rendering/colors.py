"""
Color constants for the rendered panels.

Status-dependent colors are grouped into a ``StatusPalette`` per ColorClass so
a template looks the class up once and reuses it for every element.
"""

from dataclasses import dataclass
from typing import Dict

from ..models import ColorClass
from .canvas import RGBColor


@dataclass(frozen=True)
class StatusPalette:
    """Colors keyed by an entity's ColorClass."""

    background_start: RGBColor
    background_end: RGBColor
    band_start: RGBColor
    band_end: RGBColor
    indicator_fill: RGBColor
    indicator_ring: RGBColor


class PanelColors:
    """Fixed colors shared by the RGB templates."""

    WHITE: RGBColor = (255, 255, 255)
    BLACK: RGBColor = (0, 0, 0)

    BORDER = (80, 80, 80)

    # Status card header band
    HEADER_START = (60, 60, 80)
    HEADER_END = (40, 40, 60)
    HEADER_FRAME = (100, 100, 120)

    STATUS_FRAME = (200, 200, 200)

    # Status card info band
    INFO_FILL = (245, 245, 250)
    INFO_FRAME = (180, 180, 180)
    INFO_ENTITY_TEXT = (40, 40, 40)
    INFO_ATTRIBUTE_TEXT = (70, 70, 70)

    # Multi-sensor panel
    MULTI_BACKGROUND_START = (250, 250, 255)
    MULTI_BACKGROUND_END = (240, 240, 250)
    MULTI_HEADER_START = (70, 70, 90)
    MULTI_HEADER_END = (50, 50, 70)
    ROW_AVAILABLE = (248, 248, 252)
    ROW_UNAVAILABLE = (240, 240, 240)
    ROW_SEPARATOR = (200, 200, 210)
    NAME_AVAILABLE = (60, 60, 60)
    NAME_UNAVAILABLE = (120, 120, 120)
    VALUE_AVAILABLE = (40, 120, 40)
    VALUE_UNAVAILABLE = (180, 50, 50)
    DOT_AVAILABLE = (50, 200, 50)
    DOT_UNAVAILABLE = (200, 50, 50)
    DOT_RING_AVAILABLE = (30, 140, 30)
    DOT_RING_UNAVAILABLE = (140, 30, 30)


STATUS_PALETTES: Dict[ColorClass, StatusPalette] = {
    ColorClass.POSITIVE: StatusPalette(
        background_start=(230, 255, 230),
        background_end=(200, 255, 200),
        band_start=(80, 180, 80),
        band_end=(60, 160, 60),
        indicator_fill=(50, 205, 50),
        indicator_ring=(34, 139, 34),
    ),
    ColorClass.NEGATIVE: StatusPalette(
        background_start=(255, 230, 230),
        background_end=(255, 200, 200),
        band_start=(180, 80, 80),
        band_end=(160, 60, 60),
        indicator_fill=(220, 20, 60),
        indicator_ring=(178, 34, 34),
    ),
    ColorClass.UNAVAILABLE: StatusPalette(
        background_start=(240, 240, 240),
        background_end=(220, 220, 220),
        band_start=(140, 140, 140),
        band_end=(120, 120, 120),
        indicator_fill=(169, 169, 169),
        indicator_ring=(105, 105, 105),
    ),
    ColorClass.NEUTRAL: StatusPalette(
        background_start=(250, 250, 255),
        background_end=(240, 240, 255),
        band_start=(80, 130, 180),
        band_end=(60, 110, 160),
        indicator_fill=(30, 144, 255),
        indicator_ring=(0, 100, 200),
    ),
}


def palette_for(color_class: ColorClass) -> StatusPalette:
    return STATUS_PALETTES[color_class]
