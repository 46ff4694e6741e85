"""Software rasterizer and panel templates.

Pipeline: entity records -> layout template -> canvas -> (quantize) -> PNG.
"""

from .canvas import Canvas
from .encoder import PNG_CONTENT_TYPE, encode_png
from .formatting import classify_state, format_status_line, format_value
from .layouts import compose_trmnl_panel, render_multi_sensor, render_status_card, render_trmnl_panel
from .quantize import quantize

__all__ = [
    "PNG_CONTENT_TYPE",
    "Canvas",
    "classify_state",
    "compose_trmnl_panel",
    "encode_png",
    "format_status_line",
    "format_value",
    "quantize",
    "render_multi_sensor",
    "render_status_card",
    "render_trmnl_panel",
]
