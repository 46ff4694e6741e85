"""Fixed panel templates."""

from .multi_sensor import render_multi_sensor
from .status_card import render_status_card
from .trmnl_panel import compose_trmnl_panel, render_trmnl_panel

__all__ = [
    "compose_trmnl_panel",
    "render_multi_sensor",
    "render_status_card",
    "render_trmnl_panel",
]
