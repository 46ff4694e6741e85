"""Route registration for the image server."""

from .api_routes import register_api_routes
from .common import CONFIG_KEY, HA_CLIENT_KEY, parse_dimension, parse_sensor_ids
from .image_routes import register_image_routes
from .render_routes import register_render_routes

__all__ = [
    "CONFIG_KEY",
    "HA_CLIENT_KEY",
    "parse_dimension",
    "parse_sensor_ids",
    "register_api_routes",
    "register_image_routes",
    "register_render_routes",
]
