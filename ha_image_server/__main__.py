"""Command-line entry for ha_image_server."""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn, Optional

from . import run_server
from .exceptions import ConfigurationError

EXIT_CONFIG_ERROR = 2


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the ha_image_server CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="ha_image_server",
        description="Home Assistant Image Server - PNG status panels for small displays",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m ha_image_server                    # Start server on default port (3000)
  python -m ha_image_server --port 8080        # Start server on port 8080
  python -m ha_image_server --debug            # Verbose logging

Environment:
  HA_URL, HA_TOKEN (required), HOST, PORT, HA_API_TIMEOUT,
  HA_IMAGE_MAX_DIMENSION, HA_IMAGE_LOG_LEVEL, HA_IMAGE_DEBUG
        """,
    )

    parser.add_argument(
        "--host",
        metavar="HOST",
        help="Interface to bind (default: 0.0.0.0, or from HOST env var)",
    )
    parser.add_argument(
        "--port",
        type=int,
        metavar="PORT",
        help="Port number for the web server (default: 3000, or from PORT env var)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> NoReturn:
    """Run the ha_image_server CLI."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    try:
        run_server(args)
    except ConfigurationError as exc:
        print(
            f"Configuration error: {exc.message}\n\n"
            "Set HA_TOKEN in the environment or in a .env file, e.g.:\n"
            "  HA_URL=http://homeassistant.local:8123\n"
            "  HA_TOKEN=<long-lived access token>\n",
            file=sys.stderr,
        )
        sys.exit(EXIT_CONFIG_ERROR)

    sys.exit(0)


if __name__ == "__main__":
    main()
