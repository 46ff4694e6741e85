"""Exception hierarchy for the image server.

Every error carries the HTTP status it maps to, so the error middleware can
turn any of them into a JSON response without a lookup table.
"""

from typing import Optional


class ImageServerError(Exception):
    """Base exception for all image server errors.

    Attributes:
        message: Human readable description, returned to HTTP clients
        http_status: Status code used when the error reaches the HTTP layer
    """

    http_status = 500

    def __init__(self, message: str, http_status: Optional[int] = None) -> None:
        """Initialize ImageServerError.

        Args:
            message: Error message
            http_status: Override for the class default status code
        """
        super().__init__(message)
        self.message = message
        if http_status is not None:
            self.http_status = http_status


class ConfigurationError(ImageServerError):
    """Required configuration is missing or invalid.

    Raised at startup, e.g. when ``HA_TOKEN`` is not set.
    """


class BadRequestError(ImageServerError):
    """Malformed query input.

    Raised when:
    - A required query parameter is missing
    - ``width``/``height`` are not integers in the allowed range
    - The sensor list is empty

    Should result in HTTP 400 Bad Request response.
    """

    http_status = 400


class RenderRejectedError(ImageServerError):
    """A render request was rejected before any drawing happened.

    Should result in HTTP 400 Bad Request response.
    """

    http_status = 400


class TooManyEntitiesError(RenderRejectedError):
    """More entities were requested than a layout can hold."""

    def __init__(self, limit: int, count: int) -> None:
        """Initialize TooManyEntitiesError.

        Args:
            limit: Maximum number of entities the layout accepts
            count: Number of entities requested
        """
        super().__init__(f"Maximum {limit} sensors allowed, got {count}")
        self.limit = limit
        self.count = count


class InvalidDimensionsError(RenderRejectedError):
    """Requested canvas dimensions are not positive."""


class EntityImageNotFoundError(ImageServerError):
    """The entity exposes no usable image attribute.

    Should result in HTTP 404 Not Found response.
    """

    http_status = 404


class HomeAssistantError(ImageServerError):
    """The Home Assistant backend failed or returned a non-success status.

    Attributes:
        upstream_status: Status code returned by Home Assistant, None for
            transport failures (timeouts, refused connections)
    """

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        http_status: int = 500,
    ) -> None:
        super().__init__(message, http_status=http_status)
        self.upstream_status = upstream_status
