"""aiohttp middlewares: request correlation ids, CORS headers and error mapping.

Registered outermost first:

1. ``correlation_id_middleware`` - tags the request and every log line with an id
2. ``cors_middleware`` - permissive CORS headers, answers preflight requests
3. ``error_middleware`` - turns ImageServerError into ``{"error": ...}`` JSON
"""

import logging
import uuid
from collections.abc import Awaitable, Callable
from contextvars import ContextVar

from aiohttp import web

from .exceptions import ImageServerError

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

REQUEST_ID_HEADER = "X-Request-ID"

# Context variable for storing request correlation ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}


def get_request_id() -> str:
    """Get current request correlation ID from context.

    Returns:
        Current request correlation ID, or "no-request-id" if not set
    """
    request_id = request_id_var.get()
    return request_id if request_id else "no-request-id"


@web.middleware
async def correlation_id_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Extract or generate correlation ID for request tracking.

    Priority: ``X-Request-ID``, then ``X-Correlation-ID``, then a new uuid4.
    The id is stored in ``request_id_var`` and echoed in the ``X-Request-ID``
    response header, including on HTTP exceptions raised by the router.
    """
    correlation_id = (
        request.headers.get(REQUEST_ID_HEADER)
        or request.headers.get("X-Correlation-ID")
        or str(uuid.uuid4())
    )

    token = request_id_var.set(correlation_id)
    try:
        response = await handler(request)
    except web.HTTPException as exc:
        exc.headers[REQUEST_ID_HEADER] = correlation_id
        raise
    finally:
        request_id_var.reset(token)

    response.headers[REQUEST_ID_HEADER] = correlation_id
    return response


@web.middleware
async def cors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Allow cross-origin GETs from any origin."""
    if request.method == "OPTIONS" and "Access-Control-Request-Method" in request.headers:
        return web.Response(status=204, headers=CORS_HEADERS)

    try:
        response = await handler(request)
    except web.HTTPException as exc:
        exc.headers.update(CORS_HEADERS)
        raise

    response.headers.update(CORS_HEADERS)
    return response


def error_response(message: str, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status)


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Map exceptions to JSON error responses.

    ImageServerError subclasses use their ``http_status``; 4xx are logged at
    WARNING and 5xx at ERROR. aiohttp's own HTTP exceptions pass through.
    Anything else is logged with its traceback and becomes a 500.
    """
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except ImageServerError as exc:
        if exc.http_status >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, exc.message)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.path, exc.message)
        return error_response(exc.message, exc.http_status)
    except Exception:
        logger.exception("Unhandled error serving %s %s", request.method, request.path)
        return error_response("Internal server error", 500)
