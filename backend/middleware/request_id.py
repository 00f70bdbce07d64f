import time
import uuid

import sentry_sdk
import structlog
import structlog.contextvars
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()

_SKIP_LOG_PATHS = {"/health", "/health/deep"}


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log one line per non-health request.

    The id and path stay bound for the duration of the request, so feed
    generation and catalog lookups log with the same request_id.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())

        structlog.contextvars.bind_contextvars(request_id=request_id, path=request.url.path)
        sentry_sdk.set_tag("request_id", request_id)

        start = time.monotonic()
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        duration_ms = round((time.monotonic() - start) * 1000, 1)
        response.headers["X-Request-ID"] = request_id

        if request.url.path not in _SKIP_LOG_PATHS:
            logger.info(
                "request",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query) or None,
                status=response.status_code,
                duration_ms=duration_ms,
                request_id=request_id,
            )

        return response
