"""
HTTP request logging middleware.

One structured log line per request; action runs also carry the action name.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.stdlib.get_logger("http")

ACTIONS_PREFIX = "/actions/"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log HTTP requests with timing and status info."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:8]

        # Pipeline logs emitted while handling this request share the id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        path = request.url.path
        action = path[len(ACTIONS_PREFIX):] if path.startswith(ACTIONS_PREFIX) else None

        start = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["x-request-id"] = request_id
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 1)

            if status_code >= 500:
                log = logger.error
            elif status_code >= 400:
                log = logger.warning
            else:
                log = logger.info

            fields = {
                "method": request.method,
                "path": path,
                "status": status_code,
                "duration_ms": duration_ms,
            }
            if action:
                fields["action"] = action
            log("http_request", **fields)
