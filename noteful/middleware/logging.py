"""
Noteful API — Request Logging Middleware
=========================================

What:  One access log line for every HTTP request.
How:   Times the downstream call and logs it on the `noteful.access` logger.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Line format:
    GET /api/notes?searchTerm=cats -> 200 (12.3ms) [a1b2c3d4]
    POST /api/folders -> 201 (8.0ms) [a1b2c3d4] location=/api/folders/104

Log level by status class:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from noteful.middleware.request_id import request_id_var

logger = logging.getLogger("noteful.access")

QUIET_PATHS = frozenset({"/health", "/favicon.ico"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with status code and duration. Probe paths are skipped."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"

        line = "%s %s -> %d (%.1fms) [%s]"
        args = [request.method, target, response.status_code, elapsed_ms, request_id_var.get("")]
        location = response.headers.get("location")
        if location:
            line += " location=%s"
            args.append(location)

        logger.log(_level_for(response.status_code), line, *args)
        return response
