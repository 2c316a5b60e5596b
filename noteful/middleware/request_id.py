"""
Noteful API — Request ID Middleware
====================================

What:  Tags each request with an ID and echoes it in the X-Request-ID header.
Why:   Log lines and JSON error bodies of one request carry the same ID.
How:   A client-supplied ID is kept if it is short printable ASCII; anything
       else is replaced by the first 8 hex characters of a UUID4.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def resolve_request_id(header_value) -> str:
    if header_value and _ACCEPTED_ID.match(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(HEADER))
        # Left set after the call: the outermost 500 handler still reads it
        request_id_var.set(rid)
        request.state.request_id = rid
        response = await call_next(request)
        response.headers[HEADER] = rid
        return response
