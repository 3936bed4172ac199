"""
jsau-apiserver — Request ID Middleware
=======================================

What:  Assigns an ID to each incoming request and returns it in a header.
Why:   Error handlers and the access log include the ID, so a client report
       carrying X-Request-ID can be matched to the server-side log lines.
How:   Reuses a client-supplied X-Request-ID when it looks like an ID,
       otherwise generates a short UUID; stores it in a ContextVar and in
       request.state for the duration of the request.

Accepted client IDs:
    1-64 characters from [A-Za-z0-9._-]. Anything else (spaces, control
    characters, oversized values) would end up verbatim in every log line
    of the request, so it is replaced by a generated ID.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on the same thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_CLIENT_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def choose_request_id(client_value: Optional[str]) -> str:
    """The client's ID when acceptable, else the first 8 hex digits of a UUID4."""
    if client_value and _CLIENT_ID.fullmatch(client_value):
        return client_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Outermost middleware: every later log line of the request can carry the ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = choose_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
