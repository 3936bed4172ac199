"""
jsau-apiserver — Access Log Middleware
=======================================

What:  One access log line per HTTP request, naming the document involved.
Why:   The operator console is the only place traffic is visible. A bare
       "GET /search 404" does not say which document was missing, and query
       strings are not logged in general.
How:   Times the rest of the stack, then logs one line on "apiserver.access".

Example lines:
    GET /search recette='gratin' 404 1.2ms 14B [a1b2c3d4] from 127.0.0.1
    GET /recette/2 → tarte_tatin.html 200 2.8ms 20B [e5f6a7b8] from 127.0.0.1
    POST /favorites 409 3.2ms 43B [c9d0e1f2] from 127.0.0.1

Logged: method, path, document name, status, duration, response size,
request ID, client address. Not logged: bodies, other query parameters.
Document names are logged with repr() so control characters stay escaped.
"""

import logging
import re
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from apiserver.middleware.request_id import request_id_var

logger = logging.getLogger("apiserver.access")

# Polled by monitoring; logged only when it fails
QUIET_PATHS = {"/health"}

_ATTACHMENT_NAME = re.compile(r'filename="([^"]*)"')


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def describe_target(request: Request, response: Response) -> str:
    """Path plus the document it concerns: the ?recette= name or the download."""
    target = request.url.path
    if target == "/search":
        name = request.query_params.get("recette")
        if name:
            target = f"{target} recette={name!r}"
    download = _download_name(response)
    if download:
        target = f"{target} → {download}"
    return target


def _download_name(response: Response) -> Optional[str]:
    disposition = response.headers.get("content-disposition", "")
    match = _ATTACHMENT_NAME.search(disposition)
    return match.group(1) if match else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        status = response.status_code
        if request.url.path in QUIET_PATHS and status < 500:
            return response

        client = request.client.host if request.client else "unknown"
        size = response.headers.get("content-length", "-")
        rid = request_id_var.get("")

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms %sB [%s] from %s",
            request.method,
            describe_target(request, response),
            status,
            elapsed_ms,
            size,
            rid,
            client,
            extra={"request_id": rid, "status": status},
        )
        return response
