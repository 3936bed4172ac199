"""
jsau-apiserver — Cache-Control Middleware
==========================================

What:  Marks every response as non-cacheable.
Why:   Catalog and favorites are re-read from disk on every request; a cached
       GET /favorites would hide a POST or DELETE made a moment earlier.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class NoStoreMiddleware(BaseHTTPMiddleware):
    """Sets Cache-Control: no-store on every response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers["Cache-Control"] = "no-store"
        return response
