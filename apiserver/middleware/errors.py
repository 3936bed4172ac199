"""
jsau-apiserver — Unhandled Error Middleware
============================================

What:  Turns any exception escaping a route into the JSON 500 response.
Why:   Starlette renders exception handlers registered for `Exception` in its
       outermost layer, past the request ID, access log and no-store
       middleware. Catching here keeps those responses on the normal path.
How:   Innermost of our middleware; ApiServerError and request validation
       errors never reach it because their handlers run inside the router.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from apiserver.middleware.request_id import request_id_var

logger = logging.getLogger("apiserver.errors")

INTERNAL_ERROR_BODY = {"error": "Internal server error."}


def internal_error_response() -> JSONResponse:
    return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                request_id_var.get(""),
                request.method,
                request.url.path,
                str(exc),
                exc_info=True,
            )
            return internal_error_response()
