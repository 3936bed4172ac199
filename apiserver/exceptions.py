"""
jsau-apiserver — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for every failure the API reports.
Why:   Services raise typed errors; global handlers (registered in main.py)
       turn them into HTTP responses with the right status code and body.
How:   Each exception carries a user-facing message, an optional context dict
       (logged, never returned), and how its body is rendered.

Exception Hierarchy:
    ApiServerError (base)
    ├── ValidationError    → 400 Bad Request (missing or malformed input)
    ├── NotFoundError      → 404 Not Found (missing record or file)
    ├── ConflictError      → 409 Conflict (duplicate favorite)
    └── InternalError      → 500 Internal Server Error

    StoreError (base for the storage layer, never reaches a handler directly)
    ├── StoreMissingError  → backing file does not exist
    └── StoreCorruptError  → backing file is not a valid JSON array of records

Body rendering:
    The public API mixes two error formats, and clients depend on both:
    - plain text:  GET /search (document), GET /recette/{id}
    - JSON object: everything else, keyed by "error" (or "message" for the
      empty favorites list)
    Each exception records its format so handlers stay uniform.
"""

from typing import Any, Dict, Optional


class ApiServerError(Exception):
    """
    Base exception for all errors reported to API clients.

    Attributes:
        message:     User-facing error description (returned in the response)
        context:     Additional debug info (logged but NOT returned to client)
        plain_text:  Render the body as text/plain instead of JSON
        body_key:    Key of the JSON object holding the message
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
        plain_text: bool = False,
        body_key: str = "error",
    ):
        self.message = message
        self.context = context or {}
        self.plain_text = plain_text
        self.body_key = body_key
        super().__init__(self.message)

    def to_body(self) -> Any:
        """Response body: the bare message for plain text, else a one-key object."""
        if self.plain_text:
            return self.message
        return {self.body_key: self.message}


class ValidationError(ApiServerError):
    """
    Raised when client input is missing or malformed.

    When:    Missing recetteFile/filename, unparseable recette ID,
             a document path that escapes the HTML directory.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        plain_text: bool = False,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx, plain_text=plain_text)
        self.field = field


class NotFoundError(ApiServerError):
    """
    Raised when a requested record or document does not exist.

    HTTP:    404 Not Found

    Note: an empty favorites list is also reported as 404, with the
    message under "message" instead of "error" (body_key="message").
    """

    status_code = 404

    def __init__(
        self,
        message: str = "The requested resource was not found",
        context: Optional[Dict[str, Any]] = None,
        plain_text: bool = False,
        body_key: str = "error",
    ):
        super().__init__(
            message=message, context=context, plain_text=plain_text, body_key=body_key
        )


class ConflictError(ApiServerError):
    """
    Raised when a favorite already exists for the given file.

    HTTP:    409 Conflict
    """

    status_code = 409

    def __init__(
        self,
        message: str = "This favorite already exists.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InternalError(ApiServerError):
    """
    Raised when reading or writing a data file fails.

    What:    JSON parse failure, wrongly-shaped records, or an OS-level I/O error.
    HTTP:    500 Internal Server Error

    The message returned to the client is generic; the underlying error
    is kept in context and logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error.",
        context: Optional[Dict[str, Any]] = None,
        plain_text: bool = False,
    ):
        super().__init__(message=message, context=context, plain_text=plain_text)


# ══════════════════════════════════════════════════════════════════════════
# Storage-layer errors
# ══════════════════════════════════════════════════════════════════════════


class StoreError(Exception):
    """
    Base exception for record store failures.

    Services catch these and translate them into ApiServerError subclasses,
    because the same storage failure maps to different responses depending
    on the endpoint (e.g. a missing favorites file is 404 on POST but 500 on GET).
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class StoreMissingError(StoreError):
    """The backing file does not exist."""

    def __init__(self, path: str):
        super().__init__(path, "file does not exist")


class StoreCorruptError(StoreError):
    """The backing file is not a JSON array of valid records."""
