"""
jsau-apiserver — Shared Response Schemas
=========================================

What:  Response models shared across route modules (messages, errors, health).
Why:   Keeps the OpenAPI documentation accurate for every status code a route
       can return, including the ones produced by global exception handlers.
"""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """
    What:  Success confirmation for mutations.
    Example: {"message": "Favorite added successfully!"}
    """
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    What:  JSON error body returned by the favorites and catalog endpoints.
    Example: {"error": "Favorite not found."}

    Request correlation is carried in the X-Request-ID response header,
    not in the body, so the body shape stays exactly {"error": ...}.
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing the state of the on-disk data.
    Who:   Returned by GET /health for monitoring.
    """
    status: str = Field(description="Overall status: healthy or degraded")
    version: str = Field(description="Application version")
    recettes: str = Field(description="Recipe catalog file: present or missing")
    favorites: str = Field(description="Favorites file: present or missing")
    documents: str = Field(description="HTML document directory: present or missing")
    uptime_seconds: float = Field(description="Seconds since service started")
