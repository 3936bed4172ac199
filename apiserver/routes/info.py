"""
jsau-apiserver — Version Route
===============================

What:  GET /info returns the server's name and version as plain text.
Who:   The frontend shows it in its footer; deploy scripts use it as a smoke test.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from apiserver import __version__
from apiserver.config import Settings
from apiserver.dependencies import get_settings

router = APIRouter(tags=["Info"])


@router.get(
    "/info",
    response_class=PlainTextResponse,
    summary="Server version",
    responses={200: {"description": "e.g. jsau-apiserver-1.0.0"}},
)
async def info(settings: Settings = Depends(get_settings)) -> str:
    return f"{settings.app_name}-{__version__}"
