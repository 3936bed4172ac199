"""
jsau-apiserver — Health Check Route
====================================

What:  Health check endpoint for monitoring and container probes.
Why:   The service has no database to ping; what can break is the data layout
       on disk (a deleted favorites file, an unmounted document volume).
How:   Checks that each data location exists. It does not parse the files,
       so the check stays cheap enough to poll every few seconds.

Status levels:
    - healthy:   favorites file and document directory present (HTTP 200)
    - degraded:  one of them missing (HTTP 200, flag for monitoring)

A missing recipe catalog is reported but does not degrade the status,
since the API treats it as an empty catalog.
"""

import logging
import time

from fastapi import APIRouter, Depends

from apiserver import __version__
from apiserver.dependencies import get_favorites_service, get_recipe_service
from apiserver.schemas.common import HealthResponse
from apiserver.services.favorites_service import FavoritesService
from apiserver.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


def _presence(available: bool) -> str:
    return "present" if available else "missing"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports whether the catalog, favorites file and document directory exist.",
)
async def health_check(
    recipes: RecipeService = Depends(get_recipe_service),
    favorites: FavoritesService = Depends(get_favorites_service),
) -> HealthResponse:
    recettes_ok = await recipes.store.exists()
    favorites_ok = await favorites.store.exists()
    documents_ok = await recipes.documents.is_available()

    overall = "healthy"
    if not (favorites_ok and documents_ok):
        overall = "degraded"
        logger.warning(
            "Health check degraded: favorites=%s documents=%s",
            _presence(favorites_ok),
            _presence(documents_ok),
        )

    return HealthResponse(
        status=overall,
        version=__version__,
        recettes=_presence(recettes_ok),
        favorites=_presence(favorites_ok),
        documents=_presence(documents_ok),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
