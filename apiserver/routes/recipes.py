"""
jsau-apiserver — Recipe Catalog Route Handlers
===============================================

What:  GET /search (catalog or single document) and GET /recette/{id} (download).
Why:   Read-only access to the catalog and its HTML documents for the frontend.
How:   Extracts parameters, delegates to RecipeService, wraps the result in
       the right response type. Errors are raised as ApiServerError subclasses
       and rendered by the global handlers in main.py.

Response types:
    GET /search                JSON array (catalog, verbatim)
    GET /search?recette=name   text/html document, inline
    GET /recette/{id}          text/html document, Content-Disposition: attachment
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import FileResponse, JSONResponse, Response

from apiserver.dependencies import get_recipe_service
from apiserver.schemas.common import ErrorResponse
from apiserver.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Recipes"])

HTML_MEDIA_TYPE = "text/html; charset=utf-8"


@router.get(
    "/search",
    responses={
        200: {"description": "Full catalog (JSON array) or the named HTML document"},
        400: {"description": "Document name escapes the HTML directory (plain text)"},
        404: {"description": "Named document not found (plain text)"},
        500: {"description": "Catalog file cannot be parsed", "model": ErrorResponse},
    },
    summary="List the catalog or fetch one recipe document",
    description=(
        "Without `recette`, returns every record of the recipe catalog "
        "(an empty array when the catalog file does not exist). With `recette`, "
        "returns the HTML document `<recette>.html`."
    ),
)
async def search(
    recette: Optional[str] = Query(
        default=None,
        description="Document name without the .html extension",
    ),
    recipes: RecipeService = Depends(get_recipe_service),
) -> Response:
    if not recette:
        records = await recipes.list_recipes()
        return JSONResponse(content=records)

    path = await recipes.get_recipe_document(recette)
    return FileResponse(path=str(path), media_type=HTML_MEDIA_TYPE)


@router.get(
    "/recette/{recette_id}",
    responses={
        200: {"description": "HTML document of the recipe, as a download"},
        400: {"description": "ID is not an integer (plain text)"},
        404: {"description": "Unknown ID or missing document (plain text)"},
        500: {"description": "Catalog cannot be read (plain text)"},
    },
    summary="Download the document of a recipe",
    description=(
        "Looks the recipe up by integer ID and sends its HTML document as an "
        "attachment. The file name is the recipe title, lowercased, with "
        "whitespace replaced by underscores."
    ),
)
async def download_recette(
    recette_id: str,
    recipes: RecipeService = Depends(get_recipe_service),
) -> FileResponse:
    # recette_id stays a str: the 400 body is ours, not FastAPI's 422
    path, filename = await recipes.get_recipe_download(recette_id)
    return FileResponse(path=str(path), media_type=HTML_MEDIA_TYPE, filename=filename)
