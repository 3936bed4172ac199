"""
jsau-apiserver — Favorites Route Handlers
==========================================

What:  POST, GET and DELETE /favorites.
Why:   Lets the frontend bookmark recipe documents by file name.
How:   Reads the JSON body, delegates to FavoritesService, returns JSON.

Request bodies:
    POST   /favorites  {"recetteFile": "tarte_tatin.html"}
    DELETE /favorites  {"filename": "tarte_tatin.html"}

    An absent body is treated like an empty object, so the service reports
    the missing field with the API's own 400 message.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from apiserver.dependencies import get_favorites_service
from apiserver.schemas.common import ErrorResponse, MessageResponse
from apiserver.schemas.favorite import AddFavoriteRequest, Favorite, RemoveFavoriteRequest
from apiserver.services.favorites_service import FavoritesService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.post(
    "",
    status_code=201,
    response_model=MessageResponse,
    responses={
        201: {"description": "Favorite added", "model": MessageResponse},
        400: {"description": "recetteFile missing", "model": ErrorResponse},
        404: {"description": "Document does not exist", "model": ErrorResponse},
        409: {"description": "Already a favorite", "model": ErrorResponse},
        500: {"description": "Favorites file cannot be read or written", "model": ErrorResponse},
    },
    summary="Add a favorite",
)
async def add_favorite(
    payload: Optional[AddFavoriteRequest] = None,
    favorites: FavoritesService = Depends(get_favorites_service),
) -> MessageResponse:
    recette_file = payload.recetteFile if payload else None
    await favorites.add_favorite(recette_file)
    return MessageResponse(message="Favorite added successfully!")


@router.get(
    "",
    response_model=List[Favorite],
    responses={
        200: {"description": "Every favorite, as stored"},
        404: {"description": "The list is empty ({\"message\": ...})"},
        500: {"description": "Favorites file cannot be read", "model": ErrorResponse},
    },
    summary="List favorites",
)
async def list_favorites(
    favorites: FavoritesService = Depends(get_favorites_service),
) -> List[Favorite]:
    return await favorites.list_favorites()


@router.delete(
    "",
    response_model=MessageResponse,
    responses={
        200: {"description": "Favorite removed", "model": MessageResponse},
        400: {"description": "filename missing", "model": ErrorResponse},
        404: {"description": "No favorite for this file", "model": ErrorResponse},
        500: {"description": "Favorites file cannot be read or written", "model": ErrorResponse},
    },
    summary="Remove a favorite",
)
async def remove_favorite(
    payload: Optional[RemoveFavoriteRequest] = None,
    favorites: FavoritesService = Depends(get_favorites_service),
) -> MessageResponse:
    filename = payload.filename if payload else None
    await favorites.remove_favorite(filename)
    return MessageResponse(message="Favorite deleted successfully.")
