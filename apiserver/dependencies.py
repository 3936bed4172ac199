"""
jsau-apiserver — Route Dependencies
====================================

What:  FastAPI dependencies giving route handlers their services.
Why:   Services are built once per application by create_app() and kept on
       app.state, so tests can build an app against temporary files and the
       favorites write lock is shared by every request of that app.
"""

from fastapi import Request

from apiserver.config import Settings
from apiserver.services.favorites_service import FavoritesService
from apiserver.services.recipe_service import RecipeService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_recipe_service(request: Request) -> RecipeService:
    return request.app.state.recipe_service


def get_favorites_service(request: Request) -> FavoritesService:
    return request.app.state.favorites_service
