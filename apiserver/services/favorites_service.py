"""
jsau-apiserver — Favorites Service
===================================

What:  Add, list and remove favorites stored in favorites.json.
Why:   Encapsulates the favorites rules (file must exist, no duplicates,
       ID assignment) and the storage error mapping, independent of HTTP.
How:   Every mutation is a full read-modify-write of the store.

Concurrency:
    Two requests that read the same array and each write back their own
    modified copy would silently lose one of the changes. add_favorite() and
    remove_favorite() therefore run their whole read-modify-write cycle under
    one asyncio.Lock. list_favorites() does not take the lock: saves replace
    the file atomically, so a read sees a complete array either way.

    The lock is per process. Several uvicorn workers sharing one favorites
    file are still not coordinated with each other.

ID assignment:
    New favorites get max(existing ids) + 1. Deriving the ID from the list
    length would hand out a duplicate after a deletion; this rule never
    collides with a surviving record.
"""

import asyncio
import logging
from typing import List, Optional

from pydantic import ValidationError as SchemaError

from apiserver.exceptions import (
    ConflictError,
    InternalError,
    NotFoundError,
    StoreCorruptError,
    StoreError,
    StoreMissingError,
    ValidationError,
)
from apiserver.schemas.favorite import Favorite, FavoriteList
from apiserver.services.document_service import DocumentDirectory
from apiserver.services.store_base import RecordStore

logger = logging.getLogger(__name__)

PARSE_ERROR_MESSAGE = "Error parsing favorites data."


def next_favorite_id(favorites: List[Favorite]) -> int:
    """ID for a new favorite: one past the highest existing ID (1 when empty)."""
    return max((f.id for f in favorites), default=0) + 1


class FavoritesService:
    """
    Business logic for the favorites list.

    One instance is shared by all requests of an application (it owns the
    write lock), see main.create_app().
    """

    def __init__(self, store: RecordStore, documents: DocumentDirectory):
        self.store = store
        self.documents = documents
        self._write_lock = asyncio.Lock()

    async def _load(self) -> List[Favorite]:
        """
        Load and validate every favorite.

        Raises:
            StoreCorruptError: Unparseable JSON or wrongly-shaped entries.
            StoreError: Any other read failure (including StoreMissingError).
        """
        records = await self.store.load()
        try:
            return FavoriteList.validate_python(records)
        except SchemaError as e:
            raise StoreCorruptError(self.store.location, str(e)) from e

    async def _save(self, favorites: List[Favorite]) -> None:
        await self.store.save([f.model_dump() for f in favorites])

    async def add_favorite(self, recette_file: Optional[str]) -> Favorite:
        """
        Add a favorite for the document `recette_file`.

        Raises:
            ValidationError: `recette_file` is missing or empty, or escapes
                the document directory.
            NotFoundError: The document (or the favorites file) does not exist.
            ConflictError: A favorite already exists for this document.
            InternalError: Favorites data cannot be parsed or written.
        """
        if not recette_file:
            raise ValidationError(message="Filename is required.", field="recetteFile")

        path = self.documents.resolve(recette_file)
        if not await self.documents.exists(path):
            logger.warning("Cannot favorite missing document %s", recette_file)
            raise NotFoundError(
                message="File does not exist.", context={"recetteFile": recette_file}
            )

        async with self._write_lock:
            try:
                favorites = await self._load()
            except StoreMissingError as e:
                raise NotFoundError(
                    message="File does not exist.", context={"path": e.path}
                ) from e
            except StoreCorruptError as e:
                raise InternalError(
                    message=PARSE_ERROR_MESSAGE, context={"path": e.path, "reason": e.reason}
                ) from e
            except StoreError as e:
                raise InternalError(
                    message="An error occurred while processing the request.",
                    context={"path": e.path, "reason": e.reason},
                ) from e

            if any(f.recetteFile == recette_file for f in favorites):
                raise ConflictError(context={"recetteFile": recette_file})

            favorite = Favorite(id=next_favorite_id(favorites), recetteFile=recette_file)
            favorites.append(favorite)

            try:
                await self._save(favorites)
            except StoreError as e:
                raise InternalError(
                    message="An error occurred while processing the request.",
                    context={"path": e.path, "reason": e.reason},
                ) from e

        logger.info("Favorite added: %s (id=%d)", recette_file, favorite.id)
        return favorite

    async def list_favorites(self) -> List[Favorite]:
        """
        Return every favorite.

        Raises:
            NotFoundError: The list is empty (body {"message": ...}).
            InternalError: Favorites data cannot be read or parsed.
        """
        try:
            favorites = await self._load()
        except StoreCorruptError as e:
            raise InternalError(
                message=PARSE_ERROR_MESSAGE, context={"path": e.path, "reason": e.reason}
            ) from e
        except StoreError as e:
            raise InternalError(
                message="An error occurred while retrieving favorites.",
                context={"path": e.path, "reason": e.reason},
            ) from e

        if not favorites:
            raise NotFoundError(message="No favorites found.", body_key="message")

        return favorites

    async def remove_favorite(self, filename: Optional[str]) -> Favorite:
        """
        Remove the first favorite whose recetteFile equals `filename`.

        Raises:
            ValidationError: `filename` is missing or empty.
            NotFoundError: No favorite references `filename`.
            InternalError: Favorites data cannot be read, parsed or written.
        """
        if not filename:
            raise ValidationError(message="Filename is required.", field="filename")

        async with self._write_lock:
            try:
                favorites = await self._load()
            except StoreCorruptError as e:
                raise InternalError(
                    message=PARSE_ERROR_MESSAGE, context={"path": e.path, "reason": e.reason}
                ) from e
            except StoreError as e:
                raise InternalError(
                    message="An error occurred while deleting the favorite.",
                    context={"path": e.path, "reason": e.reason},
                ) from e

            index = next(
                (i for i, f in enumerate(favorites) if f.recetteFile == filename), None
            )
            if index is None:
                raise NotFoundError(
                    message="Favorite not found.", context={"filename": filename}
                )

            removed = favorites.pop(index)

            try:
                await self._save(favorites)
            except StoreError as e:
                raise InternalError(
                    message="An error occurred while deleting the favorite.",
                    context={"path": e.path, "reason": e.reason},
                ) from e

        logger.info("Favorite removed: %s (id=%d)", filename, removed.id)
        return removed
