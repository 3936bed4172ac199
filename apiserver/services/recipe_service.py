"""
jsau-apiserver — Recipe Catalog Service
========================================

What:  Read-only access to the recipe catalog and its HTML documents.
Why:   Keeps catalog rules (missing file lists as empty, first-match ID
       lookup, title → file name derivation) out of the route handlers.
How:   Reads the whole catalog through a RecordStore on every call; no caching,
       so edits to recettes.json are visible on the next request.

Operations:
    list_recipes()           GET /search            full catalog, verbatim
    get_recipe_document()    GET /search?recette=   <name>.html, served inline
    get_recipe_download()    GET /recette/{id}      document of a recipe, as download

Error formats:
    GET /recette/{id} reports every failure as plain text; GET /search reports
    catalog failures as JSON and document failures as plain text. The
    exceptions raised here carry that format (see exceptions.py).
"""

import logging
import re
from pathlib import Path
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError as SchemaError

from apiserver.exceptions import (
    InternalError,
    NotFoundError,
    StoreError,
    StoreMissingError,
    ValidationError,
)
from apiserver.schemas.recipe import Recipe
from apiserver.services.document_service import (
    DOCUMENT_EXTENSION,
    DocumentDirectory,
    document_filename,
)
from apiserver.services.store_base import RecordStore

logger = logging.getLogger(__name__)

# Leading optional sign and ASCII digits; anything after them is ignored ("12abc" → 12)
_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


def parse_recette_id(raw: str) -> int:
    """
    Parse the {id} path segment of GET /recette/{id}.

    Raises:
        ValidationError: No integer at the start of `raw`.
    """
    match = _LEADING_INTEGER.match(raw)
    if match is None:
        raise ValidationError(
            message="Invalid recette ID.",
            field="id",
            context={"value": raw},
            plain_text=True,
        )
    return int(match.group(1))


def _has_id(record: Any, recette_id: int) -> bool:
    if not isinstance(record, dict):
        return False
    value = record.get("id")
    # bool is an int subclass; true/false in the catalog never match an ID
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value == recette_id


class RecipeService:
    """
    Business logic for the recipe catalog.

    Dependencies are injected so tests (and alternative deployments) can
    point the service at any store and document directory.
    """

    def __init__(self, store: RecordStore, documents: DocumentDirectory):
        self.store = store
        self.documents = documents

    async def list_recipes(self) -> List[Any]:
        """
        Return the full catalog as stored.

        A missing catalog file is an empty catalog, not an error.

        Raises:
            InternalError: The catalog exists but cannot be read or parsed.
        """
        try:
            return await self.store.load()
        except StoreMissingError:
            logger.debug("Recipe catalog %s missing, returning empty list", self.store.location)
            return []
        except StoreError as e:
            logger.error("Error parsing JSON data from %s: %s", self.store.location, e.reason)
            raise InternalError(
                message="Error parsing JSON data.",
                context={"path": e.path, "reason": e.reason},
            ) from e

    async def get_recipe_document(self, name: str) -> Path:
        """
        Resolve GET /search?recette=<name> to <name>.html.

        Raises:
            ValidationError: `name` points outside the document directory.
            NotFoundError: The document does not exist.
        """
        path = self.documents.resolve(f"{name}{DOCUMENT_EXTENSION}", plain_text=True)
        if not await self.documents.exists(path):
            logger.warning("Document not found: %s", path.name)
            raise NotFoundError(
                message="File not Found",
                context={"path": str(path)},
                plain_text=True,
            )
        return path

    async def find_recipe(self, recette_id: int) -> Optional[Recipe]:
        """
        First catalog record whose `id` equals `recette_id`, or None.

        Raises:
            InternalError: The catalog is missing or cannot be read, or the
                matching record lacks a string `recette`.
        """
        try:
            records = await self.store.load()
        except StoreError as e:
            logger.error("Failed to load recipe catalog %s: %s", e.path, e.reason)
            raise InternalError(
                context={"path": e.path, "reason": e.reason}, plain_text=True
            ) from e

        record = next((r for r in records if _has_id(r, recette_id)), None)
        if record is None:
            return None

        try:
            return Recipe.model_validate(record)
        except SchemaError as e:
            logger.error("Malformed recipe record %s: %s", recette_id, str(e))
            raise InternalError(
                context={"id": recette_id, "reason": str(e)}, plain_text=True
            ) from e

    async def get_recipe_download(self, raw_id: str) -> Tuple[Path, str]:
        """
        Resolve GET /recette/{id} to the recipe's document.

        Returns:
            Tuple of (absolute path, download file name). The download name is
            the base name of the path: a title "a/b" downloads as "b.html".

        Raises:
            ValidationError: `raw_id` is not an integer.
            NotFoundError: No recipe with this ID, or its document is missing.
            InternalError: The catalog is missing or cannot be read.
        """
        recette_id = parse_recette_id(raw_id)

        recipe = await self.find_recipe(recette_id)
        if recipe is None:
            raise NotFoundError(
                message="Document not found.",
                context={"id": recette_id},
                plain_text=True,
            )

        filename = document_filename(recipe.recette)
        try:
            path = self.documents.resolve(filename, plain_text=True)
        except ValidationError:
            # A title like "../x" cannot name a document in the directory
            path = None

        if path is None or not await self.documents.exists(path):
            logger.warning(
                "HTML file not found for recette %s (%s)", recette_id, filename
            )
            raise NotFoundError(
                message="HTML file not found for the provided document.",
                context={"id": recette_id, "filename": filename},
                plain_text=True,
            )

        return path, path.name
