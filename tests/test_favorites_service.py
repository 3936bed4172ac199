"""
jsau-apiserver — Favorites Service Unit Tests
==============================================

What:  Tests for FavoritesService add/list/remove and storage error mapping.
How:   Real JsonFileStore on tmp_path; a mocked RecordStore where a failure
       has to be injected.

What we test:
    ✅ Add validates input, document existence and duplicates
    ✅ IDs never collide with surviving records after a deletion
    ✅ Concurrent adds all persist (no lost update)
    ✅ Storage failures map to the endpoint-specific messages
"""

import asyncio

import pytest
from unittest.mock import AsyncMock

from apiserver.exceptions import (
    ConflictError,
    InternalError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from apiserver.schemas.favorite import Favorite
from apiserver.services.favorites_service import FavoritesService, next_favorite_id

from tests.helpers import read_json, write_json


class TestNextFavoriteId:
    """Tests for next_favorite_id()."""

    def test_empty_list(self):
        assert next_favorite_id([]) == 1

    def test_one_past_highest(self):
        favorites = [
            Favorite(id=3, recetteFile="a.html"),
            Favorite(id=1, recetteFile="b.html"),
        ]
        assert next_favorite_id(favorites) == 4


class TestAddFavorite:
    """Tests for FavoritesService.add_favorite()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [None, ""])
    async def test_missing_filename(self, favorites_service, value):
        with pytest.raises(ValidationError, match="Filename is required."):
            await favorites_service.add_favorite(value)

    @pytest.mark.asyncio
    async def test_add_persists_record(self, favorites_service, favorites_path):
        favorite = await favorites_service.add_favorite("soupe.html")

        assert favorite.id == 1
        assert read_json(favorites_path) == [{"id": 1, "recetteFile": "soupe.html"}]

    @pytest.mark.asyncio
    async def test_missing_document(self, favorites_service, favorites_path):
        with pytest.raises(NotFoundError, match="File does not exist."):
            await favorites_service.add_favorite("gratin.html")
        assert read_json(favorites_path) == []

    @pytest.mark.asyncio
    async def test_document_outside_directory(self, favorites_service):
        with pytest.raises(ValidationError, match="Invalid file path."):
            await favorites_service.add_favorite("../favorites.json")

    @pytest.mark.asyncio
    async def test_duplicate_is_conflict(self, favorites_service, favorites_path):
        await favorites_service.add_favorite("soupe.html")

        with pytest.raises(ConflictError, match="This favorite already exists."):
            await favorites_service.add_favorite("soupe.html")
        assert len(read_json(favorites_path)) == 1

    @pytest.mark.asyncio
    async def test_missing_favorites_file(self, favorites_service, favorites_path):
        favorites_path.unlink()

        with pytest.raises(NotFoundError, match="File does not exist."):
            await favorites_service.add_favorite("soupe.html")
        assert not favorites_path.exists()

    @pytest.mark.asyncio
    async def test_corrupt_favorites_file(self, favorites_service, favorites_path):
        write_json(favorites_path, "[{")

        with pytest.raises(InternalError, match="Error parsing favorites data."):
            await favorites_service.add_favorite("soupe.html")

    @pytest.mark.asyncio
    async def test_wrongly_shaped_records_are_corrupt(self, favorites_service, favorites_path):
        write_json(favorites_path, [{"id": "one"}])

        with pytest.raises(InternalError, match="Error parsing favorites data."):
            await favorites_service.add_favorite("soupe.html")

    @pytest.mark.asyncio
    async def test_extra_fields_preserved(self, favorites_service, favorites_path):
        write_json(favorites_path, [{"id": 1, "recetteFile": "soupe.html", "note": "5/5"}])

        await favorites_service.add_favorite("tarte_tatin.html")

        assert read_json(favorites_path) == [
            {"id": 1, "recetteFile": "soupe.html", "note": "5/5"},
            {"id": 2, "recetteFile": "tarte_tatin.html"},
        ]

    @pytest.mark.asyncio
    async def test_ids_unique_after_deletion(self, favorites_service, favorites_path):
        await favorites_service.add_favorite("soupe.html")
        await favorites_service.add_favorite("tarte_tatin.html")
        await favorites_service.remove_favorite("soupe.html")

        favorite = await favorites_service.add_favorite("soupe.html")

        ids = [record["id"] for record in read_json(favorites_path)]
        assert favorite.id == 3
        assert len(ids) == len(set(ids))

    @pytest.mark.asyncio
    async def test_concurrent_adds_all_persist(self, favorites_service, favorites_path, html_dir):
        names = [f"recette_{i}.html" for i in range(10)]
        for name in names:
            (html_dir / name).write_text("<p></p>", encoding="utf-8")

        await asyncio.gather(*(favorites_service.add_favorite(name) for name in names))

        stored = read_json(favorites_path)
        assert sorted(record["recetteFile"] for record in stored) == sorted(names)
        assert sorted(record["id"] for record in stored) == list(range(1, 11))

    @pytest.mark.asyncio
    async def test_write_failure(self, documents):
        store = AsyncMock()
        store.location = "favorites.json"
        store.load = AsyncMock(return_value=[])
        store.save = AsyncMock(side_effect=StoreError("favorites.json", "read-only file system"))
        service = FavoritesService(store, documents)

        with pytest.raises(InternalError, match="An error occurred while processing the request."):
            await service.add_favorite("soupe.html")


class TestListFavorites:
    """Tests for FavoritesService.list_favorites()."""

    @pytest.mark.asyncio
    async def test_empty_list_is_not_found(self, favorites_service):
        with pytest.raises(NotFoundError, match="No favorites found.") as excinfo:
            await favorites_service.list_favorites()
        assert excinfo.value.to_body() == {"message": "No favorites found."}

    @pytest.mark.asyncio
    async def test_returns_records(self, favorites_service, favorites_path):
        write_json(favorites_path, [{"id": 1, "recetteFile": "file1.html"}])

        favorites = await favorites_service.list_favorites()

        assert [f.model_dump() for f in favorites] == [{"id": 1, "recetteFile": "file1.html"}]

    @pytest.mark.asyncio
    async def test_missing_file(self, favorites_service, favorites_path):
        favorites_path.unlink()

        with pytest.raises(InternalError, match="An error occurred while retrieving favorites."):
            await favorites_service.list_favorites()

    @pytest.mark.asyncio
    async def test_corrupt_file(self, favorites_service, favorites_path):
        write_json(favorites_path, "nope")

        with pytest.raises(InternalError, match="Error parsing favorites data."):
            await favorites_service.list_favorites()


class TestRemoveFavorite:
    """Tests for FavoritesService.remove_favorite()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [None, ""])
    async def test_missing_filename(self, favorites_service, value):
        with pytest.raises(ValidationError, match="Filename is required."):
            await favorites_service.remove_favorite(value)

    @pytest.mark.asyncio
    async def test_not_found(self, favorites_service, favorites_path):
        write_json(favorites_path, [{"id": 1, "recetteFile": "file1.html"}])

        with pytest.raises(NotFoundError, match="Favorite not found."):
            await favorites_service.remove_favorite("nonexistent.html")
        assert read_json(favorites_path) == [{"id": 1, "recetteFile": "file1.html"}]

    @pytest.mark.asyncio
    async def test_removes_first_match_only(self, favorites_service, favorites_path):
        write_json(
            favorites_path,
            [
                {"id": 1, "recetteFile": "a.html"},
                {"id": 2, "recetteFile": "b.html"},
                {"id": 3, "recetteFile": "a.html"},
            ],
        )

        removed = await favorites_service.remove_favorite("a.html")

        assert removed.id == 1
        assert read_json(favorites_path) == [
            {"id": 2, "recetteFile": "b.html"},
            {"id": 3, "recetteFile": "a.html"},
        ]

    @pytest.mark.asyncio
    async def test_corrupt_file(self, favorites_service, favorites_path):
        write_json(favorites_path, "{")

        with pytest.raises(InternalError, match="Error parsing favorites data."):
            await favorites_service.remove_favorite("a.html")

    @pytest.mark.asyncio
    async def test_missing_file(self, favorites_service, favorites_path):
        favorites_path.unlink()

        with pytest.raises(InternalError, match="An error occurred while deleting the favorite."):
            await favorites_service.remove_favorite("a.html")
