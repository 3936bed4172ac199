"""
jsau-apiserver — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Every test gets its own HTML directory and JSON files, so tests never
       touch real data and never see each other's writes.
How:   pytest's tmp_path holds the data; create_app() is given Settings
       pointing at it.

Fixture Hierarchy (all function-scoped):
    data_dir
    ├── html_dir            html_files/ with soupe.html and tarte_tatin.html
    ├── recettes_path       recettes.json (two recipes)
    └── favorites_path      favorites.json (empty array)
    test_settings → test_app → test_client
    recipe_service / favorites_service (built on the same files)
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Keep the module-level Settings() singleton away from any real .env values
os.environ.setdefault("LOG_LEVEL", "WARNING")

from apiserver.config import Settings  # noqa: E402
from apiserver.main import create_app  # noqa: E402
from apiserver.services.document_service import DocumentDirectory  # noqa: E402
from apiserver.services.favorites_service import FavoritesService  # noqa: E402
from apiserver.services.json_store import JsonFileStore  # noqa: E402
from apiserver.services.recipe_service import RecipeService  # noqa: E402

from tests.helpers import SAMPLE_RECIPES, write_json  # noqa: E402


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path


@pytest.fixture
def html_dir(data_dir):
    directory = data_dir / "html_files"
    directory.mkdir()
    (directory / "soupe.html").write_text("<h1>Soupe</h1>", encoding="utf-8")
    (directory / "tarte_tatin.html").write_text("<h1>Tarte Tatin</h1>", encoding="utf-8")
    return directory


@pytest.fixture
def recettes_path(data_dir):
    path = data_dir / "recettes.json"
    write_json(path, SAMPLE_RECIPES)
    return path


@pytest.fixture
def favorites_path(data_dir):
    path = data_dir / "favorites.json"
    write_json(path, [])
    return path


@pytest.fixture
def test_settings(html_dir, recettes_path, favorites_path):
    return Settings(
        html_directory=html_dir,
        recettes_json=recettes_path,
        favorites_json=favorites_path,
        log_level="WARNING",
    )


@pytest.fixture
def test_app(test_settings):
    return create_app(test_settings)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed directly to the ASGI app (no server needed).

    Usage:
        async def test_info(test_client):
            response = await test_client.get("/info")
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def documents(html_dir):
    return DocumentDirectory(html_dir)


@pytest.fixture
def recipe_service(recettes_path, documents):
    return RecipeService(JsonFileStore(recettes_path), documents)


@pytest.fixture
def favorites_service(favorites_path, documents):
    return FavoritesService(JsonFileStore(favorites_path), documents)
