"""
jsau-apiserver — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, service wiring, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn apiserver.main:app),
       and by the test suite with Settings pointing at temporary files.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  Req ID → Logging → No-Store → CORS → Errors        │
    │                                                     │
    │  Routes:                                            │
    │  /info  /search  /recette/{id}  /favorites  /health │
    │                                                     │
    │  Services (app.state):                              │
    │  RecipeService ──┐                                  │
    │  FavoritesService┴→ JsonFileStore, DocumentDirectory│
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Conflict→409 │ 500 │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from apiserver import __version__
from apiserver.config import Settings, settings as default_settings
from apiserver.exceptions import ApiServerError
from apiserver.middleware.cache_control import NoStoreMiddleware
from apiserver.middleware.errors import UnhandledErrorMiddleware, internal_error_response
from apiserver.middleware.logging import RequestLoggingMiddleware
from apiserver.middleware.request_id import RequestIDMiddleware, request_id_var
from apiserver.routes import favorites, health, info, recipes
from apiserver.services.document_service import DocumentDirectory
from apiserver.services.favorites_service import FavoritesService
from apiserver.services.json_store import JsonFileStore
from apiserver.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and report the data layout.
    Shutdown: log only; nothing is held open between requests.
    """
    config: Settings = app.state.settings
    setup_logging(config.log_level)

    logger.info("=" * 60)
    logger.info("%s %s starting up...", config.app_name, __version__)
    logger.info("HTML directory: %s", config.html_directory.resolve())
    logger.info("Recipe catalog: %s", config.recettes_json.resolve())
    logger.info("Favorites file: %s", config.favorites_json.resolve())

    # Missing data is not fatal: the API reports it per request
    for problem in config.describe_data_layout():
        logger.warning(problem)

    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ApiServerError          → its own status code and body format
        RequestValidationError  → 400 (malformed body, never FastAPI's 422)
        Exception (fallback)    → 500 Internal Server Error

    Exceptions escaping a route are answered by UnhandledErrorMiddleware
    instead, so the 500 still passes through the rest of the middleware.

    Internal details (paths, parser messages) go to the log only.
    """

    @app.exception_handler(ApiServerError)
    async def handle_api_error(request: Request, exc: ApiServerError) -> Response:
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.warning("[%s] %s | Context: %s", rid, exc.message, exc.context)

        if exc.plain_text:
            return PlainTextResponse(exc.message, status_code=exc.status_code)
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Body is not JSON or has wrongly-typed fields."""
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid request: %s", rid, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request."})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Failures of the middleware itself; route errors stop at UnhandledErrorMiddleware."""
        logger.error("Unexpected error outside the route: %s", str(exc), exc_info=True)
        return internal_error_response()


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to build the app with. Defaults to the module-level
                singleton (environment variables / .env).

    Services are created here, once per app, and stored on app.state.
    FavoritesService must not be recreated per request: it owns the lock
    that serializes favorites writes.
    """
    config = config or default_settings

    app = FastAPI(
        title="jsau-apiserver",
        description="Recipe catalog and favorites API backed by JSON files.",
        version=__version__,
        lifespan=lifespan,
    )

    documents = DocumentDirectory(config.html_directory)
    app.state.settings = config
    app.state.recipe_service = RecipeService(JsonFileStore(config.recettes_json), documents)
    app.state.favorites_service = FavoritesService(
        JsonFileStore(config.favorites_json), documents
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = outermost)
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Content-Disposition"],
    )
    app.add_middleware(NoStoreMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(info.router)
    app.include_router(recipes.router)
    app.include_router(favorites.router)
    app.include_router(health.router)

    return app


# uvicorn expects `apiserver.main:app` to be importable
app = create_app()
