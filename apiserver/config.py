"""
jsau-apiserver — Application Configuration
===========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py; services receive paths from the Settings instance
       the app was created with, never from the module global directly.
When:  Loaded once at module import time.

Data layout on disk:
    recettes.json      JSON array of recipe records (optional)
    favorites.json     JSON array of favorite records (must exist)
    html_files/        one <normalized_title>.html document per recipe
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development, relative
    to the working directory the server is started from.
    """

    # ── Identity ──────────────────────────────────────────────────────────
    # What: Prefix of the version string returned by GET /info
    app_name: str = Field(default="jsau-apiserver")

    # ── Data Files ────────────────────────────────────────────────────────
    html_directory: Path = Field(
        default=Path("./html_files"),
        description="Directory holding one HTML document per recipe",
    )
    recettes_json: Path = Field(
        default=Path("./recettes.json"),
        description="Read-only recipe catalog (JSON array)",
    )
    favorites_json: Path = Field(
        default=Path("./favorites.json"),
        description="Favorites list (JSON array), rewritten on every mutation",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (split by cors_origins_list)
    cors_origins: str = Field(default="http://localhost:5173")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # FAVORITES_JSON and favorites_json both work
    }

    def describe_data_layout(self) -> List[str]:
        """
        What:  Lists problems with the on-disk data layout.
        When:  Called during app startup (lifespan) and by GET /health.
        Why:   The favorites file is never created implicitly, so a missing
               file should be visible in the logs before the first request fails.
        """
        problems = []
        if not self.html_directory.is_dir():
            problems.append(f"HTML directory {self.html_directory} does not exist")
        if not self.favorites_json.is_file():
            problems.append(f"Favorites file {self.favorites_json} does not exist")
        if not self.recettes_json.is_file():
            problems.append(
                f"Recipe file {self.recettes_json} does not exist (catalog will be empty)"
            )
        return problems


# Singleton instance used when create_app() is called without explicit settings
settings = Settings()
