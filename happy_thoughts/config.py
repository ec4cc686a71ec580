"""
Happy Thoughts API — Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Environment variables (case-insensitive):
    PORT, HOST              Where uvicorn listens (default 0.0.0.0:8080)
    MONGO_URL               MongoDB connection string
    MONGO_DB_NAME           Database used when MONGO_URL names none
    RESET_DB                Truthy → reseed the collection at startup
    THOUGHTS_LIMIT          Max thoughts returned by GET /thoughts
    CORS_ORIGINS            Comma-separated allowed origins
    LOG_LEVEL               DEBUG, INFO, WARNING, ERROR, CRITICAL
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have working defaults for local development against a
    MongoDB instance on localhost.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: mongodb://[user:password@]host[:port]/[database]
    mongo_url: str = Field(
        default="mongodb://localhost/happythoughts",
        description="MongoDB connection URL",
    )

    # Used only when the URL does not carry a database path
    mongo_db_name: str = Field(default="happythoughts")

    # How long the driver waits to find a usable server before failing an operation
    mongo_server_selection_timeout_ms: int = Field(default=5000, ge=100, le=60000)

    # ── Seeding ───────────────────────────────────────────────────────────
    # Accepts true/false, 1/0, yes/no, on/off
    reset_db: bool = Field(default=False)

    # ── Thoughts ──────────────────────────────────────────────────────────
    thoughts_limit: int = Field(default=20, ge=1, le=100)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

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
        "case_sensitive": False,  # MONGO_URL and mongo_url both work
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()
