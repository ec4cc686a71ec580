"""
Happy Thoughts API — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`uvicorn happy_thoughts.main:app`, or
       `python -m happy_thoughts`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐              │
    │  │  Req ID  │→│ Access Log  │→│ CORS │              │
    │  └──────────┘ └─────────────┘ └──────┘              │
    │                                                     │
    │  Routes:                                            │
    │  GET /   GET|POST /thoughts   GET|DELETE /thoughts/{id}
    │  PATCH /thoughts/{id}/like    GET /health           │
    │                                                     │
    │  Exception Handlers:                                │
    │  InvalidId→400 │ Validation→400 │ NotFound→404 │ DB→500
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the MongoDB client and ThoughtStore (app.state.thought_store)
    3. Ensure sort indexes
    4. Seed the collection when RESET_DB is set
    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from happy_thoughts import __version__
from happy_thoughts.config import settings
from happy_thoughts.database import ThoughtStore, close_client, create_client
from happy_thoughts.exceptions import (
    DatabaseError,
    InvalidIdError,
    NotFoundError,
    ValidationError,
)
from happy_thoughts.middleware.logging import RequestLoggingMiddleware
from happy_thoughts.middleware.request_id import RequestIDMiddleware, request_id_var
from happy_thoughts.routes import docs, health, thoughts
from happy_thoughts.seed import load_seed_data, seed_thoughts

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] happy_thoughts.access: GET /thoughts 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

async def reset_database(store: ThoughtStore) -> None:
    """
    Startup seeding for RESET_DB. Failures are logged and swallowed so the
    server keeps serving with whatever the collection already holds.
    """
    try:
        inserted = await seed_thoughts(store, load_seed_data())
        logger.info("RESET_DB: seeded %d thoughts", inserted)
    except (PyMongoError, ValidationError, OSError, ValueError) as e:
        logger.error("RESET_DB: seeding failed, continuing unseeded: %s", e)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Happy Thoughts API %s starting up...", __version__)

    client = create_client(settings)
    store = ThoughtStore.from_client(client, settings)
    app.state.thought_store = store

    try:
        await store.ensure_indexes()
    except PyMongoError as e:
        logger.warning("Could not ensure indexes (is MongoDB running?): %s", e)

    if settings.reset_db:
        await reset_database(store)

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Happy Thoughts API shutting down...")
    await close_client(client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_envelope(
    status_code: int,
    error: str,
    message: str,
    details: dict | None = None,
) -> JSONResponse:
    content = {
        "success": False,
        "response": None,
        "message": message,
        "error": error,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the error envelope.

    Handler hierarchy:
        InvalidIdError          → 400 Bad Request
        ValidationError         → 400 Bad Request (with constraint details)
        RequestValidationError  → 400 Bad Request (body not JSON / wrong shape)
        NotFoundError           → 404 Not Found
        DatabaseError           → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error
    """

    @app.exception_handler(InvalidIdError)
    async def handle_invalid_id(request: Request, exc: InvalidIdError):
        return _error_envelope(400, "invalid_id", exc.message)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_envelope(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return _error_envelope(400, "validation_error", "Validation failed", {"errors": errors})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_envelope(404, "not_found", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_envelope(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error_envelope(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Happy Thoughts API",
        description=(
            "Share short happy thoughts, like the ones you enjoy, and browse the "
            "most recent or most loved."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → route
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(docs.router)
    app.include_router(thoughts.router)
    app.include_router(health.router)

    return app


# uvicorn expects `happy_thoughts.main:app` to be importable
app = create_app()
