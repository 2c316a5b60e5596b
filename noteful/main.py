"""
Noteful API — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, error formatting
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn noteful.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes (matched in order):                         │
    │    /api/folders  /api/notes  /api/tags  /health     │
    │    /  → static files from the public directory      │
    │    anything else → 404                              │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError→400  NotFound→404  Store→500     │
    │    HTTPException→its code  RequestValidation→400    │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create the Database (engine + pool), store
              it on app.state.db
    Shutdown: dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import Scope

from noteful import __version__
from noteful.config import Settings, settings
from noteful.database import Database
from noteful.exceptions import NotefulError, StoreError
from noteful.middleware.logging import RequestLoggingMiddleware
from noteful.middleware.request_id import RequestIDMiddleware, request_id_var
from noteful.routes import folders, health, notes, tags

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(config: Optional[Settings] = None) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    When:   Called once during app startup (before any other initialization).
    """
    config = config or settings
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if config.log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the process-wide Database for the lifetime of the application.

    Startup sequence:
        1. Setup logging
        2. Create the Database (engine and pool) unless one was injected
        3. Log successful startup

    Shutdown sequence:
        1. Dispose the database engine (close all pooled connections)
        2. Log shutdown
    """
    config: Settings = app.state.settings
    setup_logging(config)
    logger.info("Noteful API %s starting up...", __version__)

    if getattr(app.state, "db", None) is None:
        app.state.db = Database.from_settings(config)
    logger.info("Server ready at http://%s:%d", config.host, config.port)

    try:
        yield
    finally:
        logger.info("Noteful API shutting down...")
        await app.state.db.dispose()
        app.state.db = None
        logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(status_code: int, error: str, message: str) -> dict:
    return {
        "status": status_code,
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError / NotFoundError → their status code, their message
        StoreError                      → 500, generic message, context logged
        StarletteHTTPException          → its status code (unmatched path → 404)
        RequestValidationError          → 400 (non-integer id, malformed body)
        Exception (fallback)            → 500, generic message, traceback logged

    Every body has the same shape: {status, error, message, request_id}.
    """

    @app.exception_handler(NotefulError)
    async def handle_noteful_error(request: Request, exc: NotefulError):
        """Application errors carry their own status code and message."""
        rid = request_id_var.get("")
        if isinstance(exc, StoreError):
            logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        elif exc.status_code == 400:
            logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.status_code, exc.error_code, exc.message),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Framework-raised HTTP errors, most often 404 for an unmatched path."""
        error = "not_found" if exc.status_code == 404 else "http_error"
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.status_code, error, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Malformed path parameter or request body."""
        errors = exc.errors()
        detail = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in errors
        )
        return JSONResponse(
            status_code=400,
            content=_error_body(400, "validation_error", f"Invalid request: {detail}"),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        The stack trace is logged server-side only.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                500,
                "internal_server_error",
                "An unexpected error occurred. Please try again.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Static Front-end
# ══════════════════════════════════════════════════════════════════════════

class PublicFiles(StaticFiles):
    """
    Static-file fallback mounted after every API route.

    Any request that reaches it and is not a GET/HEAD for an existing file
    is answered with 404 (plain StaticFiles would say 405 for other methods).
    """

    async def get_response(self, path: str, scope: Scope):
        if scope["method"] not in ("GET", "HEAD"):
            raise StarletteHTTPException(status_code=404)
        return await super().get_response(path, scope)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance. The database is attached by
             the lifespan on startup; tests may set `app.state.db` themselves.
    """
    config = config or settings

    app = FastAPI(
        title="Noteful API",
        description="CRUD over notes, folders and tags.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.db = None

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(folders.router)
    app.include_router(notes.router)
    app.include_router(tags.router)
    app.include_router(health.router)

    # Mounted last: it matches every path the routers above did not
    app.mount("/", PublicFiles(directory=config.public_dir, html=True), name="public")

    return app


app = create_app()
