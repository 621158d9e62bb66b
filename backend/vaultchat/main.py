"""
VaultChat Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn vaultchat.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────────────────┐  │
    │  │  Req ID  │→│  Logging    │→│  CORS            │  │
    │  └──────────┘ └─────────────┘ └──────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /api/auth  /api/users  /api/chat  /health          │
    │                                                     │
    │  Exception Handlers:                                │
    │  VaultChatError / Exception → error_mapping table   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log effective upload settings
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vaultchat import __version__
from vaultchat.config import settings
from vaultchat.database import dispose_engine
from vaultchat.error_mapping import ErrorMapping, map_exception
from vaultchat.exceptions import ValidationError, VaultChatError
from vaultchat.middleware.logging import RequestLoggingMiddleware
from vaultchat.middleware.request_id import RequestIDMiddleware, request_id_var
from vaultchat.routes import auth, chat, health, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Run startup logging before serving and dispose the engine on shutdown."""
    setup_logging()
    logger.info("=" * 60)
    logger.info("VaultChat Backend %s starting up...", __version__)
    logger.info(
        "Chat images: max %d bytes, allowed %s, detection=%s",
        settings.chat_image_max_size_bytes,
        ", ".join(settings.allowed_mime_types_list),
        settings.image_detection_strategy,
    )
    if settings.multipart_max_file_size and settings.multipart_max_bytes is None:
        logger.warning(
            "MULTIPART_MAX_FILE_SIZE '%s' could not be parsed; multipart limit disabled",
            settings.multipart_max_file_size,
        )
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("VaultChat Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(mapping: ErrorMapping) -> JSONResponse:
    return JSONResponse(
        status_code=mapping.status_code,
        content={
            "error": mapping.error,
            "message": mapping.message,
            "request_id": request_id_var.get(""),
        },
    )


def summarize_validation_errors(errors) -> str:
    """
    Collapse pydantic error entries into one line, e.g.
    "receiverUserId: Input should be a valid integer; content: String should have at least 1 character".
    """
    parts = []
    for err in errors:
        # Drop the "body" / "query" location prefix
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "header")]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Every VaultChatError is translated through the ERROR_TABLE in
    `vaultchat.error_mapping`. Request-schema failures are reported as a
    ValidationError (400); anything else becomes a 500. Exception
    context is logged server-side and never returned to the client.
    """

    @app.exception_handler(VaultChatError)
    async def handle_vaultchat_error(request: Request, exc: VaultChatError):
        mapping = map_exception(
            exc,
            upload_limit_bytes=settings.multipart_max_bytes,
            expose_internal_detail=settings.expose_internal_errors,
        )
        rid = request_id_var.get("")
        if mapping.status_code >= 500:
            logger.error(
                "[%s] %s: %s | Context: %s",
                rid, type(exc).__name__, exc.message, exc.context,
            )
        else:
            logger.warning(
                "[%s] %s (%d): %s",
                rid, type(exc).__name__, mapping.status_code, exc.message,
            )
        return _error_response(mapping)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed request bodies and form fields answer 400 like service validation errors."""
        error = ValidationError(summarize_validation_errors(exc.errors()))
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), error.message)
        return _error_response(map_exception(error))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all for unexpected errors; the stack trace is logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        mapping = map_exception(exc, expose_internal_detail=settings.expose_internal_errors)
        return _error_response(mapping)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="VaultChat API",
        description=(
            "Chat backend: registration and login, group and private chat messages, "
            "and validated chat image uploads."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(chat.router)
    app.include_router(health.router)

    return app


app = create_app()
