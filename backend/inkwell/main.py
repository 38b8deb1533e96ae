"""
Inkwell Backend: FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers and
       returns the app; `app` at module level is what uvicorn serves
       (uvicorn inkwell.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware: CORS → Request ID → Logging → Errors   │
    │              → GZip                                 │
    │                                                     │
    │  {api_prefix}/user   signup, signin, profile        │
    │  {api_prefix}/blog   create, update, bulk, get, like│
    │  /health                                            │
    │                                                     │
    │  Exception handlers: InkwellError → its status,     │
    │  request validation → 400, anything else → 500      │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, check production settings, log ready
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from inkwell import __version__
from inkwell.config import Settings, settings
from inkwell.database import dispose_engine
from inkwell.exceptions import DatabaseError, InkwellError, UnauthenticatedError
from inkwell.middleware.errors import UnhandledErrorMiddleware, internal_error_response
from inkwell.middleware.logging import RequestLoggingMiddleware
from inkwell.middleware.request_id import RequestIDMiddleware, current_request_id
from inkwell.routes import blog, health, user
from inkwell.validation import format_errors

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(config: Settings = settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that log every query or connection at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Inkwell Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Startup continues so local development works with defaults.
        logger.error("Configuration error: %s", str(e))

    logger.info("API prefix: %s", settings.api_prefix or "/")
    logger.info("CORS origins: %s", ", ".join(settings.cors_origins_list))
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Inkwell Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(request: Request, exc: InkwellError, include_details: bool = True) -> dict:
    body = {
        "error": exc.error_code,
        "message": exc.message,
        "request_id": current_request_id(request),
    }
    if include_details and exc.context:
        body["details"] = exc.context
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP responses.

    Handler hierarchy:
        RequestValidationError → 400 (malformed JSON, bad path/query params)
        UnauthenticatedError   → 401 + WWW-Authenticate: Bearer
        DatabaseError          → 500, generic message, context logged only
        InkwellError (others)  → exc.status_code, message + details
        Exception (fallback)   → 500, generic message, traceback logged

    Internal details (stack traces, SQL, user ids of other accounts) never
    reach the response body.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = format_errors(list(exc.errors()))
        first = errors[0] if errors else {"field": "body", "message": "invalid request"}
        logger.warning("[%s] Request validation failed: %s", current_request_id(request), first)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": f"{first['field']}: {first['message']}",
                "details": {"field": first["field"], "errors": errors},
                "request_id": current_request_id(request),
            },
        )

    @app.exception_handler(UnauthenticatedError)
    async def handle_unauthenticated(request: Request, exc: UnauthenticatedError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request, exc, include_details=False),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = current_request_id(request)
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(InkwellError)
    async def handle_inkwell_error(request: Request, exc: InkwellError):
        rid = current_request_id(request)
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            return JSONResponse(
                status_code=exc.status_code,
                content={
                    "error": exc.error_code,
                    "message": "An internal error occurred. Please try again later.",
                    "request_id": rid,
                },
            )
        logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        # Forbidden / credential failures carry ids in context for the log only
        include_details = exc.status_code in (400, 404, 409)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request, exc, include_details=include_details),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Reached only for failures inside middleware; route errors are
        # answered by UnhandledErrorMiddleware.
        logger.error("[%s] Unexpected error: %s", current_request_id(request), str(exc), exc_info=True)
        return internal_error_response(request)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Settings = settings) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Middleware executes in reverse order of addition. Adding
    GZip → Errors → Logging → RequestID → CORS makes the request path
    CORS → RequestID → Logging → Errors → GZip → router.
    """
    app = FastAPI(
        title="Inkwell API",
        description="Blogging backend: accounts, posts, feed, profiles and likes.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    # CORS outermost so error responses carry CORS headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "WWW-Authenticate"],
    )

    register_exception_handlers(app)

    app.include_router(user.router, prefix=config.api_prefix)
    app.include_router(blog.router, prefix=config.api_prefix)
    app.include_router(health.router)

    return app


app = create_app()
