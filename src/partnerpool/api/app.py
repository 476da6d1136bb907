"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from partnerpool.api.middleware import (
    ErrorHandlingMiddleware,
    RequestContextMiddleware,
    RequestLoggingMiddleware,
    request_validation_handler,
)
from partnerpool.api.routers import health_router, v6_router, v7_router
from partnerpool.config.settings import Settings, get_settings
from partnerpool.config.validation import get_configuration_summary, validate_or_raise
from partnerpool.core.logging import setup_logging
from partnerpool.db.config import close_db, init_db

logger = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings override (useful for testing)

    Returns:
        Configured FastAPI application

    Example:
        # Production
        app = create_app()

        # Testing
        app = create_app(settings=Settings(ENVIRONMENT="test"))

        # Run with uvicorn
        uvicorn partnerpool.api.app:create_app --factory
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Partnerpool API",
        description="Business partner search over legal entities, sites and addresses",
        version="0.1.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=_lifespan,
    )

    # Store settings on app state for access in dependencies
    app.state.settings = settings

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Configure middleware (order matters - outermost to innermost)
    _configure_middleware(app, settings)

    _configure_routers(app)

    return app


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Validates configuration and checks database connectivity on startup,
    releases database connections on shutdown.
    """
    settings: Settings = app.state.settings

    setup_logging(settings=settings)
    validate_or_raise(settings)
    logger.info("application_starting", **get_configuration_summary(settings))

    await init_db(settings)

    yield

    logger.info("application_stopping")
    await close_db()


def _configure_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware order (outermost to innermost execution):
    1. RequestLoggingMiddleware - Logs all requests
    2. ErrorHandlingMiddleware - Converts exceptions to HTTP responses
    3. CORSMiddleware - Handles CORS (if configured)
    4. RequestContextMiddleware - Sets ContextVar for request context

    Note: Middleware is added in reverse order because Starlette
    processes them from last-added to first-added.
    """
    # Innermost: Request context
    app.add_middleware(RequestContextMiddleware)

    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Error handling (catches exceptions from all inner middleware)
    app.add_middleware(ErrorHandlingMiddleware)

    # Outermost: Request logging
    app.add_middleware(RequestLoggingMiddleware)


def _configure_routers(app: FastAPI) -> None:
    """Configure API routers."""
    # Health check endpoints (no prefix - at root level)
    app.include_router(health_router)

    app.include_router(v7_router)
    app.include_router(v6_router)
