"""Health check endpoints."""

import time
from datetime import UTC, datetime

import structlog
from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from partnerpool.api.schemas.health import (
    ComponentHealth,
    HealthDetailResponse,
    HealthResponse,
    HealthStatus,
)
from partnerpool.db.dependencies import DbSession

logger = structlog.get_logger()

router = APIRouter(tags=["health"])

# Application version - kept in step with pyproject.toml
APP_VERSION = "0.1.0"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Basic health check",
    description="Returns basic liveness status.",
)
async def health_check() -> HealthResponse:
    """Basic liveness check endpoint.

    Returns 200 if the application is running, regardless of
    database health. Use /health/db for the database check.
    """
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        version=APP_VERSION,
        timestamp=datetime.now(UTC),
    )


@router.get(
    "/health/db",
    response_model=HealthDetailResponse,
    summary="Database health check",
    description="Checks database connectivity.",
)
async def health_db(db: DbSession) -> HealthDetailResponse:
    """Database connectivity check.

    Executes a simple query to verify the connection and reports its latency.
    """
    db_health = await _check_database(db)

    return HealthDetailResponse(
        status=db_health.status,
        version=APP_VERSION,
        timestamp=datetime.now(UTC),
        database=db_health,
    )


async def _check_database(db: AsyncSession) -> ComponentHealth:
    """Check database connectivity."""
    start = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        latency_ms = (time.perf_counter() - start) * 1000
        logger.warning("database_health_check_failed", error=str(e)[:200])
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message=f"Database connection failed: {str(e)[:100]}",
            latency_ms=round(latency_ms, 2),
        )

    latency_ms = (time.perf_counter() - start) * 1000
    return ComponentHealth(
        status=HealthStatus.HEALTHY,
        message="Database connection successful",
        latency_ms=round(latency_ms, 2),
    )
