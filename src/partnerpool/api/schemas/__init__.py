"""API schemas for request/response validation.

Search request and result models live in :mod:`partnerpool.search.types`.
"""

from .errors import APIError, ErrorCode
from .health import ComponentHealth, HealthDetailResponse, HealthResponse, HealthStatus

__all__ = [
    # Error schemas
    "APIError",
    "ErrorCode",
    # Health schemas
    "ComponentHealth",
    "HealthStatus",
    "HealthResponse",
    "HealthDetailResponse",
]
