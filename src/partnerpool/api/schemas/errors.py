"""Error response schemas for API."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Request errors
    INVALID_REQUEST = "invalid_request"
    VALIDATION_ERROR = "validation_error"

    # System errors
    INTERNAL_ERROR = "internal_error"
    SERVICE_UNAVAILABLE = "service_unavailable"


class APIError(BaseModel):
    """Standardized API error response format."""

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None, description="Additional error context"
    )
    request_id: str = Field(..., description="Request ID for tracing")
    timestamp: datetime = Field(..., description="When the error occurred")

    model_config = {"json_schema_extra": {"example": {
        "error_code": "invalid_request",
        "message": "Page size must not exceed 5000",
        "details": {"page": 0, "size": 10000},
        "request_id": "5f0c6a52-3c1e-4c55-9d2e-0f1a4b6c7d8e",
        "timestamp": "2026-01-30T12:00:00Z",
    }}}
