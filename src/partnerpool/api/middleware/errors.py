"""Error handling middleware for mapping exceptions to HTTP responses."""

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID

import structlog
from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from partnerpool.api.schemas.errors import APIError, ErrorCode
from partnerpool.core.logging import log_exception
from partnerpool.utils.exceptions import PaginationError, SearchError

logger = structlog.get_logger()


def _request_id(request: Request) -> str:
    """Extract request ID from state or return a placeholder."""
    if hasattr(request.state, "request_id"):
        rid = request.state.request_id
        return str(rid) if isinstance(rid, UUID) else rid
    return "unknown"


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: dict | None = None,
) -> JSONResponse:
    """Build a JSON response carrying the APIError envelope."""
    request_id = _request_id(request)
    error = APIError(
        error_code=error_code,
        message=message,
        details=details,
        request_id=request_id,
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(mode="json"),
        headers={"X-Request-ID": request_id},
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI request validation failures in the APIError envelope."""
    return error_response(
        request,
        422,
        ErrorCode.VALIDATION_ERROR.value,
        "Request validation failed",
        {"errors": _jsonable_errors(exc.errors())},
    )


def _jsonable_errors(errors) -> list[dict]:
    # "ctx" may hold exception instances
    return [{k: v for k, v in error.items() if k != "ctx"} for error in errors]


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware that catches exceptions and returns standardized error responses.

    Search code never catches persistence errors itself; they surface here
    as 503 when the database is unreachable and 500 otherwise.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and handle any exceptions."""
        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc)

    def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """Convert exception to JSON error response."""
        status_code, error_code, message, details = self._map_exception(
            exc, debug=self._is_debug(request)
        )

        if status_code == 500:
            log_exception(logger, exc, path=request.url.path, error_code=error_code)
        else:
            log = logger.error if status_code >= 500 else logger.warning
            log(
                "request_failed",
                path=request.url.path,
                status_code=status_code,
                error_code=error_code,
                error_type=type(exc).__name__,
            )
        return error_response(request, status_code, error_code, message, details)

    def _map_exception(
        self, exc: Exception, debug: bool = False
    ) -> tuple[int, str, str, dict | None]:
        """Map exception to (status_code, error_code, message, details).

        Internal errors name the exception type in ``details`` only when
        ``debug`` is set.
        """
        if isinstance(exc, PaginationError):
            return (
                400,
                ErrorCode.INVALID_REQUEST.value,
                exc.args[0],
                {"page": exc.page, "size": exc.size},
            )

        if isinstance(exc, SearchError):
            return (400, ErrorCode.INVALID_REQUEST.value, str(exc), None)

        # Validation errors (Pydantic)
        if isinstance(exc, ValidationError):
            return (
                422,
                ErrorCode.VALIDATION_ERROR.value,
                "Request validation failed",
                {"errors": _jsonable_errors(exc.errors())},
            )

        # Database unreachable
        if isinstance(exc, OperationalError) or (
            isinstance(exc, DBAPIError) and exc.connection_invalidated
        ):
            return (
                503,
                ErrorCode.SERVICE_UNAVAILABLE.value,
                "Database unavailable",
                None,
            )

        if isinstance(exc, SQLAlchemyError):
            return (
                500,
                ErrorCode.INTERNAL_ERROR.value,
                "Internal server error",
                {"type": type(exc).__name__} if debug else None,
            )

        # Generic exceptions
        return (
            500,
            ErrorCode.INTERNAL_ERROR.value,
            "Internal server error",
            {"type": type(exc).__name__} if debug else None,
        )

    def _is_debug(self, request: Request) -> bool:
        """Debug flag of the settings the application was created with."""
        settings = getattr(request.app.state, "settings", None)
        return bool(settings and settings.DEBUG)
