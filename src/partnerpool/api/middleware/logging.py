"""Request logging middleware."""

import time
from collections.abc import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger("partnerpool.api.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs every HTTP request with its outcome and duration.

    Request bodies are not logged; search filters may contain business data.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log request/response."""
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        self._log_request(request, response, duration_ms)

        return response

    def _get_client_ip(self, request: Request) -> str | None:
        """Extract client IP from request, considering proxy headers."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # Take first IP in the chain (original client)
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return None

    def _log_request(self, request: Request, response: Response, duration_ms: float) -> None:
        """Log the completed request at a level matching its status code."""
        status_code = response.status_code
        if status_code >= 500:
            log = logger.error
        elif status_code >= 400:
            log = logger.warning
        else:
            log = logger.info

        request_id = getattr(request.state, "request_id", None)

        log(
            "http_request",
            request_id=str(request_id) if request_id else None,
            method=request.method,
            path=request.url.path,
            query=str(request.url.query) or None,
            status_code=status_code,
            duration_ms=round(duration_ms, 2),
            client_ip=self._get_client_ip(request),
            user_agent=request.headers.get("User-Agent"),
        )
