"""Request context middleware for propagating context through the request lifecycle."""

import re
from collections.abc import Callable
from uuid import UUID, uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from partnerpool.core.context import RequestContext, request_context

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Correlation-ID"

_API_VERSION = re.compile(r"^/(v\d+)/")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that sets up RequestContext for each request.

    A valid ``X-Correlation-ID`` header is reused so calls can be traced
    across services; otherwise a new one is generated.

    Sets:
        request.state.request_id: The generated request ID
        X-Request-ID / X-Correlation-ID response headers
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request within a RequestContext."""
        request_id = uuid4()
        request.state.request_id = request_id

        ctx = RequestContext(
            request_id=request_id,
            correlation_id=self._parse_correlation_id(request) or request_id,
            api_version=self._api_version(request.url.path),
        )

        with request_context(ctx):
            response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = str(request_id)
        response.headers[CORRELATION_ID_HEADER] = str(ctx.correlation_id)
        return response

    def _parse_correlation_id(self, request: Request) -> UUID | None:
        value = request.headers.get(CORRELATION_ID_HEADER)
        if not value:
            return None
        try:
            return UUID(value)
        except ValueError:
            return None

    def _api_version(self, path: str) -> str | None:
        match = _API_VERSION.match(path)
        return match.group(1) if match else None
