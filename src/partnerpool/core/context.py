"""Request context for correlating logs across one search request.

Usage:
    from partnerpool.core.context import RequestContext, request_context

    with request_context(RequestContext()):
        ctx = get_current_context()
        logger.info("searching", request_id=str(ctx.request_id))
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from partnerpool.utils.exceptions import PartnerPoolError


class ContextNotSetError(PartnerPoolError):
    """Raised when request context is accessed outside a request_context() block."""

    def __init__(self, message: str = "Request context is not set"):
        super().__init__(message)


class RequestContext(BaseModel):
    """Context for a single API request."""

    request_id: UUID = Field(default_factory=uuid4)
    correlation_id: UUID = Field(default_factory=uuid4)
    api_version: str | None = None
    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}


# =============================================================================
# Context Variable Management
# =============================================================================

_request_context: ContextVar[RequestContext | None] = ContextVar("request_context", default=None)


def get_current_context() -> RequestContext:
    """Get the current request context.

    Raises:
        ContextNotSetError: If no context is set in the current execution context
    """
    ctx = _request_context.get()
    if ctx is None:
        raise ContextNotSetError(
            "No request context is set. Use request_context() context manager."
        )
    return ctx


def get_current_context_or_none() -> RequestContext | None:
    """Get the current request context, or None if not set."""
    return _request_context.get()


def set_context(ctx: RequestContext) -> Token[RequestContext | None]:
    """Set the request context and return a token for restoration.

    This is a low-level API. Prefer using the request_context() context manager.
    """
    return _request_context.set(ctx)


def reset_context(token: Token[RequestContext | None]) -> None:
    """Reset the context to its previous value using a token."""
    _request_context.reset(token)


@contextmanager
def request_context(ctx: RequestContext):
    """Context manager for setting request context.

    Works for both sync and async code because contextvars are
    propagated to async tasks.

    Args:
        ctx: The context to set for the duration of the block

    Yields:
        The context that was set
    """
    token = set_context(ctx)
    try:
        yield ctx
    finally:
        reset_context(token)
