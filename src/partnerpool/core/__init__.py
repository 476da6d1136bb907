"""Core services and utilities for partnerpool."""

from .context import (
    ContextNotSetError,
    RequestContext,
    get_current_context,
    get_current_context_or_none,
    request_context,
    reset_context,
    set_context,
)
from .logging import get_logger, setup_logging

__all__ = [
    # Context
    "ContextNotSetError",
    "RequestContext",
    "get_current_context",
    "get_current_context_or_none",
    "request_context",
    "reset_context",
    "set_context",
    # Logging
    "get_logger",
    "setup_logging",
]
