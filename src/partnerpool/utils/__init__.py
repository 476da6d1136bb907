"""Utility modules for partnerpool."""

from partnerpool.utils.exceptions import (
    ConfigurationError,
    PaginationError,
    PartnerPoolError,
    SearchError,
)

__all__ = [
    "PartnerPoolError",
    "SearchError",
    "PaginationError",
    "ConfigurationError",
]
