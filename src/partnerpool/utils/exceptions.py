"""Custom exceptions for partnerpool."""


class PartnerPoolError(Exception):
    """Base exception for all partnerpool errors."""

    pass


class SearchError(PartnerPoolError):
    """Error during search operations."""

    pass


class PaginationError(SearchError):
    """Requested page or page size is outside the allowed range.

    Attributes:
        page: Requested 0-based page index
        size: Requested page size
    """

    def __init__(self, message: str, page: int, size: int):
        super().__init__(message)
        self.page = page
        self.size = size

    def __str__(self) -> str:
        return f"PaginationError: {self.args[0]} (page={self.page}, size={self.size})"


class ConfigurationError(PartnerPoolError):
    """Error in configuration or settings."""

    pass
