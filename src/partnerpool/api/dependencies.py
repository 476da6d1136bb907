"""FastAPI dependencies for API endpoints."""

from typing import Annotated

from fastapi import Depends, Query, Request

from partnerpool.config.settings import Settings
from partnerpool.db.dependencies import DbSession, get_db
from partnerpool.search.service import BusinessPartnerSearchService
from partnerpool.search.types import PaginationRequest

__all__ = [
    "get_db",
    "get_app_settings",
    "get_pagination",
    "get_search_service",
]


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_search_service(
    db: DbSession,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> BusinessPartnerSearchService:
    """Search service bound to the request's database session."""
    return BusinessPartnerSearchService(db, settings.search)


def get_pagination(
    settings: Annotated[Settings, Depends(get_app_settings)],
    page: Annotated[int, Query(ge=0, description="Zero-based page index")] = 0,
    size: Annotated[int | None, Query(ge=1, description="Page size")] = None,
) -> PaginationRequest:
    """Pagination query parameters; size defaults to the configured page size."""
    return PaginationRequest(page=page, size=size or settings.search.default_page_size)
