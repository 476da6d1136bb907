"""Site listing endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from partnerpool.api.dependencies import get_pagination, get_search_service
from partnerpool.search.service import BusinessPartnerSearchService
from partnerpool.search.types import Page, PaginationRequest, SiteMatchResult

router = APIRouter(prefix="/sites", tags=["sites"])


@router.get(
    "/search",
    response_model=Page[SiteMatchResult],
    summary="Page over all sites",
)
async def search_sites(
    service: Annotated[BusinessPartnerSearchService, Depends(get_search_service)],
    pagination: Annotated[PaginationRequest, Depends(get_pagination)],
) -> Page[SiteMatchResult]:
    return await service.search_sites(pagination)
