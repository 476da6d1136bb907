"""Business partner search endpoint (flat legacy result shape)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from partnerpool.api.dependencies import get_pagination, get_search_service
from partnerpool.api.routers.v7.business_partners import SearchResultFilter
from partnerpool.search.service import BusinessPartnerSearchService
from partnerpool.search.types import (
    LegacyBusinessPartnerSearchResult,
    LegalEntityPropertiesSearchRequest,
    Page,
    PaginationRequest,
)

router = APIRouter(prefix="/business-partners", tags=["business-partners"])


@router.post(
    "/search",
    response_model=Page[LegacyBusinessPartnerSearchResult],
    summary="Search business partners (flat results)",
)
async def search_business_partners(
    request: LegalEntityPropertiesSearchRequest,
    service: Annotated[BusinessPartnerSearchService, Depends(get_search_service)],
    pagination: Annotated[PaginationRequest, Depends(get_pagination)],
    search_result_filter: SearchResultFilter = None,
) -> Page[LegacyBusinessPartnerSearchResult]:
    return await service.search_business_partners_legacy(
        request, search_result_filter, pagination
    )
