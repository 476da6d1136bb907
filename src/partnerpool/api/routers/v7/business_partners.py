"""Business partner search endpoints (nested result shape)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from partnerpool.api.dependencies import get_pagination, get_search_service
from partnerpool.search.service import BusinessPartnerSearchService
from partnerpool.search.types import (
    BusinessPartnerSearchFilterType,
    BusinessPartnerSearchResult,
    LegalEntityPropertiesSearchRequest,
    Page,
    PaginationRequest,
)

router = APIRouter(prefix="/business-partners", tags=["business-partners"])

SearchResultFilter = Annotated[
    list[BusinessPartnerSearchFilterType] | None,
    Query(
        alias="searchResultFilter",
        description="Entity kinds to include; all kinds when omitted",
    ),
]


@router.post(
    "/search",
    response_model=Page[BusinessPartnerSearchResult],
    summary="Search business partners",
    description=(
        "Searches legal entities, sites and addresses and returns one page of "
        "the merged results. A request without any filter value returns an "
        "empty page."
    ),
)
async def search_business_partners(
    request: LegalEntityPropertiesSearchRequest,
    service: Annotated[BusinessPartnerSearchService, Depends(get_search_service)],
    pagination: Annotated[PaginationRequest, Depends(get_pagination)],
    search_result_filter: SearchResultFilter = None,
) -> Page[BusinessPartnerSearchResult]:
    return await service.search_business_partners(request, search_result_filter, pagination)
