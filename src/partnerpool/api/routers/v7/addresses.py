"""Address free-text search endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from partnerpool.api.dependencies import get_pagination, get_search_service
from partnerpool.search.service import BusinessPartnerSearchService
from partnerpool.search.types import (
    AddressMatchResult,
    AddressPartnerSearchRequest,
    Page,
    PaginationRequest,
)

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.get(
    "/search",
    response_model=Page[AddressMatchResult],
    summary="Search addresses by name",
)
async def search_addresses(
    service: Annotated[BusinessPartnerSearchService, Depends(get_search_service)],
    pagination: Annotated[PaginationRequest, Depends(get_pagination)],
    name: Annotated[str | None, Query()] = None,
) -> Page[AddressMatchResult]:
    return await service.search_addresses(AddressPartnerSearchRequest(name=name), pagination)
