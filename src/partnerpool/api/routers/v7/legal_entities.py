"""Legal entity free-text search endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from partnerpool.api.dependencies import get_pagination, get_search_service
from partnerpool.search.service import BusinessPartnerSearchService
from partnerpool.search.types import (
    BusinessPartnerSearchRequest,
    LegalEntityMatchResult,
    Page,
    PaginationRequest,
)

router = APIRouter(prefix="/legal-entities", tags=["legal-entities"])


@router.get(
    "/search",
    response_model=Page[LegalEntityMatchResult],
    summary="Search legal entities by legal name",
    description=(
        "Matches ordered by legal name length, shortest first, with descending "
        "scores. Without a legal name all legal entities are returned with score 0."
    ),
)
async def search_legal_entities(
    service: Annotated[BusinessPartnerSearchService, Depends(get_search_service)],
    pagination: Annotated[PaginationRequest, Depends(get_pagination)],
    legal_name: Annotated[str | None, Query(alias="legalName")] = None,
) -> Page[LegalEntityMatchResult]:
    return await service.search_legal_entities(
        BusinessPartnerSearchRequest(legal_name=legal_name), pagination
    )
