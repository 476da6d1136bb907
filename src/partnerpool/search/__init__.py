"""Business partner search: query building, aggregation and scoring."""

from partnerpool.search.aggregator import ResultAggregator, SearchHit
from partnerpool.search.service import BusinessPartnerSearchService
from partnerpool.search.types import (
    AddressPartnerSearchRequest,
    BusinessPartnerSearchFilterType,
    BusinessPartnerSearchRequest,
    LegalEntityPropertiesSearchRequest,
    Page,
    PaginationRequest,
    SearchKind,
)

__all__ = [
    "AddressPartnerSearchRequest",
    "BusinessPartnerSearchFilterType",
    "BusinessPartnerSearchRequest",
    "BusinessPartnerSearchService",
    "LegalEntityPropertiesSearchRequest",
    "Page",
    "PaginationRequest",
    "ResultAggregator",
    "SearchHit",
    "SearchKind",
]
