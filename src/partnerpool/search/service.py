"""Business partner search service.

Usage:
    service = BusinessPartnerSearchService(db_session, settings.search)
    page = await service.search_business_partners(
        LegalEntityPropertiesSearchRequest(legal_name="Müller"),
        None,
        PaginationRequest(page=0, size=10),
    )
"""

from collections.abc import Iterable

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from partnerpool.config.settings import SearchConfig
from partnerpool.db.repositories.base import PageResult
from partnerpool.db.repositories.partner import (
    AddressRepository,
    LegalEntityRepository,
    SiteRepository,
)
from partnerpool.search.aggregator import ResultAggregator, SearchHit
from partnerpool.search.mapper import (
    to_address_match,
    to_legacy_result,
    to_legal_entity_match,
    to_search_result,
    to_site_match,
)
from partnerpool.search.query_builder import address_name_matches, legal_name_matches
from partnerpool.search.scoring import score_page
from partnerpool.search.types import (
    AddressMatchResult,
    AddressPartnerSearchRequest,
    BusinessPartnerSearchFilterType,
    BusinessPartnerSearchRequest,
    BusinessPartnerSearchResult,
    LegacyBusinessPartnerSearchResult,
    LegalEntityMatchResult,
    LegalEntityPropertiesSearchRequest,
    Page,
    PaginationRequest,
    SiteMatchResult,
)
from partnerpool.utils.exceptions import PaginationError

logger = structlog.get_logger()


def _to_page(page_type: type[Page], result: PageResult, content: list) -> Page:
    return page_type(
        total_elements=result.total_elements,
        total_pages=result.total_pages,
        page=result.page,
        content_size=result.size,
        content=content,
    )


class BusinessPartnerSearchService:
    """Entry point for every business partner search operation.

    All operations are read-only and run their queries sequentially on
    the given session. Persistence errors propagate unchanged.
    """

    def __init__(self, db: AsyncSession, config: SearchConfig):
        self.config = config
        self.legal_entities = LegalEntityRepository(db)
        self.sites = SiteRepository(db)
        self.addresses = AddressRepository(db)
        self.aggregator = ResultAggregator(
            self.legal_entities, self.sites, self.addresses, config
        )

    def _check_pagination(self, pagination: PaginationRequest) -> None:
        if pagination.size > self.config.max_page_size:
            raise PaginationError(
                f"Page size must not exceed {self.config.max_page_size}",
                page=pagination.page,
                size=pagination.size,
            )

    async def _aggregate(
        self,
        request: LegalEntityPropertiesSearchRequest,
        filters: Iterable[BusinessPartnerSearchFilterType] | None,
        pagination: PaginationRequest,
    ) -> PageResult[SearchHit]:
        self._check_pagination(pagination)
        return await self.aggregator.aggregate(
            request, filters, page=pagination.page, size=pagination.size
        )

    async def search_business_partners(
        self,
        request: LegalEntityPropertiesSearchRequest,
        filters: Iterable[BusinessPartnerSearchFilterType] | None,
        pagination: PaginationRequest,
    ) -> Page[BusinessPartnerSearchResult]:
        """Search legal entities, sites and addresses at once.

        Args:
            request: Filter fields; an empty request yields an empty page
            filters: Entity kinds to include (None or empty for all)
            pagination: Page over the merged result list

        Returns:
            Page of nested business partner results

        Raises:
            PaginationError: If the page size exceeds the configured maximum
        """
        result = await self._aggregate(request, filters, pagination)
        content = [to_search_result(hit.record, hit.kind) for hit in result.content]
        return _to_page(Page[BusinessPartnerSearchResult], result, content)

    async def search_business_partners_legacy(
        self,
        request: LegalEntityPropertiesSearchRequest,
        filters: Iterable[BusinessPartnerSearchFilterType] | None,
        pagination: PaginationRequest,
    ) -> Page[LegacyBusinessPartnerSearchResult]:
        """Same search as :meth:`search_business_partners` in the flat result shape."""
        result = await self._aggregate(request, filters, pagination)
        content = [to_legacy_result(hit.record, hit.kind) for hit in result.content]
        return _to_page(Page[LegacyBusinessPartnerSearchResult], result, content)

    async def search_legal_entities(
        self,
        request: BusinessPartnerSearchRequest,
        pagination: PaginationRequest,
    ) -> Page[LegalEntityMatchResult]:
        """Free-text legal name search with relevance scores.

        Without a legal name every legal entity is returned in primary key
        order with score 0.
        """
        self._check_pagination(pagination)
        ranked = not request.is_empty()
        if ranked:
            criteria = legal_name_matches(request.legal_name, self.config.umlaut_strategy)
            result = await self.legal_entities.find_by_legal_name_value(
                criteria.clause, page=pagination.page, size=pagination.size
            )
        else:
            result = await self.legal_entities.find_all_page(
                page=pagination.page, size=pagination.size
            )

        scored = score_page(
            result.content,
            total_elements=result.total_elements,
            page=pagination.page,
            size=pagination.size,
            ranked=ranked,
        )
        logger.debug("legal_entity_search", ranked=ranked, total=result.total_elements)
        return _to_page(
            Page[LegalEntityMatchResult],
            result,
            [to_legal_entity_match(le, score) for le, score in scored],
        )

    async def search_addresses(
        self,
        request: AddressPartnerSearchRequest,
        pagination: PaginationRequest,
    ) -> Page[AddressMatchResult]:
        """Free-text address name search with relevance scores.

        Without a name every address is returned in primary key order with
        score 0.
        """
        self._check_pagination(pagination)
        ranked = not request.is_empty()
        if ranked:
            criteria = address_name_matches(request.name, self.config.umlaut_strategy)
            result = await self.addresses.find_by_name(
                criteria.clause, page=pagination.page, size=pagination.size
            )
        else:
            result = await self.addresses.find_all_page(
                page=pagination.page, size=pagination.size
            )

        scored = score_page(
            result.content,
            total_elements=result.total_elements,
            page=pagination.page,
            size=pagination.size,
            ranked=ranked,
        )
        logger.debug("address_search", ranked=ranked, total=result.total_elements)
        return _to_page(
            Page[AddressMatchResult],
            result,
            [to_address_match(address, score) for address, score in scored],
        )

    async def search_sites(self, pagination: PaginationRequest) -> Page[SiteMatchResult]:
        """Page over all sites in primary key order."""
        self._check_pagination(pagination)
        result = await self.sites.find_all_page(page=pagination.page, size=pagination.size)
        return _to_page(
            Page[SiteMatchResult], result, [to_site_match(site) for site in result.content]
        )
