"""Multi-kind business partner search aggregation.

The aggregator runs one query per requested entity kind, expands each hit
with its related records, merges the per-kind partial lists in a fixed step
order and paginates the merged list in memory:

1. legal entities: hits, then their sites, then their additional addresses
2. sites: hits, then their parent legal entities, then their additional
   addresses
3. addresses (only when searching by ``id`` with an explicit filter set that
   includes addresses): hits, then their owning legal entities

Merging happens before pagination, so memory and latency grow with the
total number of matches rather than with the page size. Each per-kind query
is read in batches of ``SearchConfig.aggregation_fetch_size`` rows until
every match has been fetched.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import structlog

from partnerpool.common.pagination import slice_page
from partnerpool.config.settings import DedupPolicy, SearchConfig
from partnerpool.db.models.partner import AddressType, LegalEntity, LogisticAddress, Site
from partnerpool.db.repositories.base import BaseRepository, PageResult
from partnerpool.db.repositories.partner import (
    AddressRepository,
    LegalEntityRepository,
    SiteRepository,
)
from partnerpool.search.predicates import Predicate
from partnerpool.search.query_builder import build
from partnerpool.search.types import (
    BusinessPartnerSearchFilterType,
    LegalEntityPropertiesSearchRequest,
    SearchKind,
)

logger = structlog.get_logger()

Record = LegalEntity | Site | LogisticAddress

ALL_FILTERS = frozenset(BusinessPartnerSearchFilterType)


@dataclass(frozen=True)
class SearchHit:
    """One entry of the merged result list."""

    kind: SearchKind
    record: Record

    @property
    def key(self) -> tuple[SearchKind, str]:
        return (self.kind, self.record.bpn)


def resolve_filters(
    filters: Iterable[BusinessPartnerSearchFilterType] | None,
) -> frozenset[BusinessPartnerSearchFilterType]:
    """An absent or empty filter set selects every kind."""
    selected = frozenset(filters or ())
    return selected or ALL_FILTERS


def merge(partials: Sequence[Sequence[SearchHit]], policy: DedupPolicy) -> list[SearchHit]:
    """Concatenate partial lists in order, dropping repeats per ``policy``.

    With ``DedupPolicy.KIND_AND_BPN`` only the first occurrence of each
    ``(kind, bpn)`` is kept.
    """
    merged = [hit for partial in partials for hit in partial]
    if policy == DedupPolicy.NONE:
        return merged

    seen: set[tuple[SearchKind, str]] = set()
    unique: list[SearchHit] = []
    for hit in merged:
        if hit.key in seen:
            continue
        seen.add(hit.key)
        unique.append(hit)
    return unique


def _additional_addresses(addresses: Iterable[LogisticAddress]) -> list[SearchHit]:
    """Owned addresses typed as additional; legal and site main addresses are left out."""
    return [
        SearchHit(SearchKind.ADDRESS, address)
        for address in addresses
        if address.address_type == AddressType.ADDITIONAL_ADDRESS
    ]


class ResultAggregator:
    """Builds one paginated result list across legal entities, sites and addresses."""

    def __init__(
        self,
        legal_entities: LegalEntityRepository,
        sites: SiteRepository,
        addresses: AddressRepository,
        config: SearchConfig,
    ):
        self.legal_entities = legal_entities
        self.sites = sites
        self.addresses = addresses
        self.config = config

    async def aggregate(
        self,
        request: LegalEntityPropertiesSearchRequest,
        filters: Iterable[BusinessPartnerSearchFilterType] | None,
        *,
        page: int,
        size: int,
    ) -> PageResult[SearchHit]:
        """Search every selected kind and return one page of the merged hits.

        A request without any filter value returns an empty page without
        querying the store.

        Args:
            request: Search request
            filters: Entity kinds to include (None or empty for all)
            page: Zero-based page index into the merged list
            size: Page size

        Returns:
            The requested slice of the merged list and its total size
        """
        if request.is_empty():
            return PageResult(total_elements=0, page=0, size=0)

        explicit = frozenset(filters or ())
        selected = resolve_filters(explicit)
        partials: list[list[SearchHit]] = []

        if BusinessPartnerSearchFilterType.SHOW_ONLY_LEGAL_ENTITIES in selected:
            partials.append(await self._legal_entity_hits(request, selected))
        if BusinessPartnerSearchFilterType.SHOW_ONLY_SITES in selected:
            partials.append(await self._site_hits(request, selected))
        # Only an explicit address filter searches addresses directly
        if (
            BusinessPartnerSearchFilterType.SHOW_ONLY_ADDITIONAL_ADDRESSES in explicit
            and request.id is not None
        ):
            partials.append(await self._address_hits(request, selected))

        merged = merge(partials, self.config.dedup_policy)
        logger.debug(
            "search_results_merged",
            filters=sorted(f.value for f in selected),
            partial_sizes=[len(p) for p in partials],
            total=len(merged),
            page=page,
            size=size,
        )
        return PageResult(
            total_elements=len(merged),
            page=page,
            size=size,
            content=slice_page(merged, page, size),
        )

    async def _legal_entity_hits(
        self,
        request: LegalEntityPropertiesSearchRequest,
        selected: frozenset[BusinessPartnerSearchFilterType],
    ) -> list[SearchHit]:
        found = await self._query(self.legal_entities, SearchKind.LEGAL_ENTITY, request)
        hits = [SearchHit(SearchKind.LEGAL_ENTITY, le) for le in found]

        if BusinessPartnerSearchFilterType.SHOW_ONLY_SITES in selected:
            hits.extend(SearchHit(SearchKind.SITE, site) for le in found for site in le.sites)
        if BusinessPartnerSearchFilterType.SHOW_ONLY_ADDITIONAL_ADDRESSES in selected:
            for le in found:
                hits.extend(_additional_addresses(le.addresses))
        return hits

    async def _site_hits(
        self,
        request: LegalEntityPropertiesSearchRequest,
        selected: frozenset[BusinessPartnerSearchFilterType],
    ) -> list[SearchHit]:
        found = await self._query(self.sites, SearchKind.SITE, request)
        hits = [SearchHit(SearchKind.SITE, site) for site in found]

        if BusinessPartnerSearchFilterType.SHOW_ONLY_LEGAL_ENTITIES in selected:
            hits.extend(await self._parents(found))
        if BusinessPartnerSearchFilterType.SHOW_ONLY_ADDITIONAL_ADDRESSES in selected:
            for site in found:
                hits.extend(_additional_addresses(site.addresses))
        return hits

    async def _address_hits(
        self,
        request: LegalEntityPropertiesSearchRequest,
        selected: frozenset[BusinessPartnerSearchFilterType],
    ) -> list[SearchHit]:
        found = await self._query(self.addresses, SearchKind.ADDRESS, request)
        hits = [SearchHit(SearchKind.ADDRESS, address) for address in found]

        if BusinessPartnerSearchFilterType.SHOW_ONLY_LEGAL_ENTITIES in selected:
            hits.extend(await self._parents(found))
        return hits

    async def _query(
        self,
        repository: BaseRepository,
        kind: SearchKind,
        request: LegalEntityPropertiesSearchRequest,
    ) -> list[Record]:
        predicate: Predicate = build(request, kind, self.config.umlaut_strategy)
        batch_size = self.config.aggregation_fetch_size

        result = await repository.find_page(predicate.clause, page=0, size=batch_size)
        records = list(result.content)
        batches = 1
        while result.content and len(records) < result.total_elements:
            result = await repository.find_page(predicate.clause, page=batches, size=batch_size)
            records.extend(result.content)
            batches += 1

        if batches > 1:
            logger.info(
                "search_results_batched",
                kind=kind.value,
                total=len(records),
                batches=batches,
            )
        return records

    async def _parents(self, children: Sequence[Site | LogisticAddress]) -> list[SearchHit]:
        """Owning legal entity of each child, in child order.

        Children whose legal entity cannot be resolved are skipped.
        """
        ids = [child.legal_entity_id for child in children if child.legal_entity_id is not None]
        by_id = {le.id: le for le in await self.legal_entities.find_by_ids(ids)}

        parents: list[SearchHit] = []
        for child in children:
            parent = by_id.get(child.legal_entity_id)
            if parent is None:
                logger.warning("search_parent_missing", bpn=child.bpn, parent="legal_entity")
                continue
            parents.append(SearchHit(SearchKind.LEGAL_ENTITY, parent))
        return parents
