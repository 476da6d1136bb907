"""Repositories for legal entities, sites and logistic addresses."""

from collections.abc import Sequence

from sqlalchemy import ColumnElement, func
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import ORMOption

from partnerpool.db.models.partner import LegalEntity, LogisticAddress, Site
from partnerpool.db.repositories.base import BaseRepository, PageResult


def _legal_entity_details() -> tuple[ORMOption, ...]:
    """Options loading everything a legal entity block needs, relative to LegalEntity."""
    return (
        selectinload(LegalEntity.legal_form),
        selectinload(LegalEntity.identifiers),
        selectinload(LegalEntity.legal_address),
    )


class LegalEntityRepository(BaseRepository[LegalEntity, int]):
    """Repository for LegalEntity queries.

    Loads child sites and addresses together with each legal entity so the
    aggregator can expand a hit into its children without further queries.
    """

    model = LegalEntity

    def load_options(self) -> Sequence[ORMOption]:
        return (
            *_legal_entity_details(),
            selectinload(LegalEntity.sites).selectinload(Site.main_address),
            selectinload(LegalEntity.addresses).selectinload(LogisticAddress.site),
        )

    async def find_by_legal_name_value(
        self,
        criteria: ColumnElement[bool],
        *,
        page: int,
        size: int,
    ) -> PageResult[LegalEntity]:
        """Find legal entities by name, shortest legal name first.

        Args:
            criteria: Name condition built by the query builder
            page: Zero-based page index
            size: Page size
        """
        return await self.find_page(
            criteria,
            page=page,
            size=size,
            order_by=[func.length(LegalEntity.legal_name), LegalEntity.id],
        )


class SiteRepository(BaseRepository[Site, int]):
    """Repository for Site queries."""

    model = Site

    def load_options(self) -> Sequence[ORMOption]:
        return (
            selectinload(Site.legal_entity).options(*_legal_entity_details()),
            selectinload(Site.main_address),
            selectinload(Site.addresses)
            .selectinload(LogisticAddress.legal_entity)
            .options(*_legal_entity_details()),
        )


class AddressRepository(BaseRepository[LogisticAddress, int]):
    """Repository for LogisticAddress queries."""

    model = LogisticAddress

    def load_options(self) -> Sequence[ORMOption]:
        return (
            selectinload(LogisticAddress.legal_entity).options(*_legal_entity_details()),
            selectinload(LogisticAddress.site),
        )

    async def find_by_name(
        self,
        criteria: ColumnElement[bool],
        *,
        page: int,
        size: int,
    ) -> PageResult[LogisticAddress]:
        """Find addresses by name, shortest name first.

        Args:
            criteria: Name condition built by the query builder
            page: Zero-based page index
            size: Page size
        """
        return await self.find_page(
            criteria,
            page=page,
            size=size,
            order_by=[func.length(LogisticAddress.name), LogisticAddress.id],
        )
