"""Base repository with paged read operations.

Provides a generic read-only repository for SQLAlchemy models with async
support. Search filters arrive as SQLAlchemy boolean clauses so the
repository stays independent of how they were composed.

Usage:
    from partnerpool.db.repositories.base import BaseRepository

    class SiteRepository(BaseRepository[Site, int]):
        pass

    repo = SiteRepository(db_session)
    site = await repo.get(site_id)
    page = await repo.find_page(Site.name.like("%werk%"), page=0, size=10)
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar
from uuid import UUID

import structlog
from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from partnerpool.common.pagination import page_count
from partnerpool.core.logging import log_database_query
from partnerpool.db.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)
PKType = TypeVar("PKType", bound=UUID | int | str)

logger = structlog.get_logger()


@dataclass
class PageResult(Generic[ModelType]):
    """One page of ORM records plus the total across all pages."""

    total_elements: int
    page: int
    size: int
    content: list[ModelType] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return page_count(self.total_elements, self.size)


class BaseRepository(Generic[ModelType, PKType]):
    """Generic read repository for SQLAlchemy models.

    Subclasses declare ``load_options`` to eagerly load every relation the
    result mapper touches, so no lazy load is attempted once results leave
    the session's async context.

    Type Parameters:
        ModelType: The SQLAlchemy model class
        PKType: The type of the primary key (UUID, int, or str)

    Attributes:
        model: The model class
        db: The database session
    """

    model: type[ModelType]

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    def __init_subclass__(cls, **kwargs):
        """Extract model type from generic parameter."""
        super().__init_subclass__(**kwargs)
        for base in getattr(cls, "__orig_bases__", []):
            args = getattr(base, "__args__", None)
            if args and len(args) >= 1:
                first_arg = args[0]
                # Check if it's an actual class (not a TypeVar)
                if isinstance(first_arg, type) and issubclass(first_arg, Base):
                    cls.model = first_arg
                    break

    def load_options(self) -> Sequence[ORMOption]:
        """Loader options applied to every entity query. Override per model."""
        return ()

    async def get(self, pk: PKType) -> ModelType | None:
        """Get a single record by primary key.

        Args:
            pk: Primary key value

        Returns:
            Model instance or None if not found
        """
        return await self.db.get(self.model, pk, options=list(self.load_options()))

    async def find_by_ids(self, pks: Sequence[PKType]) -> list[ModelType]:
        """Get multiple records by primary keys.

        Args:
            pks: Primary key values; duplicates are ignored

        Returns:
            Found records in primary key order (may be fewer than requested)
        """
        if not pks:
            return []

        pk_col = self._get_pk_column()
        stmt = self._select().where(pk_col.in_(set(pks))).order_by(pk_col)
        return await self._fetch(stmt, "find_by_ids", requested=len(pks))

    async def find_by_bpn(self, bpn: str) -> ModelType | None:
        """Get a record by its business partner number."""
        stmt = self._select().where(self.model.bpn == bpn)
        records = await self._fetch(stmt, "find_by_bpn")
        return records[0] if records else None

    async def count(self, criteria: ColumnElement[bool] | None = None) -> int:
        """Count records, optionally restricted by ``criteria``.

        Returns:
            Number of matching records
        """
        stmt = select(func.count()).select_from(self.model)
        if criteria is not None:
            stmt = stmt.where(criteria)
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def find_page(
        self,
        criteria: ColumnElement[bool] | None,
        *,
        page: int,
        size: int,
        order_by: Sequence[Any] | None = None,
    ) -> PageResult[ModelType]:
        """Find one page of records matching ``criteria``.

        Each record appears at most once: relation filters are expected to
        be expressed as EXISTS subqueries rather than joins.

        Args:
            criteria: Boolean clause over the model, or None for all records
            page: Zero-based page index
            size: Page size
            order_by: Ordering (default: primary key)

        Returns:
            The requested page and the total number of matches
        """
        total = await self.count(criteria)
        if total == 0 or page * size >= total:
            return PageResult(total_elements=total, page=page, size=size)

        stmt = self._select()
        if criteria is not None:
            stmt = stmt.where(criteria)
        stmt = stmt.order_by(*(order_by or [self._get_pk_column()]))
        stmt = stmt.limit(size).offset(page * size)

        content = await self._fetch(stmt, "find_page", page=page, size=size)
        return PageResult(total_elements=total, page=page, size=size, content=content)

    async def find_all_page(self, *, page: int, size: int) -> PageResult[ModelType]:
        """Find one page over all records, in primary key order."""
        return await self.find_page(None, page=page, size=size)

    def _select(self) -> Select[tuple[ModelType]]:
        return select(self.model).options(*self.load_options())

    async def _fetch(
        self, stmt: Select[tuple[ModelType]], query_type: str, **kwargs: Any
    ) -> list[ModelType]:
        started = time.perf_counter()
        result = await self.db.execute(stmt)
        records = list(result.scalars().unique().all())
        log_database_query(
            logger,
            query_type=query_type,
            table=self.model.__tablename__,
            duration_ms=(time.perf_counter() - started) * 1000,
            rows=len(records),
            **kwargs,
        )
        return records

    def _get_pk_column(self):
        """Get the primary key column for this model.

        Raises:
            ValueError: If no primary key found
        """
        mapper = self.model.__mapper__
        pk_cols = mapper.primary_key
        if not pk_cols:
            raise ValueError(f"No primary key found for {self.model.__name__}")
        return pk_cols[0]
