"""Base models for SQLAlchemy."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class TimestampMixin:
    """Mixin for created_at/updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class ConfidenceCriteriaMixin:
    """Mixin for confidence criteria describing the provenance of a record.

    Read-only to the search engine; maintained by the write path.
    """

    shared_by_owner: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    checked_by_external_data_source: Mapped[bool | None] = mapped_column(
        Boolean, nullable=True
    )
    number_of_sharing_members: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_confidence_check_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    next_confidence_check_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    confidence_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
