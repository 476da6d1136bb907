"""Database models for partnerpool."""

from .base import Base, ConfidenceCriteriaMixin, TimestampMixin
from .partner import (
    AddressType,
    IdentifierType,
    LegalEntity,
    LegalEntityIdentifier,
    LegalForm,
    LogisticAddress,
    Site,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "ConfidenceCriteriaMixin",
    "AddressType",
    "IdentifierType",
    "LegalEntity",
    "LegalEntityIdentifier",
    "LegalForm",
    "LogisticAddress",
    "Site",
]
