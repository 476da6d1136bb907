"""Database repositories for clean data access."""

from .base import BaseRepository, PageResult
from .partner import AddressRepository, LegalEntityRepository, SiteRepository

__all__ = [
    "BaseRepository",
    "PageResult",
    "AddressRepository",
    "LegalEntityRepository",
    "SiteRepository",
]
