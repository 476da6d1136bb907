"""Shared helpers used by both the persistence models and the search engine."""

from partnerpool.common.bpn import BpnKind, bpn_kind, is_valid_bpn
from partnerpool.common.normalization import normalize, normalize_or_none, umlaut_variants
from partnerpool.common.pagination import page_count, slice_page

__all__ = [
    "BpnKind",
    "bpn_kind",
    "is_valid_bpn",
    "normalize",
    "normalize_or_none",
    "umlaut_variants",
    "page_count",
    "slice_page",
]
