"""Pagination arithmetic shared by repositories and the result aggregator."""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def page_count(total_elements: int, size: int) -> int:
    """Number of pages needed for ``total_elements`` at ``size`` per page."""
    if size <= 0:
        return 0
    return (total_elements + size - 1) // size


def slice_page(items: Sequence[T], page: int, size: int) -> list[T]:
    """Return ``items[page*size : min((page+1)*size, len(items))]``.

    A page past the end yields an empty list.
    """
    start = page * size
    if start >= len(items):
        return []
    end = min(start + size, len(items))
    return list(items[start:end])
