"""Rank scores for the single-kind free-text searches.

Results arrive ordered by increasing length of the matched field, so the
closest matches come first. The score of an element is its distance from
the end of the full result set, which makes scores strictly decreasing
across consecutive pages of the same query.
"""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def relevance_score(total_elements: int, page: int, size: int, index: int) -> int:
    """Score of the element at page-relative ``index`` on ``page``.

    Example:
        >>> [relevance_score(5, 1, 2, i) for i in range(2)]
        [3, 2]
    """
    return total_elements - page * size - index


def score_page(
    content: Sequence[T],
    *,
    total_elements: int,
    page: int,
    size: int,
    ranked: bool = True,
) -> list[tuple[T, int]]:
    """Pair every element of a page with its score.

    Args:
        content: Page content in query order
        total_elements: Total matches across all pages
        page: Zero-based page index
        size: Requested page size
        ranked: False when no free-text condition was given; every element
            then scores 0

    Returns:
        ``(element, score)`` pairs in page order
    """
    if not ranked:
        return [(element, 0) for element in content]
    return [
        (element, relevance_score(total_elements, page, size, index))
        for index, element in enumerate(content)
    ]
