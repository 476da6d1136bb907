"""Unit tests for relevance scoring."""

from partnerpool.search.scoring import relevance_score, score_page


class TestRelevanceScore:
    """Tests for relevance_score()."""

    def test_first_element_scores_total(self):
        assert relevance_score(total_elements=5, page=0, size=2, index=0) == 5

    def test_accounts_for_page_offset(self):
        assert relevance_score(total_elements=5, page=2, size=2, index=0) == 1


class TestScorePage:
    """Tests for score_page()."""

    def test_pairs_elements_with_scores(self):
        scored = score_page(["a", "b"], total_elements=5, page=0, size=2)
        assert scored == [("a", 5), ("b", 4)]

    def test_strictly_decreasing_across_pages(self):
        """Scores of consecutive pages continue where the previous page stopped."""
        total = 5
        size = 2
        elements = ["a", "b", "c", "d", "e"]

        scores = []
        for page in range(3):
            content = elements[page * size : (page + 1) * size]
            scores.extend(
                score
                for _, score in score_page(content, total_elements=total, page=page, size=size)
            )

        assert scores == [5, 4, 3, 2, 1]
        assert all(a > b for a, b in zip(scores, scores[1:], strict=False))

    def test_unranked_scores_zero(self):
        scored = score_page(["a", "b"], total_elements=2, page=0, size=2, ranked=False)
        assert scored == [("a", 0), ("b", 0)]

    def test_empty_page(self):
        assert score_page([], total_elements=0, page=0, size=10) == []
