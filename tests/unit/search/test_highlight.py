"""Unit tests for decoration derivation."""

import pytest
from utils import spans

from livefind.documents import TextRun
from livefind.search import MatchSpan, SearchQuery, decorate

RUNS = [TextRun(0, "cat sat on the cat mat")]


@pytest.mark.unit
class TestDecorate:
    """Test building decoration sets."""

    def test_one_decoration_per_match(self):
        decorations = decorate(RUNS, SearchQuery("cat"), 0)
        assert [d.span for d in decorations] == [MatchSpan(0, 3), MatchSpan(15, 18)]
        assert [d.style for d in decorations] == ["current", "normal"]

    def test_current_follows_cursor(self):
        decorations = decorate(RUNS, SearchQuery("cat"), 1)
        assert decorations.current.span == MatchSpan(15, 18)
        assert decorations.current.css_class == "search-result-current"
        assert decorations.items[0].css_class == "search-result"

    def test_no_current_without_cursor(self):
        assert decorate(RUNS, SearchQuery("cat"), -1).current is None

    def test_empty_query(self):
        assert decorate(RUNS, SearchQuery(""), 0) == decorate([], SearchQuery("dog"), -1)
        assert not decorate(RUNS, SearchQuery(""), 0)

    def test_idempotent(self):
        """Test that equal inputs give equal sets."""
        assert decorate(RUNS, SearchQuery("cat"), 1) == decorate(RUNS, SearchQuery("cat"), 1)
        assert hash(decorate(RUNS, SearchQuery("cat"), 1)) == hash(decorate(RUNS, SearchQuery("cat"), 1))

    def test_precomputed_matches(self):
        decorations = decorate([], SearchQuery("cat"), 0, matches=spans((4, 7)))
        assert [d.span for d in decorations] == [MatchSpan(4, 7)]

    def test_custom_classes(self):
        decorations = decorate(RUNS, SearchQuery("cat"), 0, match_class="hit", current_match_class="hit-now")
        assert [d.css_class for d in decorations] == ["hit-now", "hit"]
