"""Unit tests for the cyclic match cursor."""

import pytest
from utils import spans

from livefind.search import MatchIndex, MatchSpan


@pytest.mark.unit
class TestMatchIndex:
    """Test cursor bookkeeping and wrap-around navigation."""

    def test_empty(self):
        index = MatchIndex()
        assert index.cursor == -1
        assert index.current is None
        assert not index
        assert index.next() is None
        assert index.prev() is None
        assert index.cursor == -1

    def test_reset_places_cursor_at_first(self):
        index = MatchIndex()
        index.reset(spans((0, 3), (15, 18)))
        assert index.cursor == 0
        assert index.current == MatchSpan(0, 3)
        assert len(index) == 2

    def test_reset_clamps_cursor(self):
        index = MatchIndex()
        index.reset(spans((0, 3), (15, 18)), cursor=5)
        assert index.cursor == 1
        index.reset(spans((0, 3)), cursor=-4)
        assert index.cursor == 0

    def test_reset_to_empty(self):
        index = MatchIndex()
        index.reset(spans((0, 3)))
        index.reset(())
        assert index.cursor == -1

    def test_next_wraps(self):
        index = MatchIndex()
        index.reset(spans((0, 3), (15, 18)))
        assert index.next() == MatchSpan(15, 18)
        assert index.next() == MatchSpan(0, 3)
        assert index.cursor == 0

    def test_prev_wraps(self):
        index = MatchIndex()
        index.reset(spans((0, 3), (15, 18), (20, 23)))
        assert index.prev() == MatchSpan(20, 23)
        assert index.cursor == 2

    def test_single_result_stays_put(self):
        index = MatchIndex()
        index.reset(spans((4, 6)))
        assert index.next() == MatchSpan(4, 6)
        assert index.prev() == MatchSpan(4, 6)
        assert index.cursor == 0

    def test_clamp_to(self):
        index = MatchIndex()
        index.reset(spans((0, 3), (15, 18)))
        index.clamp_to(1)
        assert index.cursor == 1
        index.reset(spans((0, 3)))
        index.clamp_to(1)
        assert index.cursor == 0

    def test_clear(self):
        index = MatchIndex()
        index.reset(spans((0, 3)))
        index.clear()
        assert index.results == ()
        assert index.cursor == -1

    def test_index_of(self):
        index = MatchIndex()
        index.reset(spans((0, 3), (15, 18)))
        assert index.index_of(MatchSpan(15, 18)) == 1
        assert index.index_of(MatchSpan(1, 2)) == -1
