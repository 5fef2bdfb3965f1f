"""Unit tests for keeping results in sync with document changes."""

import pytest
from utils import as_pairs, tree_doc

from livefind.ast import Paragraph, Text
from livefind.documents import FlatDocument, Mapping, StepMap
from livefind.search import MatchIndex, SearchQuery, find_matches, follow_cursor, reconcile, remap_matches
from livefind.search.types import MatchSpan

CAT = SearchQuery("cat")


def _index(document, query=CAT, cursor=0):
    index = MatchIndex()
    index.reset(find_matches(document.text_runs(), query), cursor)
    return index


def _three_paragraphs():
    # leaves at 1, 10 and 19
    return tree_doc("cat one", "cat two", "cat three")


@pytest.mark.unit
class TestRescan:
    """Test the default strategy."""

    def test_shifted_matches(self):
        doc = FlatDocument("cat sat")
        index = _index(doc)
        change = doc.insert_text(0, "a ")
        results, cursor = reconcile(doc, change, CAT, index)
        assert as_pairs(results) == [[2, 5]]
        assert cursor == 0

    def test_new_match_from_typing(self):
        doc = FlatDocument("ca sat")
        index = _index(doc)
        change = doc.insert_text(2, "t")
        results, cursor = reconcile(doc, change, CAT, index)
        assert as_pairs(results) == [[0, 3]]
        assert cursor == 0

    def test_empty_query(self):
        doc = FlatDocument("cat")
        change = doc.insert_text(0, "x")
        assert reconcile(doc, change, SearchQuery(""), MatchIndex()) == ((), -1)

    def test_selection_change_keeps_results(self):
        doc = FlatDocument("cat cat")
        index = _index(doc, cursor=1)
        change = doc.set_selection(2)
        assert reconcile(doc, change, CAT, index) == (index.results, 1)

    def test_index_left_untouched(self):
        doc = FlatDocument("cat")
        index = _index(doc)
        change = doc.delete(0, 3)
        assert reconcile(doc, change, CAT, index) == ((), -1)
        assert as_pairs(index.results) == [[0, 3]]


@pytest.mark.unit
class TestFollowCursor:
    """Test where the cursor goes after a change."""

    def test_follows_surviving_current_match(self):
        doc = FlatDocument("cat cat cat")
        index = _index(doc, cursor=1)
        change = doc.insert_text(0, "cat ")
        results, cursor = reconcile(doc, change, CAT, index)
        assert len(results) == 4
        assert cursor == 2
        assert results[cursor] == MatchSpan(8, 11)

    def test_clamped_when_current_destroyed(self):
        doc = FlatDocument("cat cat cat")
        index = _index(doc, cursor=2)
        change = doc.delete(8, 11)
        results, cursor = reconcile(doc, change, CAT, index)
        assert len(results) == 2
        assert cursor == 1

    def test_kept_index_when_current_edited(self):
        doc = FlatDocument("cat cat cat")
        index = _index(doc, cursor=1)
        change = doc.replace_text(5, 6, "u")
        results, cursor = reconcile(doc, change, CAT, index)
        assert as_pairs(results) == [[0, 3], [8, 11]]
        assert cursor == 1

    def test_no_results(self):
        assert follow_cursor((), MatchSpan(0, 3), 0, Mapping()) == -1

    def test_without_previous(self):
        assert follow_cursor((MatchSpan(0, 3),), None, -1, Mapping()) == 0


@pytest.mark.unit
class TestRemap:
    """Test incremental reconciliation on tree documents."""

    def _assert_matches_rescan(self, doc, change, index):
        results, cursor = reconcile(doc, change, CAT, index, mode="remap")
        assert results == find_matches(doc.text_runs(), CAT)
        return results, cursor

    def test_edit_inside_one_leaf(self):
        doc = _three_paragraphs()
        index = _index(doc)
        change = doc.insert_text(10, "cat ")
        results, _ = self._assert_matches_rescan(doc, change, index)
        assert as_pairs(results) == [[1, 4], [10, 13], [14, 17], [23, 26]]

    def test_edit_destroying_match(self):
        doc = _three_paragraphs()
        index = _index(doc, cursor=1)
        change = doc.replace_text(11, 12, "u")
        results, cursor = self._assert_matches_rescan(doc, change, index)
        assert as_pairs(results) == [[1, 4], [19, 22]]
        assert cursor == 1

    def test_untouched_leaves_keep_their_matches(self):
        doc = _three_paragraphs()
        index = _index(doc, cursor=2)
        change = doc.replace_text(5, 8, "uno")
        results, cursor = self._assert_matches_rescan(doc, change, index)
        assert as_pairs(results) == [[1, 4], [10, 13], [19, 22]]
        assert cursor == 2

    def test_block_inserted(self):
        doc = _three_paragraphs()
        index = _index(doc)
        change = doc.dispatch(doc.transaction().insert_block(0, Paragraph(content=[Text(content="cat zero")])))
        results, cursor = self._assert_matches_rescan(doc, change, index)
        assert len(results) == 4
        assert results[cursor] == MatchSpan(11, 14)

    def test_block_removed(self):
        doc = _three_paragraphs()
        index = _index(doc)
        change = doc.dispatch(doc.transaction().remove_block(1))
        results, _ = self._assert_matches_rescan(doc, change, index)
        assert as_pairs(results) == [[1, 4], [10, 13]]

    def test_undo_change(self):
        doc = _three_paragraphs()
        doc.insert_text(10, "cat ")
        index = _index(doc)
        changes = []
        doc.subscribe(changes.append)
        doc.undo()
        results, _ = self._assert_matches_rescan(doc, changes[-1], index)
        assert as_pairs(results) == [[1, 4], [10, 13], [19, 22]]

    def test_flat_documents_fall_back_to_rescan(self, caplog):
        doc = FlatDocument("cat sat")
        index = _index(doc)
        change = doc.insert_text(0, "cat ")
        with caplog.at_level("DEBUG", logger="livefind.search.reconcile"):
            results, _ = reconcile(doc, change, CAT, index, mode="remap")
        assert as_pairs(results) == [[0, 3], [4, 7]]
        assert "do not support remapping" in caplog.text

    def test_remap_matches_directly(self):
        doc = _three_paragraphs()
        spans = find_matches(doc.text_runs(), CAT)
        change = doc.insert_text(1, "x")
        assert remap_matches(doc, change.mapping, CAT, spans) == find_matches(doc.text_runs(), CAT)

    def test_identity_mapping_keeps_spans(self):
        doc = _three_paragraphs()
        spans = find_matches(doc.text_runs(), CAT)
        assert remap_matches(doc, Mapping([StepMap(0, 0, 0)]), CAT, spans) == spans
