"""Unit tests for single and bulk match replacement."""

import pytest
from utils import mixed_document

from livefind.constants import SEARCH_ORIGIN
from livefind.documents import FlatDocument, TreeDocument
from livefind.search import MatchIndex, SearchQuery, find_matches, replace_all, replace_current
from livefind.search.replace import replace_spans


def _index(document, term):
    index = MatchIndex()
    index.reset(find_matches(document.text_runs(), SearchQuery(term)))
    return index


@pytest.mark.unit
class TestReplaceCurrent:
    """Test replacing the match at the cursor."""

    def test_replaces_only_current(self):
        doc = FlatDocument("cat sat on the cat mat")
        index = _index(doc, "cat")
        index.next()
        assert replace_current(doc, index, "dog")
        assert doc.text == "cat sat on the dog mat"

    def test_no_current_match(self):
        doc = FlatDocument("cat")
        assert not replace_current(doc, MatchIndex(), "dog")
        assert doc.version == 0

    def test_origin_is_search(self):
        doc = FlatDocument("cat")
        changes = []
        doc.subscribe(changes.append)
        replace_current(doc, _index(doc, "cat"), "dog")
        assert changes[0].origin == SEARCH_ORIGIN


@pytest.mark.unit
class TestReplaceAll:
    """Test bulk replacement."""

    def test_flat(self):
        doc = FlatDocument("cat sat on the cat mat")
        assert replace_all(doc, _index(doc, "cat"), "dog") == 2
        assert doc.text == "dog sat on the dog mat"

    def test_longer_replacement(self):
        """Test that offsets of earlier matches stay valid."""
        doc = FlatDocument("cat sat on the cat mat")
        replace_all(doc, _index(doc, "cat"), "kitten")
        assert doc.text == "kitten sat on the kitten mat"

    def test_replacement_containing_term(self):
        doc = FlatDocument("cat cat")
        replace_all(doc, _index(doc, "cat"), "cats")
        assert doc.text == "cats cats"

    def test_no_matches(self):
        doc = FlatDocument("cat")
        assert replace_all(doc, MatchIndex(), "dog") == 0
        assert doc.version == 0

    def test_single_undo_step(self):
        doc = FlatDocument("cat sat on the cat mat")
        replace_all(doc, _index(doc, "cat"), "dog")
        assert doc.version == 1
        doc.undo()
        assert doc.text == "cat sat on the cat mat"
        assert not doc.can_undo

    def test_tree_document(self):
        doc = TreeDocument(mixed_document())
        assert replace_all(doc, _index(doc, "cat"), "dog") == 3
        assert [run.text for run in doc.text_runs()] == ["dogs", "the ", "dog", " sat", "dog = 1"]

    def test_tree_delete_all_and_undo(self):
        """Test that removed leaves come back on undo."""
        doc = TreeDocument(mixed_document())
        replace_all(doc, _index(doc, "cat"), "")
        assert [run.text for run in doc.text_runs()] == ["s", "the ", " sat", " = 1"]
        doc.undo()
        assert doc.tree == mixed_document()

    def test_replace_spans_order_independent(self):
        doc = FlatDocument("ab ab ab")
        index = _index(doc, "ab")
        replace_spans(doc, list(index.results)[::-1], "xyz")
        assert doc.text == "xyz xyz xyz"
