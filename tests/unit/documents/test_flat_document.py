"""Unit tests for the flat text document and the shared transaction host."""

import pytest

from livefind.constants import HISTORY_ORIGIN, INPUT_ORIGIN, SELECTION_ORIGIN
from livefind.documents import FlatDocument, ReplaceTextStep, TextRun
from livefind.exceptions import MutationError, PositionError, ValidationError
from livefind.options import EditorOptions


@pytest.mark.unit
class TestFlatContent:
    """Test runs and reading helpers."""

    def test_single_run(self):
        assert list(FlatDocument("cat sat").text_runs()) == [TextRun(0, "cat sat")]

    def test_empty_buffer_has_no_runs(self):
        assert list(FlatDocument().text_runs()) == []

    def test_size_and_serialize(self):
        doc = FlatDocument("abc")
        assert doc.size == 3
        assert doc.serialize() == "abc"

    def test_text_between(self):
        assert FlatDocument("cat sat").text_between(4, 7) == "sat"

    def test_text_between_out_of_range(self):
        with pytest.raises(PositionError):
            FlatDocument("abc").text_between(2, 5)

    def test_line_column(self):
        doc = FlatDocument("ab\ncd")
        assert doc.line_column(0) == (1, 1)
        assert doc.line_column(4) == (2, 2)

    def test_rejects_non_string(self):
        with pytest.raises(ValidationError):
            FlatDocument(b"bytes")


@pytest.mark.unit
class TestFlatEdits:
    """Test transactional edits."""

    def test_replace_text(self):
        doc = FlatDocument("cat sat")
        change = doc.replace_text(0, 3, "dog")
        assert doc.text == "dog sat"
        assert change.before == "cat sat"
        assert change.after == "dog sat"
        assert change.origin == INPUT_ORIGIN
        assert change.doc_changed
        assert change.version == 1 == doc.version

    def test_insert_and_delete(self):
        doc = FlatDocument("ac")
        doc.insert_text(1, "b")
        assert doc.text == "abc"
        doc.delete(0, 1)
        assert doc.text == "bc"
        assert doc.version == 2

    def test_out_of_range_edit(self):
        doc = FlatDocument("abc")
        with pytest.raises(PositionError):
            doc.replace_text(2, 9, "x")
        assert doc.text == "abc"
        assert doc.version == 0

    def test_inverted_range(self):
        with pytest.raises(PositionError):
            FlatDocument("abc").delete(2, 1)

    def test_compound_transaction_mapping(self):
        doc = FlatDocument("cat sat on the cat mat")
        tr = doc.transaction().replace_text(15, 18, "dog").replace_text(0, 3, "dog")
        change = doc.dispatch(tr)
        assert doc.text == "dog sat on the dog mat"
        assert change.mapping.map(20) == 20

    def test_failed_step_leaves_transaction_unchanged(self):
        doc = FlatDocument("abc")
        tr = doc.transaction().insert_text(0, "x")
        with pytest.raises(PositionError):
            tr.insert_text(10, "y")
        assert tr.content == "xabc"
        assert len(tr.steps) == 1
        doc.dispatch(tr)
        assert doc.text == "xabc"

    def test_block_steps_rejected(self):
        with pytest.raises(MutationError):
            FlatDocument("abc").transaction().remove_block(0)

    def test_stale_transaction_rejected(self):
        doc = FlatDocument("abc")
        tr = doc.transaction().insert_text(0, "x")
        doc.insert_text(3, "!")
        with pytest.raises(MutationError):
            doc.dispatch(tr)

    def test_foreign_transaction_rejected(self):
        tr = FlatDocument("abc").transaction().insert_text(0, "x")
        with pytest.raises(MutationError):
            FlatDocument("abc").dispatch(tr)

    def test_inverse_step_recorded(self):
        doc = FlatDocument("cat")
        tr = doc.transaction().replace_text(0, 3, "dogs")
        assert tr.inverted == [ReplaceTextStep(0, 4, "cat")]

    def test_empty_edit_is_dropped(self):
        """Test that an edit with nothing to remove or insert changes nothing."""
        doc = FlatDocument("cat")
        tr = doc.transaction().insert_text(1, "").replace_text(2, 2, "")
        assert not tr.doc_changed
        assert tr.steps == []
        change = doc.dispatch(tr)
        assert not change.doc_changed
        assert doc.version == 0
        assert not doc.can_undo


@pytest.mark.unit
class TestSelection:
    """Test selection bookkeeping."""

    def test_set_selection_is_not_a_content_change(self):
        doc = FlatDocument("abcdef")
        changes = []
        doc.subscribe(changes.append)
        doc.set_selection(2, 4)
        assert doc.selection == (2, 4)
        assert doc.version == 0
        assert not changes[0].doc_changed
        assert changes[0].origin == SELECTION_ORIGIN
        assert changes[0].mapping.is_identity
        assert not doc.can_undo

    def test_collapsed_selection(self):
        doc = FlatDocument("abc")
        doc.set_selection(1)
        assert doc.selection == (1, 1)

    def test_selection_out_of_range(self):
        with pytest.raises(PositionError):
            FlatDocument("abc").set_selection(1, 7)

    def test_selection_follows_edits(self):
        doc = FlatDocument("abcdef")
        doc.set_selection(3, 5)
        doc.insert_text(0, "xy")
        assert doc.selection == (5, 7)

    def test_selection_collapses_when_deleted(self):
        doc = FlatDocument("abcdef")
        doc.set_selection(2, 4)
        doc.delete(1, 5)
        assert doc.selection == (1, 1)


@pytest.mark.unit
class TestHistory:
    """Test undo and redo."""

    def test_undo_redo(self):
        doc = FlatDocument("cat")
        doc.replace_text(0, 3, "dog")
        assert doc.undo()
        assert doc.text == "cat"
        assert doc.redo()
        assert doc.text == "dog"

    def test_undo_without_history(self):
        doc = FlatDocument("cat")
        assert not doc.undo()
        assert not doc.redo()

    def test_history_origin(self):
        doc = FlatDocument("cat")
        doc.insert_text(3, "s")
        changes = []
        doc.subscribe(changes.append)
        doc.undo()
        assert changes[0].origin == HISTORY_ORIGIN
        assert changes[0].doc_changed

    def test_new_edit_clears_redo(self):
        doc = FlatDocument("cat")
        doc.insert_text(3, "s")
        doc.undo()
        assert doc.can_redo
        doc.insert_text(0, "a ")
        assert not doc.can_redo

    def test_compound_transaction_undone_in_one_step(self):
        doc = FlatDocument("cat sat on the cat mat")
        doc.dispatch(doc.transaction().replace_text(15, 18, "dog").replace_text(0, 3, "dog"))
        doc.undo()
        assert doc.text == "cat sat on the cat mat"
        assert not doc.can_undo

    def test_history_limit(self):
        doc = FlatDocument("", EditorOptions(history_limit=2))
        for char in "abc":
            doc.insert_text(doc.size, char)
        assert doc.undo()
        assert doc.undo()
        assert not doc.undo()
        assert doc.text == "a"

    def test_transaction_without_history(self):
        doc = FlatDocument("cat")
        doc.dispatch(doc.transaction(add_to_history=False).insert_text(0, "a "))
        assert not doc.can_undo
        assert doc.version == 1


@pytest.mark.unit
class TestSubscriptions:
    """Test change listeners."""

    def test_subscribe_and_unsubscribe(self):
        doc = FlatDocument("abc")
        changes = []
        unsubscribe = doc.subscribe(changes.append)
        assert doc.listener_count == 1
        doc.insert_text(0, "x")
        unsubscribe()
        unsubscribe()
        doc.insert_text(0, "y")
        assert len(changes) == 1
        assert doc.listener_count == 0

    def test_listener_may_unsubscribe_during_notification(self):
        doc = FlatDocument("abc")
        calls = []

        def once(change):
            calls.append(change)
            unsubscribe()

        unsubscribe = doc.subscribe(once)
        doc.insert_text(0, "x")
        doc.insert_text(0, "y")
        assert len(calls) == 1
