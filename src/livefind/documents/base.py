#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/documents/base.py
"""Editable document host shared by the tree and flat substrates.

A document holds an immutable content snapshot (a ``Document`` tree or a
string). All changes go through a ``Transaction``: steps are applied to a
working copy, each step contributes a ``StepMap`` to the transaction's
``Mapping``, and ``dispatch`` swaps the snapshot in one go before notifying
subscribers with a ``DocumentChange``.

Subscribers receive every dispatched transaction, including ones that only
move the selection (``doc_changed`` is False for those).

Examples
--------
    >>> doc = FlatDocument("cat sat")
    >>> change = doc.replace_text(0, 3, "dog")
    >>> doc.text, change.mapping.map(7)
    ('dog sat', 7)

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Iterator, NamedTuple, Optional

from livefind.constants import HISTORY_ORIGIN, INPUT_ORIGIN, SELECTION_ORIGIN
from livefind.documents.mapping import Mapping, StepMap
from livefind.exceptions import MutationError, PositionError
from livefind.options import EditorOptions

logger = logging.getLogger(__name__)


class TextRun(NamedTuple):
    """A maximal run of characters and the address of its first character."""

    base: int
    text: str


class Step(ABC):
    """One atomic change to a document's content."""

    @abstractmethod
    def apply(self, document: EditableDocument, content: Any) -> tuple[Any, StepMap]:
        """Apply the step to ``content`` and return the new content and its step map."""

    @abstractmethod
    def invert(self, document: EditableDocument, content_before: Any) -> Step:
        """Return the step that undoes this one, given the content it was applied to."""


@dataclass(frozen=True)
class ReplaceTextStep(Step):
    """Replace the characters in ``[start, end)`` with ``text``."""

    start: int
    end: int
    text: str

    def apply(self, document: EditableDocument, content: Any) -> tuple[Any, StepMap]:
        """Replace the range and report it as a single step map."""
        new_content = document._replace_text(content, self.start, self.end, self.text)
        return new_content, StepMap(self.start, self.end - self.start, len(self.text))

    def invert(self, document: EditableDocument, content_before: Any) -> Step:
        """Restore the replaced characters."""
        return document._invert_replace(content_before, self)


@dataclass(frozen=True)
class InsertBlockStep(Step):
    """Insert a top-level block before block ``index`` (tree documents only)."""

    index: int
    node: Any

    def apply(self, document: EditableDocument, content: Any) -> tuple[Any, StepMap]:
        """Insert the block; its whole size counts as new content."""
        new_content, pos, size = document._insert_block(content, self.index, self.node)
        return new_content, StepMap(pos, 0, size)

    def invert(self, document: EditableDocument, content_before: Any) -> Step:
        """Remove the inserted block again."""
        return RemoveBlockStep(self.index)


@dataclass(frozen=True)
class RemoveBlockStep(Step):
    """Remove top-level block ``index`` (tree documents only)."""

    index: int

    def apply(self, document: EditableDocument, content: Any) -> tuple[Any, StepMap]:
        """Remove the block; its whole range counts as deleted."""
        new_content, pos, size = document._remove_block(content, self.index)
        return new_content, StepMap(pos, size, 0)

    def invert(self, document: EditableDocument, content_before: Any) -> Step:
        """Re-insert the removed block."""
        return InsertBlockStep(self.index, document._block_at(content_before, self.index))


class Transaction:
    """A batch of steps applied atomically by ``EditableDocument.dispatch``.

    Steps are applied to the transaction's working content as they are added,
    so later steps address the content produced by earlier ones. A step that
    fails leaves the transaction as it was before that step.

    Parameters
    ----------
    document : EditableDocument
        Document the transaction was created from
    origin : str
        Tag identifying who produced the change (``"input"``, ``"search"``,
        ``"history"``, ``"selection"``)
    add_to_history : bool, default True
        Record the transaction for undo

    """

    def __init__(self, document: EditableDocument, origin: str = INPUT_ORIGIN, add_to_history: bool = True) -> None:
        """Start a transaction on the document's current snapshot."""
        self.document = document
        self.origin = origin
        self.add_to_history = add_to_history
        self.before = document.content
        self.content = self.before
        self.steps: list[Step] = []
        self.inverted: list[Step] = []
        self.mapping = Mapping()
        self.selection: Optional[tuple[int, int]] = None

    @property
    def doc_changed(self) -> bool:
        """Return True if the transaction contains any step."""
        return bool(self.steps)

    def step(self, step: Step) -> Transaction:
        """Apply ``step`` to the working content.

        A text step that neither removes nor inserts characters is checked
        against the content and then dropped.
        """
        content_before = self.content
        if isinstance(step, ReplaceTextStep) and step.start == step.end and not step.text:
            self.document._check_range(content_before, step.start, step.end)
            return self
        try:
            new_content, step_map = step.apply(self.document, content_before)
        except (PositionError, MutationError):
            raise
        except (ValueError, IndexError, TypeError) as e:
            raise MutationError(f"Could not apply {step!r}: {e}", step=step, original_error=e) from e

        self.inverted.append(step.invert(self.document, content_before))
        self.content = new_content
        self.steps.append(step)
        self.mapping.append(step_map)
        return self

    def replace_text(self, start: int, end: int, text: str) -> Transaction:
        """Replace ``[start, end)`` with ``text``."""
        return self.step(ReplaceTextStep(start, end, text))

    def insert_text(self, pos: int, text: str) -> Transaction:
        """Insert ``text`` at ``pos``."""
        return self.step(ReplaceTextStep(pos, pos, text))

    def delete(self, start: int, end: int) -> Transaction:
        """Delete the characters in ``[start, end)``."""
        return self.step(ReplaceTextStep(start, end, ""))

    def insert_block(self, index: int, node: Any) -> Transaction:
        """Insert a top-level block before block ``index``."""
        return self.step(InsertBlockStep(index, node))

    def remove_block(self, index: int) -> Transaction:
        """Remove top-level block ``index``."""
        return self.step(RemoveBlockStep(index))

    def set_selection(self, start: int, end: int) -> Transaction:
        """Set the selection the document will have after dispatch."""
        self.document._check_range(self.content, start, end)
        self.selection = (start, end)
        return self

    def __repr__(self) -> str:
        return f"Transaction(origin={self.origin!r}, steps={len(self.steps)})"


@dataclass(frozen=True)
class DocumentChange:
    """Notification delivered to subscribers after a transaction was dispatched.

    Parameters
    ----------
    document : EditableDocument
        The document that changed
    before, after : Any
        Content snapshots on either side of the transaction
    mapping : Mapping
        Position mapping from ``before`` to ``after`` coordinates
    origin : str
        The transaction's origin tag
    doc_changed : bool
        False for transactions that only moved the selection
    version : int
        Document version after the transaction

    """

    document: EditableDocument = field(repr=False)
    before: Any = field(repr=False)
    after: Any = field(repr=False)
    mapping: Mapping
    origin: str
    doc_changed: bool
    version: int


ChangeListener = Callable[[DocumentChange], None]


class EditableDocument(ABC):
    """Base class for documents that live search can run over.

    Subclasses supply the substrate-specific pieces: how text runs are
    enumerated, how a character range is replaced in a content snapshot and
    how the content is serialized for publishing.

    Parameters
    ----------
    content : Any
        Initial content snapshot
    options : EditorOptions, optional
        Host settings (history size, publishing window)

    """

    substrate: ClassVar[str] = ""
    supports_remap: ClassVar[bool] = False

    def __init__(self, content: Any, options: Optional[EditorOptions] = None) -> None:
        """Initialise the document with its first snapshot."""
        self.options = options or EditorOptions()
        self._content = content
        self.version = 0
        self.selection: tuple[int, int] = (0, 0)
        self._listeners: list[ChangeListener] = []
        self._undo_stack: deque[list[Step]] = deque(maxlen=self.options.history_limit)
        self._redo_stack: list[list[Step]] = []

    @property
    def content(self) -> Any:
        """Return the current immutable content snapshot."""
        return self._content

    @property
    def size(self) -> int:
        """Return the size of the current address space."""
        return self._content_size(self._content)

    # Substrate hooks -------------------------------------------------------

    @abstractmethod
    def text_runs(self) -> Iterator[TextRun]:
        """Yield the non-empty text runs of the current content in document order."""

    @abstractmethod
    def serialize(self) -> str:
        """Return the current content in its persistent form."""

    @abstractmethod
    def text_between(self, start: int, end: int) -> str:
        """Return the characters addressed by ``[start, end)``."""

    @abstractmethod
    def _content_size(self, content: Any) -> int:
        """Return the size of ``content``'s address space."""

    @abstractmethod
    def _replace_text(self, content: Any, start: int, end: int, text: str) -> Any:
        """Return ``content`` with ``[start, end)`` replaced by ``text``."""

    @abstractmethod
    def _slice_text(self, content: Any, start: int, end: int) -> str:
        """Return the characters of ``content`` in ``[start, end)``."""

    def _check_range(self, content: Any, start: int, end: int) -> None:
        size = self._content_size(content)
        if not 0 <= start <= end <= size:
            raise PositionError(f"Range [{start}, {end}) is outside the document (size {size})", start=start, end=end)

    def _insert_block(self, content: Any, index: int, node: Any) -> tuple[Any, int, int]:
        raise MutationError(f"{type(self).__name__} has no block structure", step=InsertBlockStep(index, node))

    def _remove_block(self, content: Any, index: int) -> tuple[Any, int, int]:
        raise MutationError(f"{type(self).__name__} has no block structure", step=RemoveBlockStep(index))

    def _block_at(self, content: Any, index: int) -> Any:
        raise MutationError(f"{type(self).__name__} has no block structure")

    def _invert_replace(self, content: Any, step: ReplaceTextStep) -> Step:
        removed = self._slice_text(content, step.start, step.end)
        return ReplaceTextStep(step.start, step.start + len(step.text), removed)

    # Transactions ----------------------------------------------------------

    def transaction(self, origin: str = INPUT_ORIGIN, add_to_history: bool = True) -> Transaction:
        """Start a transaction on the current snapshot."""
        return Transaction(self, origin=origin, add_to_history=add_to_history)

    def dispatch(self, tr: Transaction) -> DocumentChange:
        """Commit ``tr`` and notify subscribers.

        Raises
        ------
        MutationError
            If the transaction belongs to another document or was built
            against a snapshot that is no longer current

        """
        if tr.document is not self:
            raise MutationError("Transaction belongs to a different document")
        if tr.before is not self._content:
            raise MutationError("Transaction was built against an outdated snapshot")

        before = self._content
        self._content = tr.content

        if tr.doc_changed:
            self.version += 1
            if tr.add_to_history:
                self._undo_stack.append(list(reversed(tr.inverted)))
                self._redo_stack.clear()

        if tr.selection is not None:
            self.selection = tr.selection
        elif tr.doc_changed:
            start, end = self.selection
            new_start = tr.mapping.map(start, assoc=-1)
            self.selection = (new_start, max(new_start, tr.mapping.map(end, assoc=1)))

        change = DocumentChange(
            document=self,
            before=before,
            after=self._content,
            mapping=tr.mapping,
            origin=tr.origin,
            doc_changed=tr.doc_changed,
            version=self.version,
        )
        logger.debug("Dispatched %r on %s document (version %d)", tr, self.substrate, self.version)

        for listener in list(self._listeners):
            listener(change)
        return change

    def replace_text(self, start: int, end: int, text: str, origin: str = INPUT_ORIGIN) -> DocumentChange:
        """Replace ``[start, end)`` with ``text`` in a transaction of its own."""
        return self.dispatch(self.transaction(origin).replace_text(start, end, text))

    def insert_text(self, pos: int, text: str, origin: str = INPUT_ORIGIN) -> DocumentChange:
        """Insert ``text`` at ``pos`` in a transaction of its own."""
        return self.dispatch(self.transaction(origin).insert_text(pos, text))

    def delete(self, start: int, end: int, origin: str = INPUT_ORIGIN) -> DocumentChange:
        """Delete ``[start, end)`` in a transaction of its own."""
        return self.dispatch(self.transaction(origin).delete(start, end))

    def set_selection(self, start: int, end: Optional[int] = None) -> DocumentChange:
        """Move the selection without changing content."""
        tr = self.transaction(SELECTION_ORIGIN, add_to_history=False)
        tr.set_selection(start, start if end is None else end)
        return self.dispatch(tr)

    # History ---------------------------------------------------------------

    @property
    def can_undo(self) -> bool:
        """Return True if there is a transaction to undo."""
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        """Return True if there is an undone transaction to redo."""
        return bool(self._redo_stack)

    def undo(self) -> bool:
        """Revert the most recent recorded transaction. Returns False if there is none."""
        if not self._undo_stack:
            return False
        tr = self._replay(self._undo_stack.pop())
        self._redo_stack.append(list(reversed(tr.inverted)))
        self.dispatch(tr)
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone transaction. Returns False if there is none."""
        if not self._redo_stack:
            return False
        tr = self._replay(self._redo_stack.pop())
        self._undo_stack.append(list(reversed(tr.inverted)))
        self.dispatch(tr)
        return True

    def _replay(self, steps: list[Step]) -> Transaction:
        tr = self.transaction(HISTORY_ORIGIN, add_to_history=False)
        for step in steps:
            tr.step(step)
        return tr

    # Subscribers -----------------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register ``listener`` for every dispatched transaction.

        Returns
        -------
        callable
            Function that removes the listener again; calling it twice is harmless

        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        """Return the number of registered listeners."""
        return len(self._listeners)
