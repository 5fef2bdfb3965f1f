#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/documents/tree.py
"""Structured (tree) document substrate.

Content is an immutable ``Document`` AST. A text edit copies only the nodes
on the path from the root to the edited leaf, so every earlier snapshot stays
valid and untouched subtrees are shared between snapshots.

Text edits must stay inside a single text leaf. Two exceptions keep typing
natural:

    - inserting at the content position of an empty heading, paragraph or
      table cell creates the first ``Text`` leaf there
    - deleting every character of a ``Text`` or ``Code`` leaf removes the
      leaf (a ``CodeBlock`` keeps its empty run)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterator, Optional

from livefind.ast.nodes import Document, Node, Text
from livefind.ast.positions import (
    Path,
    TextLeaf,
    block_position,
    check_range,
    content_size,
    empty_container_at,
    iter_text_leaves,
    leaf_at,
    node_size,
    text_between,
)
from livefind.ast.serialization import ast_to_json, json_to_ast
from livefind.ast.utils import insert_at_path, node_at_path, replace_at_path
from livefind.ast.visitors import ValidationVisitor
from livefind.documents.base import EditableDocument, ReplaceTextStep, Step, TextRun
from livefind.documents.mapping import StepMap
from livefind.exceptions import MutationError, PositionError, ValidationError
from livefind.options import EditorOptions

logger = logging.getLogger(__name__)


def validate_tree(node: Node) -> None:
    """Raise ``ValidationError`` if ``node`` breaks the AST containment rules."""
    try:
        node.accept(ValidationVisitor(strict=True))
    except ValueError as e:
        raise ValidationError(f"Invalid document tree: {e}", original_error=e) from e


@dataclass(frozen=True)
class InsertLeafStep(Step):
    """Put a text leaf back at ``path``; its first character lands at ``pos``.

    Produced when undoing a deletion that emptied (and therefore removed) a
    text leaf, so the restored characters keep their own node and marks.
    """

    path: Path
    pos: int
    node: Any

    def apply(self, document: Any, content: Document) -> tuple[Document, StepMap]:
        """Insert the leaf at its old place in the tree."""
        new_content = insert_at_path(content, self.path, self.node)
        return new_content, StepMap(self.pos, 0, len(self.node.content))  # type: ignore[return-value]

    def invert(self, document: Any, content_before: Document) -> Step:
        """Delete the leaf's characters, which removes it again."""
        return ReplaceTextStep(self.pos, self.pos + len(self.node.content), "")


@dataclass(frozen=True)
class LeafTextStep(Step):
    """Replace ``[start, end)`` inside the text leaf at ``path``.

    Undo uses it to put characters back into the leaf they were taken from.
    A position-addressed insertion on the boundary between two leaves would
    land in the left one and pick up its marks.
    """

    path: Path
    pos: int
    start: int
    end: int
    text: str

    def _leaf(self, content: Document) -> TextLeaf:
        leaf = TextLeaf(self.pos, node_at_path(content, self.path), self.path)
        if not isinstance(getattr(leaf.node, "content", None), str) or not leaf.contains(self.start, self.end):
            raise MutationError(f"No text leaf at {self.path} holds [{self.start}, {self.end})", step=self)
        return leaf

    def apply(self, document: Any, content: Document) -> tuple[Document, StepMap]:
        """Edit the addressed leaf."""
        new_content = document._edit_leaf(content, self._leaf(content), self.start, self.end, self.text)
        return new_content, StepMap(self.start, self.end - self.start, len(self.text))

    def invert(self, document: Any, content_before: Document) -> Step:
        """Restore the leaf's previous characters."""
        return document._invert_leaf_edit(self._leaf(content_before), self.start, self.end, self.text)


class TreeDocument(EditableDocument):
    """Editable document over a ``Document`` tree.

    Parameters
    ----------
    document : Document, optional
        Initial tree. Defaults to an empty document.
    options : EditorOptions, optional
        Host settings

    Raises
    ------
    ValidationError
        If the initial tree breaks the containment rules

    Examples
    --------
        >>> doc = TreeDocument(Document(children=[Paragraph(content=[Text("cat sat")])]))
        >>> list(doc.text_runs())
        [TextRun(base=1, text='cat sat')]

    """

    substrate = "tree"
    supports_remap = True

    def __init__(self, document: Optional[Document] = None, options: Optional[EditorOptions] = None) -> None:
        """Validate and adopt the initial tree."""
        document = document if document is not None else Document()
        if not isinstance(document, Document):
            raise ValidationError(
                f"TreeDocument needs a Document root, got {type(document).__name__}",
                parameter_name="document",
                parameter_value=document,
            )
        validate_tree(document)
        super().__init__(document, options)

    @classmethod
    def from_json(cls, json_str: str, options: Optional[EditorOptions] = None) -> TreeDocument:
        """Build a document from its ``ast-json`` serialization."""
        return cls(json_to_ast(json_str), options)

    @property
    def tree(self) -> Document:
        """Return the current ``Document`` snapshot."""
        return self._content  # type: ignore[no-any-return]

    def text_runs(self) -> Iterator[TextRun]:
        """Yield one run per non-empty text leaf."""
        for leaf in iter_text_leaves(self._content):
            yield TextRun(leaf.pos, leaf.text)

    def serialize(self) -> str:
        """Return the tree as ``ast-json``."""
        return ast_to_json(self._content, indent=2)

    def text_between(self, start: int, end: int) -> str:
        """Return the characters of every text leaf inside ``[start, end)``."""
        return text_between(self._content, start, end)

    def _content_size(self, content: Document) -> int:
        return content_size(content)

    def _check_range(self, content: Document, start: int, end: int) -> None:
        check_range(content, start, end)

    def _replace_text(self, content: Document, start: int, end: int, text: str) -> Document:
        check_range(content, start, end)
        if start == end and not text:
            return content

        try:
            leaf = leaf_at(content, start, end)
        except PositionError:
            container = empty_container_at(content, start) if start == end else None
            if container is None:
                raise
            logger.debug("Creating first text leaf in empty container at %s", container)
            return insert_at_path(content, container + (0,), Text(content=text))  # type: ignore[return-value]

        return self._edit_leaf(content, leaf, start, end, text)

    def _edit_leaf(self, content: Document, leaf: TextLeaf, start: int, end: int, text: str) -> Document:
        new_text = leaf.text[: start - leaf.pos] + text + leaf.text[end - leaf.pos :]
        if not new_text and leaf.node.role == "text":
            return replace_at_path(content, leaf.path, None)  # type: ignore[return-value]
        return replace_at_path(content, leaf.path, replace(leaf.node, content=new_text))  # type: ignore[return-value]

    def _slice_text(self, content: Document, start: int, end: int) -> str:
        if start == end:
            return ""
        leaf = leaf_at(content, start, end)
        return leaf.text[start - leaf.pos : end - leaf.pos]

    def _insert_block(self, content: Document, index: int, node: Node) -> tuple[Document, int, int]:
        if type(node) not in ValidationVisitor.BLOCK_NODES:
            raise MutationError(f"Only block nodes can be inserted at the top level, got {type(node).__name__}")
        validate_tree(node)
        pos = block_position(content, index)
        children = list(content.children)
        children.insert(index, node)
        return replace(content, children=children), pos, node_size(node)

    def _remove_block(self, content: Document, index: int) -> tuple[Document, int, int]:
        if not 0 <= index < len(content.children):
            raise PositionError(f"Block index {index} out of range (0-{len(content.children) - 1})")
        pos = block_position(content, index)
        children = list(content.children)
        removed = children.pop(index)
        return replace(content, children=children), pos, node_size(removed)

    def _block_at(self, content: Document, index: int) -> Node:
        return content.children[index]

    def _invert_replace(self, content: Document, step: ReplaceTextStep) -> Step:
        try:
            leaf = leaf_at(content, step.start, step.end)
        except PositionError:
            # the step created the first leaf of an empty container
            return super()._invert_replace(content, step)
        return self._invert_leaf_edit(leaf, step.start, step.end, step.text)

    def _invert_leaf_edit(self, leaf: TextLeaf, start: int, end: int, text: str) -> Step:
        removed = leaf.text[start - leaf.pos : end - leaf.pos]
        if not text and leaf.node.role == "text" and start == leaf.pos and end == leaf.end:
            return InsertLeafStep(leaf.path, leaf.pos, leaf.node)
        return LeafTextStep(leaf.path, leaf.pos, start, start + len(text), removed)
