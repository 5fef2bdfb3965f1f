#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/ast/positions.py
"""Global position model for tree documents.

Every node of a document occupies a contiguous range of integer addresses
assigned by a pre-order walk. The ``Document`` root contributes no tokens of
its own, so the first block starts at position 0. How much space a node takes
is fixed by its ``role``:

    ==============  ==========================================
    role            size
    ==============  ==========================================
    ``block``       ``2 + sum(child sizes)`` (open/close token)
    ``text_block``  ``2 + len(content)``
    ``mark``        ``sum(child sizes)``
    ``text``        ``len(content)``
    ``atom``        ``1``
    ==============  ==========================================

A paragraph holding ``"cat"`` therefore spans ``[0, 5)``, and its text leaf
spans ``[1, 4)``.

Examples
--------
    >>> doc = Document(children=[Paragraph(content=[Text("cat "), Strong(content=[Text("sat")])])])
    >>> [(leaf.pos, leaf.text) for leaf in iter_text_leaves(doc)]
    [(1, 'cat '), (5, 'sat')]
    >>> content_size(doc)
    9

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generator, Iterator

from livefind.ast.nodes import CodeBlock, Document, Heading, Node, Paragraph, TableCell, get_node_children
from livefind.exceptions import PositionError

Path = tuple[int, ...]

# Containers that may receive a first text leaf when they are empty
TEXT_CONTAINERS = (Heading, Paragraph, TableCell)


@dataclass(frozen=True)
class TextLeaf:
    """A text-bearing leaf and the address of its first character.

    Parameters
    ----------
    pos : int
        Address of the first character of the leaf
    node : Node
        The ``Text``, ``Code`` or ``CodeBlock`` node owning the characters
    path : tuple of int
        Child indices leading from the root to ``node``

    """

    pos: int
    node: Node
    path: Path

    @property
    def text(self) -> str:
        """Return the characters of the leaf."""
        return self.node.content  # type: ignore[attr-defined,no-any-return]

    @property
    def end(self) -> int:
        """Return the address just past the last character."""
        return self.pos + len(self.text)

    def contains(self, start: int, end: int) -> bool:
        """Return True if ``[start, end)`` lies inside this leaf."""
        return self.pos <= start and end <= self.end


def node_size(node: Node) -> int:
    """Return the number of addresses ``node`` occupies."""
    role = node.role
    if role == "text":
        return len(node.content)  # type: ignore[attr-defined]
    if role == "atom":
        return 1
    if role == "text_block":
        return 2 + len(node.content)  # type: ignore[attr-defined]
    inner = sum(node_size(child) for child in get_node_children(node))
    return inner + 2 if role == "block" else inner


def content_size(document: Document) -> int:
    """Return the size of the document's address space."""
    return node_size(document)


def _walk(node: Node, pos: int, path: Path) -> Generator[tuple[int, Node, Path], None, int]:
    yield pos, node, path
    role = node.role
    if role == "text":
        return pos + len(node.content)  # type: ignore[attr-defined]
    if role == "atom":
        return pos + 1
    if role == "text_block":
        return pos + 2 + len(node.content)  # type: ignore[attr-defined]

    inner = pos + 1 if role == "block" else pos
    for index, child in enumerate(get_node_children(node)):
        inner = yield from _walk(child, inner, path + (index,))
    return inner + 1 if role == "block" else inner


def iter_nodes(document: Document) -> Iterator[tuple[int, Node, Path]]:
    """Yield ``(pos, node, path)`` for every node below the root in pre-order.

    ``pos`` is the address where the node starts (its opening token for
    blocks, its first character for text leaves).
    """
    pos = 0
    for index, child in enumerate(document.children):
        pos = yield from _walk(child, pos, (index,))


def iter_text_leaves(document: Document, include_empty: bool = False) -> Iterator[TextLeaf]:
    """Yield the text leaves of ``document`` in document order.

    Parameters
    ----------
    document : Document
        The document to walk
    include_empty : bool, default = False
        Also yield leaves without characters. Scanning skips them; locating
        an insertion point needs them.

    Yields
    ------
    TextLeaf
        Each leaf with the address of its first character

    """
    for pos, node, path in iter_nodes(document):
        if node.role == "text":
            leaf = TextLeaf(pos, node, path)
        elif isinstance(node, CodeBlock):
            leaf = TextLeaf(pos + 1, node, path)
        else:
            continue
        if leaf.text or include_empty:
            yield leaf


def check_range(document: Document, start: int, end: int) -> None:
    """Raise ``PositionError`` unless ``0 <= start <= end <= content_size``."""
    size = content_size(document)
    if not 0 <= start <= end <= size:
        raise PositionError(f"Range [{start}, {end}) is outside the document (size {size})", start=start, end=end)


def leaf_at(document: Document, start: int, end: int) -> TextLeaf:
    """Return the text leaf that wholly contains ``[start, end)``.

    A collapsed range on the boundary between two adjacent leaves resolves to
    the left one, so text typed at the end of a bold run stays bold.

    Raises
    ------
    PositionError
        If the range is outside the document or crosses non-text structure

    """
    check_range(document, start, end)
    for leaf in iter_text_leaves(document, include_empty=True):
        if leaf.contains(start, end):
            return leaf
        if leaf.pos > end:
            break
    raise PositionError(f"Range [{start}, {end}) is not inside a single text leaf", start=start, end=end)


def empty_container_at(document: Document, pos: int) -> Path | None:
    """Return the path of an empty heading, paragraph or cell whose content starts at ``pos``."""
    for node_pos, node, path in iter_nodes(document):
        if node_pos + 1 == pos and isinstance(node, TEXT_CONTAINERS) and not get_node_children(node):
            return path
        if node_pos > pos:
            break
    return None


def block_position(document: Document, index: int) -> int:
    """Return the address where top-level block ``index`` starts.

    ``index`` may equal ``len(document.children)``, which addresses the end of
    the document.
    """
    if not 0 <= index <= len(document.children):
        raise PositionError(f"Block index {index} out of range (0-{len(document.children)})")
    return sum(node_size(child) for child in document.children[:index])


def text_between(document: Document, start: int, end: int, block_separator: str = "") -> str:
    """Return the characters of all text leaves inside ``[start, end)``.

    Parameters
    ----------
    document : Document
        The document to read
    start, end : int
        Half-open address range
    block_separator : str, default = ""
        Inserted between characters coming from different leaves

    """
    check_range(document, start, end)
    parts: list[str] = []
    for leaf in iter_text_leaves(document):
        if leaf.end <= start:
            continue
        if leaf.pos >= end:
            break
        parts.append(leaf.text[max(start, leaf.pos) - leaf.pos : min(end, leaf.end) - leaf.pos])
    return block_separator.join(parts)
