#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class and the structural validator used
by the tree document model. A document only gets a well-defined address space
when block nodes hold blocks and text containers hold inline nodes, so every
tree handed to ``TreeDocument`` is validated once on entry.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from livefind.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    Underline,
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a ``visit_*`` method for each node type. Container
    visitors are responsible for visiting their own children.

    Examples
    --------
    Count the text leaves of a document:

        >>> class LeafCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_text(self, node):
        ...         self.count += 1
        ...     # remaining visit_* methods recurse into children

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit an inline Code node."""

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""

    @abstractmethod
    def visit_underline(self, node: Underline) -> Any:
        """Visit an Underline node."""

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""

    def generic_visit(self, node: Node) -> Any:
        """Fallback visitor for unhandled node types.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None


class ValidationVisitor(NodeVisitor):
    """Visitor that validates AST containment rules.

    Checks that the document root, block quotes and list items hold block
    nodes; that headings, paragraphs, cells and marks hold inline nodes; that
    lists hold list items and tables hold rows of cells.

    Parameters
    ----------
    strict : bool, default = True
        Whether to raise ``ValueError`` on the first failure. When False,
        failures are only collected in ``errors``.

    Examples
    --------
        >>> validator = ValidationVisitor(strict=False)
        >>> doc.accept(validator)
        >>> validator.errors
        []

    """

    INLINE_NODES = frozenset(
        {Text, Code, Emphasis, Strong, Strikethrough, Underline, Link, Image, LineBreak}
    )

    BLOCK_NODES = frozenset(
        {Heading, Paragraph, CodeBlock, BlockQuote, List, Table, ThematicBreak}
    )

    def __init__(self, strict: bool = True):
        """Initialize the validator with its strictness."""
        self.strict = strict
        self.errors: list[str] = []

    def _add_error(self, message: str) -> None:
        self.errors.append(message)
        if self.strict:
            raise ValueError(message)

    def _check_children(self, children: list[Node], allowed: frozenset[type], context: str, kind: str) -> None:
        for i, child in enumerate(children):
            if type(child) not in allowed:
                self._add_error(f"{context} can only contain {kind} nodes, but child {i} is {type(child).__name__}")
            else:
                child.accept(self)

    def visit_document(self, node: Document) -> None:
        """Validate a Document node."""
        self._check_children(node.children, self.BLOCK_NODES, "Document", "block")

    def visit_heading(self, node: Heading) -> None:
        """Validate a Heading node."""
        if not 1 <= node.level <= 6:
            self._add_error(f"Invalid heading level: {node.level}")
        self._check_children(node.content, self.INLINE_NODES, "Heading", "inline")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Validate a Paragraph node."""
        self._check_children(node.content, self.INLINE_NODES, "Paragraph", "inline")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Validate a CodeBlock node."""
        if not isinstance(node.content, str):
            self._add_error(f"CodeBlock content must be a string, got {type(node.content).__name__}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Validate a BlockQuote node."""
        self._check_children(node.children, self.BLOCK_NODES, "BlockQuote", "block")

    def visit_list(self, node: List) -> None:
        """Validate a List node."""
        if node.ordered and node.start < 1:
            self._add_error(f"Ordered list start must be >= 1, got {node.start}")
        self._check_children(list(node.items), frozenset({ListItem}), "List", "ListItem")

    def visit_list_item(self, node: ListItem) -> None:
        """Validate a ListItem node."""
        self._check_children(node.children, self.BLOCK_NODES, "ListItem", "block")

    def visit_table(self, node: Table) -> None:
        """Validate a Table node."""
        rows: list[Node] = [node.header] if node.header else []
        rows.extend(node.rows)
        self._check_children(rows, frozenset({TableRow}), "Table", "TableRow")

    def visit_table_row(self, node: TableRow) -> None:
        """Validate a TableRow node."""
        self._check_children(list(node.cells), frozenset({TableCell}), "TableRow", "TableCell")

    def visit_table_cell(self, node: TableCell) -> None:
        """Validate a TableCell node."""
        self._check_children(node.content, self.INLINE_NODES, "TableCell", "inline")

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Validate a ThematicBreak node."""

    def visit_text(self, node: Text) -> None:
        """Validate a Text node."""
        if not isinstance(node.content, str):
            self._add_error(f"Text content must be a string, got {type(node.content).__name__}")

    def visit_code(self, node: Code) -> None:
        """Validate an inline Code node."""
        if not isinstance(node.content, str):
            self._add_error(f"Code content must be a string, got {type(node.content).__name__}")

    def visit_emphasis(self, node: Emphasis) -> None:
        """Validate an Emphasis node."""
        self._check_children(node.content, self.INLINE_NODES, "Emphasis", "inline")

    def visit_strong(self, node: Strong) -> None:
        """Validate a Strong node."""
        self._check_children(node.content, self.INLINE_NODES, "Strong", "inline")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Validate a Strikethrough node."""
        self._check_children(node.content, self.INLINE_NODES, "Strikethrough", "inline")

    def visit_underline(self, node: Underline) -> None:
        """Validate an Underline node."""
        self._check_children(node.content, self.INLINE_NODES, "Underline", "inline")

    def visit_link(self, node: Link) -> None:
        """Validate a Link node."""
        self._check_children(node.content, self.INLINE_NODES, "Link", "inline")

    def visit_image(self, node: Image) -> None:
        """Validate an Image node."""

    def visit_line_break(self, node: LineBreak) -> None:
        """Validate a LineBreak node."""
