#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/ast/__init__.py
"""Abstract Syntax Tree for the structured document substrate.

The tree is the document model live search runs over when the editor shows
formatted content. Text lives in leaves (``Text``, ``Code`` and the single run
of a ``CodeBlock``); every node occupies a range of integer addresses assigned
by ``livefind.ast.positions``.

Examples
--------
    >>> from livefind.ast import Document, Paragraph, Strong, Text
    >>> doc = Document(children=[
    ...     Paragraph(content=[Text("the "), Strong(content=[Text("cat")])]),
    ... ])

"""

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
    get_node_children,
    replace_node_children,
)
from livefind.ast.positions import (
    TextLeaf,
    block_position,
    content_size,
    iter_nodes,
    iter_text_leaves,
    leaf_at,
    node_size,
    text_between,
)
from livefind.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from livefind.ast.utils import extract_text
from livefind.ast.visitors import NodeVisitor, ValidationVisitor

__all__ = [
    # Nodes
    "Node",
    "Document",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "BlockQuote",
    "List",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "ThematicBreak",
    "Text",
    "Code",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Underline",
    "Link",
    "Image",
    "LineBreak",
    "get_node_children",
    "replace_node_children",
    # Positions
    "TextLeaf",
    "block_position",
    "content_size",
    "iter_nodes",
    "iter_text_leaves",
    "leaf_at",
    "node_size",
    "text_between",
    # Serialization
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
    # Utilities and visitors
    "extract_text",
    "NodeVisitor",
    "ValidationVisitor",
]
