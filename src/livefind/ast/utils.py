#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
extract_text : Extract plain text from a node or list of nodes
node_at_path : Follow a child-index path from a root node
replace_at_path : Copy a tree with one node replaced or removed

Examples
--------
Extract text from a heading:

    >>> from livefind.ast import Heading, Text, Emphasis
    >>> heading = Heading(level=1, content=[
    ...     Text(content="Hello "),
    ...     Emphasis(content=[Text(content="world")])
    ... ])
    >>> extract_text(heading, joiner="")
    'Hello world'

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from livefind.ast.nodes import CodeBlock, Node, get_node_children, replace_node_children

if TYPE_CHECKING:
    from livefind.ast.positions import Path


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = " ") -> str:
    """Extract plain text from a node or list of nodes.

    Text and code leaves contribute their content; structural nodes join the
    text of their children with ``joiner``.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = " "
        String to use for joining text parts

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, list):
        parts = [extract_text(node, joiner=joiner) for node in node_or_nodes]
        return joiner.join(part for part in parts if part)

    node = node_or_nodes
    if node.role == "text" or isinstance(node, CodeBlock):
        return node.content  # type: ignore[attr-defined,no-any-return]

    return extract_text(get_node_children(node), joiner=joiner)


def node_at_path(root: Node, path: "Path") -> Node:
    """Return the node reached by following ``path`` from ``root``.

    Raises
    ------
    IndexError
        If the path does not exist in the tree

    """
    node = root
    for index in path:
        node = get_node_children(node)[index]
    return node


def replace_at_path(root: Node, path: "Path", new_node: Optional[Node]) -> Node:
    """Return a copy of ``root`` with the node at ``path`` replaced.

    Only the nodes along the path are copied; every untouched subtree is
    shared with the original, which stays unmodified.

    Parameters
    ----------
    root : Node
        Tree to copy
    path : tuple of int
        Child indices leading to the node to replace; must be non-empty
    new_node : Node or None
        Replacement node, or None to remove the node from its parent

    Returns
    -------
    Node
        The new root

    """
    if not path:
        raise ValueError("replace_at_path needs a non-empty path")

    children = get_node_children(root)
    index, rest = path[0], path[1:]
    if rest:
        children[index] = replace_at_path(children[index], rest, new_node)
    elif new_node is None:
        del children[index]
    else:
        children[index] = new_node
    return replace_node_children(root, children)


def insert_at_path(root: Node, path: "Path", new_node: Node) -> Node:
    """Return a copy of ``root`` with ``new_node`` inserted so that it ends up at ``path``."""
    if not path:
        raise ValueError("insert_at_path needs a non-empty path")

    children = get_node_children(root)
    index, rest = path[0], path[1:]
    if rest:
        children[index] = insert_at_path(children[index], rest, new_node)
    else:
        children.insert(index, new_node)
    return replace_node_children(root, children)


__all__ = [
    "extract_text",
    "insert_at_path",
    "node_at_path",
    "replace_at_path",
]
