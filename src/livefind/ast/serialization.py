#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/ast/serialization.py
"""JSON serialization and deserialization for tree documents.

The format is the ``node_type``-tagged JSON used by all2md's ``ast-json``
output, restricted to the node types livefind addresses. It is how the
command line reads tree documents and how ``ContentPublisher`` pushes a tree
document's content to its store.

Examples
--------
    >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
    >>> json_str = ast_to_json(doc)
    >>> json_to_ast(json_str).children[0].level
    1

"""

from __future__ import annotations

import json
import logging
from dataclasses import fields
from typing import Any, Optional

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
from livefind.exceptions import ParsingError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_NODE_CLASSES: dict[str, type[Node]] = {
    cls.__name__: cls
    for cls in (
        Document,
        Heading,
        Paragraph,
        CodeBlock,
        BlockQuote,
        List,
        ListItem,
        Table,
        TableRow,
        TableCell,
        ThematicBreak,
        Text,
        Code,
        Emphasis,
        Strong,
        Strikethrough,
        Underline,
        Link,
        Image,
        LineBreak,
    )
}

# Fields holding lists of child nodes (``content`` is a string on text leaves)
_NODE_LIST_FIELDS = frozenset({"children", "content", "items", "rows", "cells"})
_NODE_FIELDS = frozenset({"header"})


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Node):
        return ast_to_dict(value)
    if isinstance(value, list) and value and isinstance(value[0], Node):
        return [ast_to_dict(item) for item in value]
    return value


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node (and its subtree) to a JSON-compatible dictionary.

    Parameters
    ----------
    node : Node
        The node to serialize

    Returns
    -------
    dict
        Dictionary with a ``node_type`` key and one key per dataclass field

    """
    result: dict[str, Any] = {"node_type": type(node).__name__}
    for f in fields(node):  # type: ignore[arg-type]
        value = getattr(node, f.name)
        if f.name in _NODE_FIELDS and value is None:
            continue
        result[f.name] = _serialize_value(value)
    return result


def _deserialize_children(items: Any, strict_mode: bool) -> list[Node]:
    if not isinstance(items, list):
        raise ParsingError(f"Expected a list of nodes, got {type(items).__name__}", parsing_stage="children")
    nodes = [dict_to_ast(item, strict_mode=strict_mode) for item in items]
    return [node for node in nodes if node is not None]


def dict_to_ast(data: dict[str, Any], strict_mode: bool = True) -> Optional[Node]:
    """Convert a dictionary representation back to a node.

    Parameters
    ----------
    data : dict
        Dictionary representation of a node
    strict_mode : bool, default True
        If True, raise on unknown node types and attributes. If False, log a
        warning and drop unknown nodes and attributes.

    Returns
    -------
    Node or None
        Reconstructed node; None for a dropped unknown node in lenient mode

    Raises
    ------
    ParsingError
        If the dictionary is malformed (strict mode)

    """
    if not isinstance(data, dict):
        raise ParsingError(f"Expected a node object, got {type(data).__name__}", parsing_stage="node")

    node_type = data.get("node_type")
    cls = _NODE_CLASSES.get(str(node_type))
    if cls is None:
        if strict_mode:
            raise ParsingError(f"Unknown node type: {node_type}", parsing_stage="node")
        logger.warning("Unknown node type '%s', skipping", node_type)
        return None

    known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key in ("node_type", "source_location"):
            continue
        if key not in known:
            if strict_mode:
                raise ParsingError(f"Unknown attribute '{key}' on {node_type}", parsing_stage="attributes")
            logger.warning("Unknown attribute '%s' on %s, skipping", key, node_type)
            continue
        if key in _NODE_LIST_FIELDS and isinstance(value, list):
            kwargs[key] = _deserialize_children(value, strict_mode)
        elif key in _NODE_FIELDS and value is not None:
            kwargs[key] = dict_to_ast(value, strict_mode=strict_mode)
        else:
            kwargs[key] = value

    try:
        return cls(**kwargs)
    except (TypeError, ValueError) as e:
        raise ParsingError(f"Invalid {node_type} node: {e}", parsing_stage="construct", original_error=e) from e


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a node to a JSON string with a ``schema_version`` field.

    Parameters
    ----------
    node : Node
        The node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string

    """
    return json.dumps({"schema_version": SCHEMA_VERSION, **ast_to_dict(node)}, indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str, strict_mode: bool = True) -> Document:
    """Deserialize a JSON string to a ``Document``.

    A missing ``schema_version`` is read as version 1.

    Parameters
    ----------
    json_str : str
        JSON string representation of a Document
    strict_mode : bool, default True
        Reject unknown node types and attributes instead of skipping them

    Returns
    -------
    Document
        Reconstructed document

    Raises
    ------
    ParsingError
        If the JSON is malformed, has an unsupported schema version, or does
        not describe a Document

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ParsingError(f"Invalid JSON: {e}", parsing_stage="json", original_error=e) from e

    if not isinstance(data, dict):
        raise ParsingError("Top-level JSON value must be an object", parsing_stage="json")

    schema_version = data.pop("schema_version", SCHEMA_VERSION)
    if schema_version != SCHEMA_VERSION:
        raise ParsingError(
            f"Unsupported schema version: {schema_version}. Only version {SCHEMA_VERSION} is supported.",
            parsing_stage="schema",
        )

    node = dict_to_ast(data, strict_mode=strict_mode)
    if not isinstance(node, Document):
        raise ParsingError(
            f"Expected a Document at the top level, got {data.get('node_type')}", parsing_stage="document"
        )
    return node


__all__ = [
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
]
