#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/documents/__init__.py
"""Host document models that live search runs over.

Two substrates share one interface (``EditableDocument``):

    - ``TreeDocument`` wraps a structured ``Document`` AST; text lives in
      leaves addressed by global positions
    - ``FlatDocument`` wraps a plain string; the whole buffer is one run

Both expose ``text_runs()``, transactional edits with position mappings,
undo/redo history and change subscriptions.
"""

from livefind.documents.base import (
    DocumentChange,
    EditableDocument,
    InsertBlockStep,
    RemoveBlockStep,
    ReplaceTextStep,
    Step,
    TextRun,
    Transaction,
)
from livefind.documents.flat import FlatDocument
from livefind.documents.mapping import MapResult, Mapping, StepMap
from livefind.documents.publisher import ContentPublisher
from livefind.documents.tree import InsertLeafStep, LeafTextStep, TreeDocument, validate_tree

__all__ = [
    "ContentPublisher",
    "DocumentChange",
    "EditableDocument",
    "FlatDocument",
    "InsertBlockStep",
    "InsertLeafStep",
    "LeafTextStep",
    "MapResult",
    "Mapping",
    "RemoveBlockStep",
    "ReplaceTextStep",
    "Step",
    "StepMap",
    "TextRun",
    "Transaction",
    "TreeDocument",
    "validate_tree",
]
