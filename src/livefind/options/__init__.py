#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for livefind sessions and host documents.

Options are frozen dataclasses; use ``create_updated`` to derive a modified
copy instead of mutating an instance that a live session may still hold.
"""

from __future__ import annotations

from livefind.options.base import CloneFrozenMixin
from livefind.options.search import EditorOptions, SearchOptions

__all__ = [
    "CloneFrozenMixin",
    "EditorOptions",
    "SearchOptions",
]
