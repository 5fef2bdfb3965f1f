"""Test utilities for the livefind test suite.

Builders for flat and tree documents, a recording view, and temporary
directory helpers.
"""

import shutil
import tempfile
from pathlib import Path

from livefind.ast import CodeBlock, Document, Heading, Paragraph, Strong, Text
from livefind.documents import FlatDocument, TreeDocument
from livefind.search.types import DecorationSet, MatchSpan


def create_test_temp_dir() -> Path:
    """Create a temporary directory for a test."""
    return Path(tempfile.mkdtemp(prefix="livefind_test_"))


def cleanup_test_dir(path: Path) -> None:
    """Remove a directory created by ``create_test_temp_dir``."""
    shutil.rmtree(path, ignore_errors=True)


def flat_doc(text: str) -> FlatDocument:
    """Create a flat document holding ``text``."""
    return FlatDocument(text)


def paragraphs(*texts: str) -> Document:
    """Create a document with one single-leaf paragraph per text."""
    return Document(children=[Paragraph(content=[Text(content=t)] if t else []) for t in texts])


def tree_doc(*texts: str) -> TreeDocument:
    """Create a tree document with one paragraph per text.

    The first paragraph's text starts at position 1, the next paragraph's at
    ``len(first) + 3``, and so on.
    """
    return TreeDocument(paragraphs(*texts))


def mixed_document() -> Document:
    """Create a document exercising headings, marks and code blocks.

    Layout (text leaf positions)::

        Heading        [0, 6)     "Cats" at 1
        Paragraph      [6, 19)    "the " at 7, Strong "cat" at 11, " sat" at 14
        CodeBlock      [19, 28)   "cat = 1" at 20
    """
    return Document(
        children=[
            Heading(level=1, content=[Text(content="Cats")]),
            Paragraph(content=[Text(content="the "), Strong(content=[Text(content="cat")]), Text(content=" sat")]),
            CodeBlock(content="cat = 1", language="python"),
        ]
    )


def spans(*pairs: tuple[int, int]) -> tuple[MatchSpan, ...]:
    """Build a tuple of spans from ``(start, end)`` pairs."""
    return tuple(MatchSpan(start, end) for start, end in pairs)


def as_pairs(results) -> list[list[int]]:
    """Convert spans to ``[[start, end], ...]`` for compact assertions."""
    return [span.to_list() for span in results]


class RecordingView:
    """View double that records what a session renders and reveals."""

    def __init__(self) -> None:
        self.renders: list[DecorationSet] = []
        self.reveals: list[MatchSpan] = []

    def render(self, decorations: DecorationSet) -> None:
        self.renders.append(decorations)

    def reveal(self, span: MatchSpan) -> None:
        self.reveals.append(span)

    @property
    def last_render(self) -> DecorationSet:
        return self.renders[-1] if self.renders else DecorationSet.empty()
