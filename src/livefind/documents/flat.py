#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/documents/flat.py
"""Flat text substrate: the whole document is one string and one text run."""

from __future__ import annotations

from typing import Iterator, Optional

from livefind.documents.base import EditableDocument, TextRun
from livefind.exceptions import ValidationError
from livefind.options import EditorOptions


class FlatDocument(EditableDocument):
    """Editable plain-text buffer addressed by character offset.

    Parameters
    ----------
    text : str, default ""
        Initial buffer contents
    options : EditorOptions, optional
        Host settings

    """

    substrate = "flat"

    def __init__(self, text: str = "", options: Optional[EditorOptions] = None) -> None:
        """Adopt the initial buffer."""
        if not isinstance(text, str):
            raise ValidationError(
                f"FlatDocument needs a str buffer, got {type(text).__name__}",
                parameter_name="text",
                parameter_value=text,
            )
        super().__init__(text, options)

    @property
    def text(self) -> str:
        """Return the current buffer."""
        return self._content  # type: ignore[no-any-return]

    def text_runs(self) -> Iterator[TextRun]:
        """Yield the buffer as a single run based at offset 0."""
        if self._content:
            yield TextRun(0, self._content)

    def serialize(self) -> str:
        """Return the buffer unchanged."""
        return self._content  # type: ignore[no-any-return]

    def text_between(self, start: int, end: int) -> str:
        """Return ``text[start:end]`` after checking the range."""
        self._check_range(self._content, start, end)
        return self._content[start:end]  # type: ignore[no-any-return]

    def line_column(self, pos: int) -> tuple[int, int]:
        """Return the 1-based line and column of offset ``pos``."""
        self._check_range(self._content, pos, pos)
        before = self._content[:pos]
        line = before.count("\n") + 1
        column = pos - (before.rfind("\n") + 1) + 1
        return line, column

    def _content_size(self, content: str) -> int:
        return len(content)

    def _replace_text(self, content: str, start: int, end: int, text: str) -> str:
        self._check_range(content, start, end)
        return content[:start] + text + content[end:]

    def _slice_text(self, content: str, start: int, end: int) -> str:
        return content[start:end]
