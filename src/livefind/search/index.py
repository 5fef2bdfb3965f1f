"""Ordered match list with a cyclic cursor."""

from __future__ import annotations

from typing import Iterable, Optional

from livefind.search.types import MatchSpan


class MatchIndex:
    """Sorted match spans and the index of the current one.

    ``cursor`` is -1 exactly when there are no results; otherwise it lies in
    ``[0, len(results))``. Navigation wraps around in both directions.

    Examples
    --------
        >>> index = MatchIndex()
        >>> index.reset([MatchSpan(0, 3), MatchSpan(16, 19)])
        >>> index.next(), index.cursor
        (MatchSpan(start=16, end=19), 1)
        >>> index.next(), index.cursor
        (MatchSpan(start=0, end=3), 0)

    """

    def __init__(self) -> None:
        """Create an empty index."""
        self.results: tuple[MatchSpan, ...] = ()
        self.cursor = -1

    def __len__(self) -> int:
        return len(self.results)

    def __bool__(self) -> bool:
        return bool(self.results)

    def __repr__(self) -> str:
        return f"MatchIndex(count={len(self.results)}, cursor={self.cursor})"

    @property
    def current(self) -> Optional[MatchSpan]:
        """Return the span at the cursor, or None when empty."""
        if self.cursor < 0:
            return None
        return self.results[self.cursor]

    def reset(self, results: Iterable[MatchSpan], cursor: int = 0) -> None:
        """Replace the results and place the cursor, clamped into range."""
        self.results = tuple(results)
        if not self.results:
            self.cursor = -1
        else:
            self.cursor = min(max(cursor, 0), len(self.results) - 1)

    def clamp_to(self, previous: int) -> None:
        """Keep the cursor at ``previous`` if still valid, else move it to the last match."""
        self.reset(self.results, previous)

    def clear(self) -> None:
        """Drop all results."""
        self.results = ()
        self.cursor = -1

    def next(self) -> Optional[MatchSpan]:
        """Advance the cursor, wrapping past the last match."""
        if not self.results:
            return None
        self.cursor = (self.cursor + 1) % len(self.results)
        return self.results[self.cursor]

    def prev(self) -> Optional[MatchSpan]:
        """Move the cursor back, wrapping before the first match."""
        if not self.results:
            return None
        self.cursor = (self.cursor - 1 + len(self.results)) % len(self.results)
        return self.results[self.cursor]

    def index_of(self, span: MatchSpan) -> int:
        """Return the position of ``span`` in the results, or -1."""
        try:
            return self.results.index(span)
        except ValueError:
            return -1
