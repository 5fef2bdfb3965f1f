"""Shared data structures for the live search subsystem."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Protocol

from livefind.constants import DEFAULT_CURRENT_MATCH_CLASS, DEFAULT_MATCH_CLASS, NO_RESULTS_LABEL, DecorationStyle

if TYPE_CHECKING:
    from livefind.documents.mapping import Mapping


class SessionPhase(Enum):
    """States of a search session."""

    CLOSED = auto()
    EMPTY = auto()
    HAS_RESULTS = auto()


@dataclass(frozen=True, order=True)
class MatchSpan:
    """Half-open ``[start, end)`` range of one occurrence of the query."""

    start: int
    end: int

    def __post_init__(self) -> None:
        """Reject empty or inverted spans."""
        if not 0 <= self.start < self.end:
            raise ValueError(f"MatchSpan needs 0 <= start < end, got [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def overlaps(self, start: int, end: int) -> bool:
        """Return True if the span intersects ``[start, end)``."""
        return self.start < end and start < self.end

    def touches(self, start: int, end: int) -> bool:
        """Return True if the span intersects or is adjacent to ``[start, end]``."""
        return self.start <= end and start <= self.end

    def to_list(self) -> list[int]:
        """Return ``[start, end]`` for JSON output."""
        return [self.start, self.end]


@dataclass(frozen=True)
class SearchQuery:
    """A literal search term and its case handling."""

    term: str = ""
    case_sensitive: bool = False

    @property
    def is_empty(self) -> bool:
        """Return True if the term has no characters."""
        return not self.term


@dataclass(frozen=True)
class Decoration:
    """Display annotation over one match."""

    span: MatchSpan
    style: DecorationStyle = "normal"
    match_class: str = DEFAULT_MATCH_CLASS
    current_match_class: str = DEFAULT_CURRENT_MATCH_CLASS

    @property
    def css_class(self) -> str:
        """Return the class name the view should apply."""
        return self.current_match_class if self.style == "current" else self.match_class


class DecorationSet:
    """Immutable, ordered set of decorations.

    Two sets compare equal when they hold the same decorations in the same
    order, which makes highlight recomputation checkable for idempotence.
    """

    __slots__ = ("_items",)

    def __init__(self, decorations: Iterable[Decoration] = ()) -> None:
        """Freeze ``decorations`` in span order."""
        self._items: tuple[Decoration, ...] = tuple(sorted(decorations, key=lambda d: d.span))

    @classmethod
    def empty(cls) -> DecorationSet:
        """Return a set without decorations."""
        return cls()

    def __iter__(self) -> Iterator[Decoration]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecorationSet):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"DecorationSet({list(self._items)!r})"

    @property
    def items(self) -> tuple[Decoration, ...]:
        """Return the decorations as a tuple."""
        return self._items

    @property
    def current(self) -> Optional[Decoration]:
        """Return the decoration styled ``"current"``, if any."""
        for decoration in self._items:
            if decoration.style == "current":
                return decoration
        return None

    def find(self, start: int, end: int) -> list[Decoration]:
        """Return the decorations intersecting ``[start, end)``."""
        return [d for d in self._items if d.span.overlaps(start, end)]

    def map(self, mapping: Mapping) -> DecorationSet:
        """Carry decorations across an edit, dropping those whose span did not survive."""
        if mapping.is_identity:
            return self
        mapped = []
        for decoration in self._items:
            new_range = mapping.map_range(decoration.span.start, decoration.span.end)
            if new_range is not None:
                mapped.append(
                    Decoration(
                        MatchSpan(*new_range),
                        decoration.style,
                        decoration.match_class,
                        decoration.current_match_class,
                    )
                )
        return DecorationSet(mapped)


@dataclass(frozen=True)
class SearchStatus:
    """Observable search state for the find panel.

    ``current_match`` is one-based and 0 when there is no current match.
    """

    match_count: int = 0
    current_match: int = 0
    term: str = ""

    @property
    def label(self) -> str:
        """Return the status text shown next to the query field."""
        if not self.term:
            return ""
        if self.match_count == 0:
            return NO_RESULTS_LABEL
        return f"{self.current_match} of {self.match_count}"

    def to_dict(self) -> dict[str, object]:
        """Return a mapping suitable for JSON serialization."""
        return {"match_count": self.match_count, "current_match": self.current_match, "term": self.term}


class SearchView(Protocol):
    """Rendering and reveal primitives of the editing surface."""

    def reveal(self, span: MatchSpan) -> None:
        """Scroll ``span`` into view and select it."""
        ...

    def render(self, decorations: DecorationSet) -> None:
        """Replace the displayed search decorations."""
        ...
