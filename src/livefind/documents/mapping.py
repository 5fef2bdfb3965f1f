#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/documents/mapping.py
"""Position mapping across document edits.

Each step of a transaction reports the single range it replaced as a
``StepMap``; a ``Mapping`` composes the step maps of a whole transaction. The
search engine never computes shifted offsets itself: surviving matches and
decorations are carried over an edit by asking the mapping where their
endpoints went.

Boundary rules for ``map``:

    - a position before the replaced range is unchanged
    - a position after it moves by the size difference
    - a position equal to the range start stays at the start; one equal to
      the range end moves to the end of the new content
    - at a pure insertion point, ``assoc < 0`` keeps the position before the
      inserted content and ``assoc > 0`` moves it after
    - a position strictly inside a replaced range is reported as deleted

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional


@dataclass(frozen=True)
class MapResult:
    """Result of mapping one position: the new position and whether its content was deleted."""

    pos: int
    deleted: bool = False


@dataclass(frozen=True)
class StepMap:
    """The range ``[start, start + old_size)`` was replaced by ``new_size`` addresses."""

    start: int
    old_size: int
    new_size: int

    @property
    def end(self) -> int:
        """Return the end of the replaced range in the old document."""
        return self.start + self.old_size

    @property
    def delta(self) -> int:
        """Return how far positions after the range move."""
        return self.new_size - self.old_size

    @property
    def is_empty(self) -> bool:
        """Return True if the step replaced nothing with nothing."""
        return self.old_size == 0 and self.new_size == 0

    def map_result(self, pos: int, assoc: int = 1) -> MapResult:
        """Map ``pos`` through this step and report whether it was deleted."""
        start, end = self.start, self.end
        if pos < start:
            return MapResult(pos)
        if pos > end:
            return MapResult(pos + self.delta)

        if self.old_size == 0:
            side = assoc
        elif pos == start:
            side = -1
        elif pos == end:
            side = 1
        else:
            side = assoc
        new_pos = start if side < 0 else start + self.new_size
        return MapResult(new_pos, deleted=start < pos < end)

    def map(self, pos: int, assoc: int = 1) -> int:
        """Map ``pos`` through this step."""
        return self.map_result(pos, assoc).pos

    def invert(self) -> StepMap:
        """Return the map that undoes this one."""
        return StepMap(self.start, self.new_size, self.old_size)


class Mapping:
    """An ordered composition of step maps, as produced by one transaction.

    Parameters
    ----------
    maps : iterable of StepMap, optional
        Initial step maps, oldest first

    Examples
    --------
        >>> mapping = Mapping([StepMap(4, 3, 5)])
        >>> mapping.map(10)
        12
        >>> mapping.map_range(4, 7) is None
        False

    """

    def __init__(self, maps: Iterable[StepMap] = ()) -> None:
        """Initialise the mapping from step maps, oldest first."""
        self.maps: list[StepMap] = list(maps)

    def __iter__(self) -> Iterator[StepMap]:
        return iter(self.maps)

    def __len__(self) -> int:
        return len(self.maps)

    def __repr__(self) -> str:
        return f"Mapping({self.maps!r})"

    @property
    def is_identity(self) -> bool:
        """Return True if no position can move."""
        return all(step_map.is_empty for step_map in self.maps)

    def append(self, step_map: StepMap) -> None:
        """Add the map of a step applied after the existing ones."""
        self.maps.append(step_map)

    def map_result(self, pos: int, assoc: int = 1) -> MapResult:
        """Map ``pos`` through every step; ``deleted`` is set if any step deleted it."""
        deleted = False
        for step_map in self.maps:
            result = step_map.map_result(pos, assoc)
            pos = result.pos
            deleted = deleted or result.deleted
        return MapResult(pos, deleted)

    def map(self, pos: int, assoc: int = 1) -> int:
        """Map ``pos`` through every step."""
        return self.map_result(pos, assoc).pos

    def map_range(self, start: int, end: int) -> Optional[tuple[int, int]]:
        """Map a half-open range so that it does not grow over text inserted at its edges.

        Returns None when either endpoint was deleted or the range collapsed.
        """
        new_start = self.map_result(start, assoc=1)
        new_end = self.map_result(end, assoc=-1)
        if new_start.deleted or new_end.deleted or new_start.pos >= new_end.pos:
            return None
        return new_start.pos, new_end.pos

    def changed_ranges(self) -> list[tuple[int, int]]:
        """Return the ranges of new content, in final coordinates, merged and sorted.

        A pure deletion shows up as a collapsed range at the point where the
        content used to be.
        """
        ranges: list[tuple[int, int]] = []
        for index, step_map in enumerate(self.maps):
            if step_map.is_empty:
                continue
            start, end = step_map.start, step_map.start + step_map.new_size
            for later in self.maps[index + 1 :]:
                start = later.map(start, assoc=-1)
                end = later.map(end, assoc=1)
            ranges.append((start, end))

        merged: list[tuple[int, int]] = []
        for start, end in sorted(ranges):
            if merged and start <= merged[-1][1]:
                merged[-1] = (merged[-1][0], max(merged[-1][1], end))
            else:
                merged.append((start, end))
        return merged

    def invert(self) -> Mapping:
        """Return the mapping that undoes this one."""
        return Mapping(step_map.invert() for step_map in reversed(self.maps))
