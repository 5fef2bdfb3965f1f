"""Bring a result set up to date after a document change.

Two strategies are available for content changes:

``rescan``
    Scan the whole document again. Always correct; the default.
``remap``
    Tree documents only. Carry the matches of untouched text leaves through
    the change's mapping and scan only the leaves that a changed range
    touches. Matches never cross leaves, so a leaf whose characters did not
    change keeps exactly the matches it had, just shifted.

Flat documents always rescan. A change that did not alter content keeps the
results as they are.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from livefind.constants import ReconcileMode
from livefind.documents.base import DocumentChange, EditableDocument, TextRun
from livefind.documents.mapping import Mapping
from livefind.search.finder import find_matches
from livefind.search.index import MatchIndex
from livefind.search.types import MatchSpan, SearchQuery

logger = logging.getLogger(__name__)


def _run_touches(run: TextRun, start: int, end: int) -> bool:
    return run.base <= end and start <= run.base + len(run.text)


def remap_matches(
    document: EditableDocument,
    mapping: Mapping,
    query: SearchQuery,
    spans: Sequence[MatchSpan],
) -> tuple[MatchSpan, ...]:
    """Update ``spans`` across ``mapping`` by rescanning only the touched text runs.

    Parameters
    ----------
    document : EditableDocument
        The document after the change
    mapping : Mapping
        Mapping from the old to the new content
    query : SearchQuery
        Query the spans were found with
    spans : sequence of MatchSpan
        Matches in the old content

    Returns
    -------
    tuple of MatchSpan
        Matches in the new content, sorted

    """
    changed = mapping.changed_ranges()
    dirty_runs = [run for run in document.text_runs() if any(_run_touches(run, s, e) for s, e in changed)]

    survivors: list[MatchSpan] = []
    for span in spans:
        new_range = mapping.map_range(span.start, span.end)
        if new_range is None:
            continue
        new_span = MatchSpan(*new_range)
        if any(new_span.touches(s, e) for s, e in changed):
            continue
        if any(new_span.overlaps(run.base, run.base + len(run.text)) for run in dirty_runs):
            continue
        survivors.append(new_span)

    fresh = find_matches(dirty_runs, query)
    logger.debug(
        "Remapped %d of %d matches, rescanned %d runs (%d matches)",
        len(survivors),
        len(spans),
        len(dirty_runs),
        len(fresh),
    )
    return tuple(sorted(survivors + list(fresh)))


def follow_cursor(
    results: Sequence[MatchSpan],
    previous: Optional[MatchSpan],
    previous_cursor: int,
    mapping: Mapping,
) -> int:
    """Return the cursor for ``results`` after a change.

    The previously current match keeps the cursor if it survived the change;
    otherwise the cursor is clamped to ``min(previous_cursor, len(results) - 1)``.
    """
    if not results:
        return -1
    if previous is not None:
        new_range = mapping.map_range(previous.start, previous.end)
        if new_range is not None:
            candidate = MatchSpan(*new_range)
            if candidate in results:
                return results.index(candidate)
    return min(max(previous_cursor, 0), len(results) - 1)


def reconcile(
    document: EditableDocument,
    change: DocumentChange,
    query: SearchQuery,
    index: MatchIndex,
    mode: ReconcileMode = "rescan",
) -> tuple[tuple[MatchSpan, ...], int]:
    """Compute the results and cursor that follow ``change``.

    Parameters
    ----------
    document : EditableDocument
        The document after the change
    change : DocumentChange
        The dispatched change
    query : SearchQuery
        Active query
    index : MatchIndex
        Results and cursor from before the change (left untouched)
    mode : {"rescan", "remap"}, default "rescan"
        Strategy for content changes

    Returns
    -------
    tuple
        ``(results, cursor)``

    """
    if query.is_empty:
        return (), -1
    if not change.doc_changed:
        return index.results, index.cursor

    if mode == "remap" and document.supports_remap:
        results = remap_matches(document, change.mapping, query, index.results)
    else:
        if mode == "remap":
            logger.debug("%s documents do not support remapping; rescanning", document.substrate)
        results = find_matches(document.text_runs(), query)

    return results, follow_cursor(results, index.current, index.cursor, change.mapping)
