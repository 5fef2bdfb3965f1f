"""Decoration derivation for search results."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from livefind.constants import DEFAULT_CURRENT_MATCH_CLASS, DEFAULT_MATCH_CLASS
from livefind.documents.base import TextRun
from livefind.search.finder import find_matches
from livefind.search.types import Decoration, DecorationSet, MatchSpan, SearchQuery


def decorate(
    runs: Iterable[TextRun],
    query: SearchQuery,
    cursor: int,
    matches: Optional[Sequence[MatchSpan]] = None,
    match_class: str = DEFAULT_MATCH_CLASS,
    current_match_class: str = DEFAULT_CURRENT_MATCH_CLASS,
) -> DecorationSet:
    """Build the decoration set for ``query`` with the match at ``cursor`` marked current.

    A pure function of its inputs: equal inputs give equal sets.

    Parameters
    ----------
    runs : iterable of TextRun
        Document text runs; only scanned when ``matches`` is not given
    query : SearchQuery
        The active query; an empty term yields an empty set
    cursor : int
        Index of the current match, or -1
    matches : sequence of MatchSpan, optional
        Precomputed matches for ``query`` over ``runs``
    match_class, current_match_class : str
        CSS classes carried by the decorations

    Returns
    -------
    DecorationSet
        One decoration per match

    """
    if query.is_empty:
        return DecorationSet.empty()

    spans = find_matches(runs, query) if matches is None else matches
    return DecorationSet(
        Decoration(
            span,
            "current" if i == cursor else "normal",
            match_class,
            current_match_class,
        )
        for i, span in enumerate(spans)
    )
