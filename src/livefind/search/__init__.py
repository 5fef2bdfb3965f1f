"""Live search and replace over editable documents."""

from __future__ import annotations

from livefind.search.controller import FindController
from livefind.search.finder import compile_query, find_in_text, find_matches
from livefind.search.highlight import decorate
from livefind.search.index import MatchIndex
from livefind.search.reconcile import follow_cursor, reconcile, remap_matches
from livefind.search.replace import replace_all, replace_current, replace_span, replace_spans
from livefind.search.session import SearchSession
from livefind.search.types import (
    Decoration,
    DecorationSet,
    MatchSpan,
    SearchQuery,
    SearchStatus,
    SearchView,
    SessionPhase,
)

__all__ = [
    "Decoration",
    "DecorationSet",
    "FindController",
    "MatchIndex",
    "MatchSpan",
    "SearchQuery",
    "SearchSession",
    "SearchStatus",
    "SearchView",
    "SessionPhase",
    "compile_query",
    "decorate",
    "find_in_text",
    "find_matches",
    "follow_cursor",
    "reconcile",
    "remap_matches",
    "replace_all",
    "replace_current",
    "replace_span",
    "replace_spans",
]
