"""Literal match finding over text runs.

Every query is literal text: metacharacters are escaped before compiling, so
no input can fail to compile. Runs are scanned independently, which means a
match never spans two runs (for tree documents, two text leaves such as a
plain run followed by a bold run). That is a known limitation, not an error.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable, Iterator, Optional

from livefind.documents.base import TextRun
from livefind.search.types import MatchSpan, SearchQuery

logger = logging.getLogger(__name__)


@lru_cache(maxsize=128)
def compile_query(query: SearchQuery) -> Optional[re.Pattern[str]]:
    """Compile ``query`` into a pattern matching its literal term.

    Returns
    -------
    re.Pattern or None
        None for an empty term

    """
    if query.is_empty:
        return None
    flags = 0 if query.case_sensitive else re.IGNORECASE
    return re.compile(re.escape(query.term), flags)


def find_in_text(pattern: re.Pattern[str], text: str, base: int = 0) -> Iterator[MatchSpan]:
    """Yield non-overlapping matches of ``pattern`` in ``text``, shifted by ``base``.

    Zero-length matches are skipped.
    """
    for match in pattern.finditer(text):
        start, end = match.span()
        if start == end:
            continue
        yield MatchSpan(base + start, base + end)


def find_matches(runs: Iterable[TextRun], query: SearchQuery) -> tuple[MatchSpan, ...]:
    """Return every match of ``query`` across ``runs`` in document order.

    Parameters
    ----------
    runs : iterable of TextRun
        Text runs in document order, as produced by ``EditableDocument.text_runs``
    query : SearchQuery
        Literal term and case handling

    Returns
    -------
    tuple of MatchSpan
        Sorted, non-overlapping spans; empty for an empty term

    Examples
    --------
        >>> find_matches([TextRun(0, "aaa")], SearchQuery("aa"))
        (MatchSpan(start=0, end=2),)

    """
    pattern = compile_query(query)
    if pattern is None:
        return ()

    results: list[MatchSpan] = []
    scanned = 0
    for run in runs:
        results.extend(find_in_text(pattern, run.text, run.base))
        scanned += 1
    logger.debug("Scanned %d runs for %r: %d matches", scanned, query.term, len(results))
    return tuple(results)
