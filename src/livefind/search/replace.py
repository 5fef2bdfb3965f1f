"""Single and bulk replacement of matches.

Each operation is one transaction with origin ``SEARCH_ORIGIN``, so the host
history undoes it in one step and the session can tell its own edits apart
from typing.

Bulk replacement builds its steps from the last match backwards. A step only
shifts addresses after its own range, so the offsets of the matches still to
be processed stay valid without any adjustment.
"""

from __future__ import annotations

import logging
from typing import Sequence

from livefind.constants import SEARCH_ORIGIN
from livefind.documents.base import DocumentChange, EditableDocument
from livefind.search.index import MatchIndex
from livefind.search.types import MatchSpan

logger = logging.getLogger(__name__)


def replace_span(document: EditableDocument, span: MatchSpan, replacement: str) -> DocumentChange:
    """Replace one span in a transaction of its own."""
    tr = document.transaction(origin=SEARCH_ORIGIN)
    tr.replace_text(span.start, span.end, replacement)
    return document.dispatch(tr)


def replace_spans(document: EditableDocument, spans: Sequence[MatchSpan], replacement: str) -> DocumentChange:
    """Replace every span in one compound transaction, last span first."""
    tr = document.transaction(origin=SEARCH_ORIGIN)
    for span in sorted(spans, key=lambda s: s.start, reverse=True):
        tr.replace_text(span.start, span.end, replacement)
    return document.dispatch(tr)


def replace_current(document: EditableDocument, index: MatchIndex, replacement: str) -> bool:
    """Replace the match at the cursor.

    Returns
    -------
    bool
        False when there is no current match

    """
    span = index.current
    if span is None:
        return False
    replace_span(document, span, replacement)
    logger.debug("Replaced match %d at [%d, %d)", index.cursor, span.start, span.end)
    return True


def replace_all(document: EditableDocument, index: MatchIndex, replacement: str) -> int:
    """Replace every match in the index.

    Returns
    -------
    int
        Number of replacements, 0 when there were no matches

    """
    if not index.results:
        return 0
    replace_spans(document, index.results, replacement)
    logger.debug("Replaced %d matches", len(index.results))
    return len(index.results)
