#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/search/session.py
"""Live search session over one document.

A ``SearchSession`` is the explicit state object for one open find/replace
interaction: the query, the match index, the current decorations and a
liveness token. Both the query side (``set_query``, navigation, replacement)
and the document side (the change listener) funnel into ``refresh``, the
single place where results, cursor and decorations are recomputed, so the
two callbacks can arrive in either order.

Lifecycle::

    EMPTY  --set_query("x")-->  HAS_RESULTS  --set_query("")-->  EMPTY
      |                            |
      +-----------close()----------+------------>  CLOSED

Closing revokes the liveness token; reveal callbacks that were scheduled
before the close become no-ops.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional, Sequence

from livefind.constants import SEARCH_ORIGIN
from livefind.documents.base import DocumentChange, EditableDocument
from livefind.logging_utils import session_logger
from livefind.options import SearchOptions
from livefind.scheduling import LivenessToken, Scheduler, guarded
from livefind.search import replace as replacer
from livefind.search.finder import find_matches
from livefind.search.highlight import decorate
from livefind.search.index import MatchIndex
from livefind.search.reconcile import reconcile
from livefind.search.types import DecorationSet, MatchSpan, SearchQuery, SearchStatus, SearchView, SessionPhase

StatusListener = Callable[[SearchStatus], None]


class SearchSession:
    """Search state bound to one document.

    Parameters
    ----------
    document : EditableDocument
        Document to search; the session subscribes to its changes
    options : SearchOptions, optional
        Case handling, reconcile strategy, reveal delay and class names
    view : SearchView, optional
        Receives rendered decorations and reveal requests
    scheduler : Scheduler, optional
        Timer source for deferred reveals. Without one, reveals run
        immediately.

    Examples
    --------
        >>> session = SearchSession(FlatDocument("cat sat on the cat mat"))
        >>> session.set_query("cat")
        >>> session.results
        (MatchSpan(start=0, end=3), MatchSpan(start=15, end=18))
        >>> session.next()
        MatchSpan(start=15, end=18)
        >>> session.status.label
        '2 of 2'

    """

    def __init__(
        self,
        document: EditableDocument,
        options: Optional[SearchOptions] = None,
        view: Optional[SearchView] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        """Open a session with an empty query."""
        self.document = document
        self.options = options or SearchOptions()
        self.view = view
        self.scheduler = scheduler
        self.token = LivenessToken()
        self.query = SearchQuery("", self.options.case_sensitive)
        self.index = MatchIndex()
        self._decorations = DecorationSet.empty()
        self._listeners: list[StatusListener] = []
        self._log = session_logger(__name__, self.token.generation)
        self._unsubscribe: Optional[Callable[[], None]] = document.subscribe(self._on_document_change)
        self._log.debug("Opened on %s document", document.substrate)

    # Observable state ------------------------------------------------------

    @property
    def is_alive(self) -> bool:
        """Return False once the session was closed."""
        return self.token.alive

    @property
    def phase(self) -> SessionPhase:
        """Return the current lifecycle state."""
        if not self.token.alive:
            return SessionPhase.CLOSED
        return SessionPhase.EMPTY if self.query.is_empty else SessionPhase.HAS_RESULTS

    @property
    def results(self) -> tuple[MatchSpan, ...]:
        """Return the current matches in document order."""
        return self.index.results

    @property
    def cursor(self) -> int:
        """Return the index of the current match, or -1."""
        return self.index.cursor

    @property
    def current(self) -> Optional[MatchSpan]:
        """Return the current match, if any."""
        return self.index.current

    @property
    def decorations(self) -> DecorationSet:
        """Return the decorations for the current results."""
        return self._decorations

    @property
    def status(self) -> SearchStatus:
        """Return match count, one-based current match and term."""
        return SearchStatus(
            match_count=len(self.index),
            current_match=self.index.cursor + 1,
            term=self.query.term,
        )

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Call ``listener`` with the new status after every update."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Recompute -------------------------------------------------------------

    def refresh(self, results: Optional[Sequence[MatchSpan]] = None, cursor: int = 0) -> None:
        """Recompute results, cursor and decorations, then render.

        Parameters
        ----------
        results : sequence of MatchSpan, optional
            Already reconciled results; the document is scanned when omitted
        cursor : int, default 0
            Desired cursor, clamped into range

        """
        if results is None:
            results = find_matches(self.document.text_runs(), self.query)
        self.index.reset(results, cursor)
        self._decorations = decorate(
            (),
            self.query,
            self.index.cursor,
            matches=self.index.results,
            match_class=self.options.match_class,
            current_match_class=self.options.current_match_class,
        )
        self._publish()

    def _redecorate(self) -> None:
        self.refresh(self.index.results, self.index.cursor)

    def _publish(self) -> None:
        if self.view is not None:
            self.view.render(self._decorations)
        status = self.status
        for listener in list(self._listeners):
            listener(status)

    def _reveal(self, span: MatchSpan) -> None:
        if self.view is None:
            return
        view = self.view
        if self.scheduler is None:
            view.reveal(span)
            return
        self.scheduler.call_later(
            self.options.reveal_delay_seconds,
            guarded(self.token, lambda: view.reveal(span), description="reveal"),
        )

    # Query -----------------------------------------------------------------

    def set_query(self, term: str) -> None:
        """Run a new query; the cursor starts at the first match."""
        if not self.token.alive:
            return
        self.query = replace(self.query, term=term)
        self.refresh()
        self._log.debug("Query %r: %d matches", term, len(self.index))

    def set_case_sensitive(self, case_sensitive: bool) -> None:
        """Change case handling and rerun the query."""
        if not self.token.alive:
            return
        self.query = replace(self.query, case_sensitive=case_sensitive)
        self.refresh()

    # Navigation ------------------------------------------------------------

    def next(self) -> Optional[MatchSpan]:
        """Move to the next match, wrapping at the end."""
        if not self.token.alive:
            return None
        span = self.index.next()
        if span is not None:
            self._redecorate()
            self._reveal(span)
        return span

    def prev(self) -> Optional[MatchSpan]:
        """Move to the previous match, wrapping at the start."""
        if not self.token.alive:
            return None
        span = self.index.prev()
        if span is not None:
            self._redecorate()
            self._reveal(span)
        return span

    # Replacement -----------------------------------------------------------

    def replace_current(self, replacement: str) -> bool:
        """Replace the current match and rescan.

        The cursor stays at the same index when it is still valid, otherwise
        it moves to the last remaining match.

        Returns
        -------
        bool
            False when there is no current match

        """
        if not self.token.alive:
            return False
        previous = self.index.cursor
        if not replacer.replace_current(self.document, self.index, replacement):
            return False
        self.refresh(cursor=previous)
        self._log.debug("Replaced current match; %d remain", len(self.index))
        if self.index.current is not None:
            self._reveal(self.index.current)
        return True

    def replace_all(self, replacement: str) -> int:
        """Replace every match, then clear the query.

        Returns
        -------
        int
            Number of replacements

        """
        if not self.token.alive:
            return 0
        count = replacer.replace_all(self.document, self.index, replacement)
        if count:
            self.query = replace(self.query, term="")
            self.refresh()
            self._log.debug("Replaced all %d matches", count)
        return count

    # Document changes ------------------------------------------------------

    def _on_document_change(self, change: DocumentChange) -> None:
        if not self.token.alive or change.origin == SEARCH_ORIGIN:
            return
        if not change.doc_changed:
            mapped = self._decorations.map(change.mapping)
            if mapped is not self._decorations:
                self._decorations = mapped
                self._publish()
            return
        if self.query.is_empty:
            return

        results, cursor = reconcile(self.document, change, self.query, self.index, self.options.reconcile)
        self._log.debug("Reconciled %s change: %d -> %d matches", change.origin, len(self.index), len(results))
        self.refresh(results, cursor)

    # Teardown --------------------------------------------------------------

    def close(self) -> None:
        """Clear the query and decorations and stop listening to the document."""
        if not self.token.alive:
            return
        self.query = replace(self.query, term="")
        self.index.clear()
        self._decorations = DecorationSet.empty()
        self._publish()
        self.token.revoke()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._listeners.clear()
        self._log.debug("Closed")
