#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/search/controller.py
"""Panel-facing find/replace controller.

``FindController`` is what a find bar talks to. It owns at most one
``SearchSession`` (for the active document) and the query debounce:

    - ``set_query`` is debounced by ``query_debounce_ms``; only the last
      term of a burst of keystrokes is scanned
    - ``next``/``prev`` are never debounced and act on the last settled
      result set
    - ``replace_current``/``replace_all`` flush a pending query first, so
      the replaced text is what the user typed
    - ``close`` synchronously clears the term, results, decorations and the
      pending debounce timer

Every call made while the controller is closed is a no-op returning
``None``, ``False`` or ``0``.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from livefind.documents.base import EditableDocument
from livefind.options import SearchOptions
from livefind.scheduling import Debouncer, Scheduler
from livefind.search.session import SearchSession, StatusListener
from livefind.search.types import MatchSpan, SearchStatus, SearchView, SessionPhase

logger = logging.getLogger(__name__)


class FindController:
    """Find bar state machine over the active document.

    Parameters
    ----------
    scheduler : Scheduler
        Timer source for the query debounce and deferred reveals
    options : SearchOptions, optional
        Search settings
    view : SearchView, optional
        Receives decorations and reveal requests

    Examples
    --------
        >>> controller = FindController(ManualScheduler())
        >>> _ = controller.open(FlatDocument("cat sat on the cat mat"))
        >>> controller.set_query("cat")
        >>> controller.flush()
        True
        >>> controller.status.label
        '1 of 2'

    """

    def __init__(
        self,
        scheduler: Scheduler,
        options: Optional[SearchOptions] = None,
        view: Optional[SearchView] = None,
    ) -> None:
        """Create a closed controller."""
        self.scheduler = scheduler
        self.options = options or SearchOptions()
        self.view = view
        self.document: Optional[EditableDocument] = None
        self.session: Optional[SearchSession] = None
        self._query_debouncer = Debouncer(scheduler, self.options.query_debounce_seconds, self._apply_query)
        self._listeners: list[StatusListener] = []

    @property
    def is_open(self) -> bool:
        """Return True while a session is active."""
        return self.session is not None and self.session.is_alive

    @property
    def phase(self) -> SessionPhase:
        """Return the phase of the active session, or CLOSED."""
        return self.session.phase if self.session is not None else SessionPhase.CLOSED

    @property
    def status(self) -> SearchStatus:
        """Return the status of the active session; empty when closed."""
        return self.session.status if self.session is not None else SearchStatus()

    @property
    def query_pending(self) -> bool:
        """Return True if a typed query has not been applied yet."""
        return self._query_debouncer.pending

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Call ``listener`` with the status after every update."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, status: SearchStatus) -> None:
        for listener in list(self._listeners):
            listener(status)

    # Lifecycle -------------------------------------------------------------

    def open(self, document: Optional[EditableDocument] = None) -> Optional[SearchSession]:
        """Open the find affordance on ``document`` (or the last active document).

        Reopening on the document that already has a live session keeps it.
        """
        document = document if document is not None else self.document
        if document is None:
            return None
        if self.session is not None and self.session.is_alive and self.session.document is document:
            return self.session

        self.close()
        self.document = document
        self.session = SearchSession(document, self.options, view=self.view, scheduler=self.scheduler)
        self.session.subscribe(self._notify)
        logger.debug("Find opened on %s document", document.substrate)
        return self.session

    def close(self) -> None:
        """Close the find affordance and drop every trace of the search."""
        self._query_debouncer.cancel()
        session, self.session = self.session, None
        if session is not None and session.is_alive:
            session.close()
            self._notify(SearchStatus())
            logger.debug("Find closed")

    def switch_document(self, document: EditableDocument) -> None:
        """Make ``document`` the active document; the current session is torn down."""
        self.close()
        self.document = document

    # Query -----------------------------------------------------------------

    def set_query(self, term: str) -> None:
        """Schedule ``term`` to be searched once typing settles."""
        if not self.is_open:
            return
        self._query_debouncer.trigger(term)

    def flush(self) -> bool:
        """Apply a pending query now. Returns False if nothing was pending."""
        return self._query_debouncer.flush()

    def _apply_query(self, term: str) -> None:
        if self.session is None:
            return
        self.session.set_query(term)

    def set_case_sensitive(self, case_sensitive: bool) -> None:
        """Change case handling and rerun the settled query immediately."""
        self.options = self.options.create_updated(case_sensitive=case_sensitive)
        if self.session is not None:
            self.session.set_case_sensitive(case_sensitive)

    # Navigation and replacement -------------------------------------------

    def next(self) -> Optional[MatchSpan]:
        """Move to the next match of the settled result set."""
        return self.session.next() if self.session is not None else None

    def prev(self) -> Optional[MatchSpan]:
        """Move to the previous match of the settled result set."""
        return self.session.prev() if self.session is not None else None

    def replace_current(self, replacement: str) -> bool:
        """Replace the current match of the latest query."""
        if self.session is None:
            return False
        self.flush()
        return self.session.replace_current(replacement)

    def replace_all(self, replacement: str) -> int:
        """Replace every match of the latest query."""
        if self.session is None:
            return 0
        self.flush()
        return self.session.replace_all(replacement)
