#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/livefind/documents/publisher.py
"""Debounced upstream publishing of document content.

The editor pushes its serialized content to an external store some time after
the user stops typing. That window is independent of the search query
debounce: each ``ContentPublisher`` owns its own ``Debouncer``.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from livefind.documents.base import DocumentChange, EditableDocument
from livefind.options import EditorOptions
from livefind.scheduling import Debouncer, Scheduler

logger = logging.getLogger(__name__)


class ContentPublisher:
    """Push a document's serialized content to ``sink`` after edits settle.

    Parameters
    ----------
    document : EditableDocument
        Document to watch
    sink : callable
        Receives the serialized content
    scheduler : Scheduler
        Timer source for the publish window
    options : EditorOptions, optional
        Provides ``publish_debounce_ms``; defaults to the document's options

    Examples
    --------
        >>> published = []
        >>> publisher = ContentPublisher(doc, published.append, scheduler)
        >>> _ = doc.insert_text(0, "x")
        >>> scheduler.advance(0.5)
        1
        >>> len(published)
        1

    """

    def __init__(
        self,
        document: EditableDocument,
        sink: Callable[[str], None],
        scheduler: Scheduler,
        options: Optional[EditorOptions] = None,
    ) -> None:
        """Subscribe to the document and set up the publish window."""
        self.document = document
        self.options = options or document.options
        self._sink = sink
        self._debouncer = Debouncer(scheduler, self.options.publish_debounce_seconds, self._publish)
        self._unsubscribe: Optional[Callable[[], None]] = document.subscribe(self._on_change)
        self.publish_count = 0

    @property
    def pending(self) -> bool:
        """Return True if a publish is waiting for edits to settle."""
        return self._debouncer.pending

    def _on_change(self, change: DocumentChange) -> None:
        if change.doc_changed:
            self._debouncer.trigger()

    def _publish(self) -> None:
        content = self.document.serialize()
        self.publish_count += 1
        logger.debug("Publishing %d characters (version %d)", len(content), self.document.version)
        self._sink(content)

    def flush(self) -> bool:
        """Publish immediately if a publish is pending."""
        return self._debouncer.flush()

    def close(self, flush: bool = False) -> None:
        """Stop watching the document, optionally publishing pending edits first."""
        if flush:
            self.flush()
        self._debouncer.cancel()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
