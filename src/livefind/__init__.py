"""livefind - live search and replace over documents that are being edited.

livefind finds every occurrence of a literal query in a document, keeps an
ordered, cyclically navigable and highlighted result set in sync while the
document changes underneath it, and replaces single or all matches in one
undoable transaction.

Two document substrates share one contract:

- **Tree documents** (``TreeDocument``): a structured AST whose text lives in
  leaves addressed by global integer positions
- **Flat documents** (``FlatDocument``): a plain string addressed by offset

Key Features
------------
- Literal matching only: regex metacharacters in a query are plain text
- Cursor navigation that wraps in both directions
- Pure decoration derivation with configurable CSS classes
- Replace-all applied back to front in a single transaction
- Result reconciliation after edits, by full rescan or by position remapping
- Debounced query input and content publishing on separate timers
- Guarded deferred callbacks that become no-ops after a session closes

Examples
--------
Searching a plain-text buffer:

    >>> from livefind import FlatDocument, SearchSession
    >>> session = SearchSession(FlatDocument("cat sat on the cat mat"))
    >>> session.set_query("cat")
    >>> session.status.label
    '1 of 2'
    >>> session.replace_all("dog")
    2

Driving a find bar with a debounced query:

    >>> from livefind import FindController, ManualScheduler
    >>> scheduler = ManualScheduler()
    >>> controller = FindController(scheduler)
    >>> controller.open(FlatDocument("a.b axb"))
    >>> controller.set_query("a.b")
    >>> scheduler.advance(0.25)
    >>> controller.status.match_count
    1

"""

__version__ = "1.0.0"

from livefind.documents import (
    ContentPublisher,
    DocumentChange,
    EditableDocument,
    FlatDocument,
    Mapping,
    StepMap,
    TextRun,
    Transaction,
    TreeDocument,
)
from livefind.exceptions import LiveFindError, MutationError, ParsingError, PositionError, ValidationError
from livefind.options import EditorOptions, SearchOptions
from livefind.scheduling import AsyncioScheduler, Debouncer, LivenessToken, ManualScheduler, guarded
from livefind.search import (
    Decoration,
    DecorationSet,
    FindController,
    MatchIndex,
    MatchSpan,
    SearchQuery,
    SearchSession,
    SearchStatus,
    SearchView,
    SessionPhase,
    decorate,
    find_matches,
)

__all__ = [
    "__version__",
    # Documents
    "ContentPublisher",
    "DocumentChange",
    "EditableDocument",
    "FlatDocument",
    "Mapping",
    "StepMap",
    "TextRun",
    "Transaction",
    "TreeDocument",
    # Search
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
    "decorate",
    "find_matches",
    # Scheduling
    "AsyncioScheduler",
    "Debouncer",
    "LivenessToken",
    "ManualScheduler",
    "guarded",
    # Options
    "EditorOptions",
    "SearchOptions",
    # Exceptions
    "LiveFindError",
    "MutationError",
    "ParsingError",
    "PositionError",
    "ValidationError",
]
