"""Configuration options for live search sessions and the host editor."""

from __future__ import annotations

from dataclasses import dataclass, field

from livefind.constants import (
    DEFAULT_CASE_SENSITIVE,
    DEFAULT_CURRENT_MATCH_CLASS,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_MATCH_CLASS,
    DEFAULT_PUBLISH_DEBOUNCE_MS,
    DEFAULT_QUERY_DEBOUNCE_MS,
    DEFAULT_RECONCILE_MODE,
    DEFAULT_REVEAL_DELAY_MS,
    MAX_QUERY_DEBOUNCE_MS,
    ReconcileMode,
)
from livefind.exceptions import ValidationError
from livefind.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class SearchOptions(CloneFrozenMixin):
    """Search configuration used by sessions, the find controller and the CLI."""

    case_sensitive: bool = field(
        default=DEFAULT_CASE_SENSITIVE,
        metadata={
            "help": "Match letter case exactly instead of ignoring it",
            "importance": "core",
        },
    )
    query_debounce_ms: int = field(
        default=DEFAULT_QUERY_DEBOUNCE_MS,
        metadata={
            "help": "Quiet period after the last query keystroke before the document is re-scanned",
            "type": int,
            "importance": "core",
        },
    )
    reveal_delay_ms: int = field(
        default=DEFAULT_REVEAL_DELAY_MS,
        metadata={
            "help": "Delay before the acted-upon match is scrolled into view",
            "type": int,
            "importance": "advanced",
        },
    )
    reconcile: ReconcileMode = field(
        default=DEFAULT_RECONCILE_MODE,
        metadata={
            "help": "How tree documents keep matches in sync with edits (rescan, remap)",
            "choices": ["rescan", "remap"],
            "importance": "advanced",
        },
    )
    match_class: str = field(
        default=DEFAULT_MATCH_CLASS,
        metadata={
            "help": "CSS class for ordinary match decorations",
            "importance": "advanced",
        },
    )
    current_match_class: str = field(
        default=DEFAULT_CURRENT_MATCH_CLASS,
        metadata={
            "help": "CSS class for the current match decoration",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and enumerated values.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        if not 0 <= self.query_debounce_ms <= MAX_QUERY_DEBOUNCE_MS:
            raise ValidationError(
                f"query_debounce_ms must be between 0 and {MAX_QUERY_DEBOUNCE_MS}, got {self.query_debounce_ms}",
                parameter_name="query_debounce_ms",
                parameter_value=self.query_debounce_ms,
            )
        if self.reveal_delay_ms < 0:
            raise ValidationError(
                f"reveal_delay_ms must be non-negative, got {self.reveal_delay_ms}",
                parameter_name="reveal_delay_ms",
                parameter_value=self.reveal_delay_ms,
            )
        if self.reconcile not in ("rescan", "remap"):
            raise ValidationError(
                f"reconcile must be 'rescan' or 'remap', got {self.reconcile!r}",
                parameter_name="reconcile",
                parameter_value=self.reconcile,
            )

    @property
    def query_debounce_seconds(self) -> float:
        """Return the query debounce window in seconds."""
        return self.query_debounce_ms / 1000.0

    @property
    def reveal_delay_seconds(self) -> float:
        """Return the reveal delay in seconds."""
        return self.reveal_delay_ms / 1000.0


@dataclass(frozen=True)
class EditorOptions(CloneFrozenMixin):
    """Settings for the host document models and content publishing."""

    publish_debounce_ms: int = field(
        default=DEFAULT_PUBLISH_DEBOUNCE_MS,
        metadata={
            "help": "Quiet period after the last edit before content is pushed to the document store",
            "type": int,
            "importance": "core",
        },
    )
    history_limit: int = field(
        default=DEFAULT_HISTORY_LIMIT,
        metadata={
            "help": "Maximum number of undoable transactions kept per document",
            "type": int,
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        if self.publish_debounce_ms <= 0:
            raise ValidationError(
                f"publish_debounce_ms must be positive, got {self.publish_debounce_ms}",
                parameter_name="publish_debounce_ms",
                parameter_value=self.publish_debounce_ms,
            )
        if self.history_limit < 1:
            raise ValidationError(
                f"history_limit must be at least 1, got {self.history_limit}",
                parameter_name="history_limit",
                parameter_value=self.history_limit,
            )

    @property
    def publish_debounce_seconds(self) -> float:
        """Return the publish debounce window in seconds."""
        return self.publish_debounce_ms / 1000.0
