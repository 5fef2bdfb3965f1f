#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the livefind library.

Constants are organized by category:
1. Type Definitions - Literal types shared by options and results
2. Search Defaults - Debounce windows, class names and reconcile mode
3. Editor Defaults - Host document model settings
4. Transaction Origins - Tags identifying who mutated a document
5. Command Line - Exit codes and format names
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

DecorationStyle = Literal["current", "normal"]
ReconcileMode = Literal["rescan", "remap"]
DocumentFormat = Literal["auto", "text", "ast-json"]

# =============================================================================
# Search Defaults
# =============================================================================

DEFAULT_CASE_SENSITIVE = False

# Coalesces query keystrokes; navigation is never debounced
DEFAULT_QUERY_DEBOUNCE_MS = 250
MAX_QUERY_DEBOUNCE_MS = 5000

# Delay before the acted-upon match is scrolled into view
DEFAULT_REVEAL_DELAY_MS = 0

DEFAULT_RECONCILE_MODE: ReconcileMode = "rescan"

DEFAULT_MATCH_CLASS = "search-result"
DEFAULT_CURRENT_MATCH_CLASS = "search-result-current"

NO_RESULTS_LABEL = "No results"

# =============================================================================
# Editor Defaults
# =============================================================================

# Upstream persistence debounce; a separate timer from the query debounce
DEFAULT_PUBLISH_DEBOUNCE_MS = 500
DEFAULT_HISTORY_LIMIT = 100

# =============================================================================
# Transaction Origins
# =============================================================================

INPUT_ORIGIN = "input"
SEARCH_ORIGIN = "search"
HISTORY_ORIGIN = "history"
SELECTION_ORIGIN = "selection"

# =============================================================================
# Command Line
# =============================================================================

EXIT_SUCCESS = 0
EXIT_NO_MATCHES = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3

CONFIG_ENV_VAR = "LIVEFIND_CONFIG"
