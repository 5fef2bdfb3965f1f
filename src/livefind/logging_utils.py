"""Logging helpers shared by the command line and the search sessions."""

from __future__ import annotations

import logging
import sys
from typing import Any, MutableMapping, Optional

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
PLAIN_FORMAT = "%(levelname)s: %(message)s"


def resolve_log_level(log_level: int | str) -> int:
    """Return the numeric level for a name such as ``"debug"``; unknown names fall back to INFO."""
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the ``livefind`` command.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    level = resolve_log_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        TRACE_FORMAT if trace_mode else PLAIN_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if log_file and len(handlers) > 1:
        root_logger.info("Logging to file: %s", log_file)

    return root_logger


class SessionLogAdapter(logging.LoggerAdapter):
    """Prefix log records with the search session they belong to.

    Several sessions can exist over the lifetime of one controller (one per
    document activation), and deferred callbacks may fire after a session was
    torn down. Tagging each line with ``session=<id>`` keeps those traces apart.
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        """Prepend the session identifier to the message."""
        extra = self.extra or {}
        return f"[session={extra.get('session_id', '?')}] {msg}", kwargs


def session_logger(name: str, session_id: int) -> SessionLogAdapter:
    """Return a logger adapter for ``name`` tagged with ``session_id``."""
    return SessionLogAdapter(logging.getLogger(name), {"session_id": session_id})
