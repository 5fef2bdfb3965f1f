#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Implementations of the ``find`` and ``replace`` subcommands.

Both commands drive a ``SearchSession`` exactly like an editor panel would:
open a session on the loaded document, set the query, then navigate or
replace. Results go to stdout; summaries and errors go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from livefind.constants import EXIT_NO_MATCHES, EXIT_SUCCESS, EXIT_VALIDATION_ERROR, DocumentFormat
from livefind.documents import EditableDocument, FlatDocument, TreeDocument
from livefind.options import EditorOptions, SearchOptions
from livefind.search import MatchSpan, SearchSession

logger = logging.getLogger(__name__)

CONTEXT_WIDTH = 30


def resolve_format(path: Path, format_arg: DocumentFormat) -> DocumentFormat:
    """Return the concrete format for ``path``; ``auto`` picks ``ast-json`` for ``.json`` files."""
    if format_arg != "auto":
        return format_arg
    return "ast-json" if path.suffix.lower() == ".json" else "text"


def load_document(path: Path, format_arg: DocumentFormat, options: EditorOptions) -> EditableDocument:
    """Read ``path`` into a flat or tree document.

    Raises
    ------
    OSError
        If the file cannot be read
    ParsingError
        If an ``ast-json`` file is malformed
    ValidationError
        If an ``ast-json`` tree breaks the containment rules

    """
    content = path.read_text(encoding="utf-8")
    if resolve_format(path, format_arg) == "ast-json":
        return TreeDocument.from_json(content, options)
    return FlatDocument(content, options)


def match_context(document: EditableDocument, span: MatchSpan, width: int = CONTEXT_WIDTH) -> str:
    """Return the match with up to ``width`` characters of its text run on either side."""
    for run in document.text_runs():
        run_end = run.base + len(run.text)
        if run.base <= span.start and span.end <= run_end:
            start = max(span.start - run.base - width, 0)
            end = min(span.end - run.base + width, len(run.text))
            snippet = run.text[start:end].replace("\n", " ")
            prefix = "..." if start > 0 else ""
            suffix = "..." if end < len(run.text) else ""
            return f"{prefix}{snippet}{suffix}"
    return ""


def describe_matches(document: EditableDocument, session: SearchSession) -> list[dict[str, Any]]:
    """Return one JSON-ready record per match."""
    records = []
    for number, span in enumerate(session.results, start=1):
        record: dict[str, Any] = {
            "index": number,
            "start": span.start,
            "end": span.end,
            "text": document.text_between(span.start, span.end),
            "context": match_context(document, span),
        }
        if isinstance(document, FlatDocument):
            record["line"], record["column"] = document.line_column(span.start)
        records.append(record)
    return records


def check_rich_available() -> bool:
    """Return True if the optional ``rich`` package can be imported."""
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def _print_matches_plain(records: list[dict[str, Any]]) -> None:
    for record in records:
        location = f"[{record['start']}, {record['end']})"
        if "line" in record:
            location += f" {record['line']}:{record['column']}"
        print(f"{record['index']:>4}  {location}  {record['context']}")


def _print_matches_rich(records: list[dict[str, Any]], title: str) -> None:
    from rich.console import Console
    from rich.table import Table

    console = Console()
    table = Table(title=title)
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("Range", style="magenta", no_wrap=True)
    table.add_column("Line:Col", style="yellow", no_wrap=True)
    table.add_column("Context", style="white")

    for record in records:
        position = f"{record['line']}:{record['column']}" if "line" in record else ""
        table.add_row(str(record["index"]), f"[{record['start']}, {record['end']})", position, record["context"])
    console.print(table)


def _use_rich(args: argparse.Namespace) -> bool:
    if not getattr(args, "rich", False):
        return False
    if not check_rich_available():
        logger.warning("Rich output requires the optional 'rich' dependency. Install with: pip install livefind[rich]")
        return False
    return True


def run_find(args: argparse.Namespace, document: EditableDocument, options: SearchOptions) -> int:
    """List every match of ``args.query`` in the document.

    Returns
    -------
    int
        ``EXIT_SUCCESS`` when something matched, else ``EXIT_NO_MATCHES``

    """
    session = SearchSession(document, options)
    try:
        session.set_query(args.query)
        records = describe_matches(document, session)
        status = session.status
    finally:
        session.close()

    if args.json:
        print(json.dumps({"query": args.query, "match_count": status.match_count, "matches": records}, indent=2))
    elif not records:
        print(status.label or "No query", file=sys.stderr)
    elif _use_rich(args):
        _print_matches_rich(records, title=f"Matches for {args.query!r} in {args.path}")
    else:
        _print_matches_plain(records)

    return EXIT_SUCCESS if records else EXIT_NO_MATCHES


def _write_output(args: argparse.Namespace, content: str) -> None:
    target: Optional[Path] = None
    if args.in_place:
        target = Path(args.path)
    elif args.out:
        target = Path(args.out)

    if target is None:
        sys.stdout.write(content)
        if content and not content.endswith("\n"):
            sys.stdout.write("\n")
        return
    target.write_text(content, encoding="utf-8")
    logger.info("Wrote %s", target)


def run_replace(args: argparse.Namespace, document: EditableDocument, options: SearchOptions) -> int:
    """Replace all matches, or only the ``--nth`` one, and write the result.

    Returns
    -------
    int
        ``EXIT_SUCCESS``, ``EXIT_NO_MATCHES`` when the query matched
        nothing, or ``EXIT_VALIDATION_ERROR`` for an out-of-range ``--nth``

    """
    session = SearchSession(document, options)
    try:
        session.set_query(args.query)
        match_count = len(session.results)
        if match_count == 0:
            print("No results", file=sys.stderr)
            return EXIT_NO_MATCHES

        if args.nth is not None:
            if not 1 <= args.nth <= match_count:
                print(f"Error: --nth must be between 1 and {match_count}, got {args.nth}", file=sys.stderr)
                return EXIT_VALIDATION_ERROR
            for _ in range(args.nth - 1):
                session.next()
            replaced = 1 if session.replace_current(args.replacement) else 0
        else:
            replaced = session.replace_all(args.replacement)
    finally:
        session.close()

    noun = "match" if replaced == 1 else "matches"
    if args.dry_run:
        print(f"Would replace {replaced} {noun}", file=sys.stderr)
        return EXIT_SUCCESS

    _write_output(args, document.serialize())
    print(f"Replaced {replaced} {noun}", file=sys.stderr)
    return EXIT_SUCCESS
