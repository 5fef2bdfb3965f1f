"""Command-line interface for livefind.

Run literal find and replace over plain-text files or ``ast-json`` document
trees with the same engine an editor's find bar uses.

Examples
--------
List matches with line and column::

    $ livefind find notes.txt cat

Machine-readable output::

    $ livefind find notes.txt cat --json

Replace every match and write the result back::

    $ livefind replace notes.txt cat dog --in-place

Replace only the second match of a document tree::

    $ livefind replace doc.json cat dog --nth 2 --out doc-edited.json

Exit codes: 0 success, 1 no matches, 2 usage or validation error,
3 file or parse error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from livefind import __version__
from livefind.cli.commands import load_document, run_find, run_replace
from livefind.cli.config import env_config_path, load_config_with_priority, options_from_config
from livefind.constants import EXIT_FILE_ERROR, EXIT_VALIDATION_ERROR
from livefind.exceptions import ParsingError, ValidationError
from livefind.logging_utils import configure_logging

logger = logging.getLogger(__name__)

__all__ = ["create_parser", "main"]


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def _common_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("path", help="File to search (plain text, or an ast-json document tree)")
    common.add_argument("query", help="Literal text to find; regex metacharacters have no special meaning")
    common.add_argument("--case-sensitive", action="store_true", help="Match letter case exactly")
    common.add_argument(
        "--format",
        choices=["auto", "text", "ast-json"],
        default="auto",
        help="Input format (default: auto, which reads .json files as ast-json)",
    )

    config_group = common.add_argument_group("configuration")
    config_group.add_argument("--config", help="Configuration file (.toml, .yaml, .json or pyproject.toml)")
    config_group.add_argument("--no-config", action="store_true", help="Ignore configuration files")

    logging_group = common.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log messages to this file")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    return common


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the ``find`` and ``replace`` subcommands."""
    parser = argparse.ArgumentParser(
        prog="livefind",
        description="Literal find and replace over plain text and structured documents.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)
    common = _common_parser()

    find_parser = subparsers.add_parser("find", parents=[common], help="List matches")
    find_parser.add_argument("--json", action="store_true", help="Print matches as JSON")
    find_parser.add_argument("--rich", action="store_true", help="Print matches as a table (needs livefind[rich])")

    replace_parser = subparsers.add_parser("replace", parents=[common], help="Replace matches")
    replace_parser.add_argument("replacement", help="Replacement text")
    which = replace_parser.add_mutually_exclusive_group()
    which.add_argument("--all", action="store_true", help="Replace every match; same as giving neither --all nor --nth")
    which.add_argument("--nth", type=_positive_int, metavar="N", help="Replace only the N-th match (1-based)")
    target = replace_parser.add_mutually_exclusive_group()
    target.add_argument("--out", metavar="FILE", help="Write the result to FILE instead of stdout")
    target.add_argument("--in-place", action="store_true", help="Overwrite the input file")
    replace_parser.add_argument("--dry-run", action="store_true", help="Report the count without writing anything")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    log_level = logging.DEBUG if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def main(args: Optional[list[str]] = None) -> int:
    """Execute the CLI and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        if parsed_args.no_config:
            config = {}
        else:
            config = load_config_with_priority(parsed_args.config, env_config_path())
        search_options, editor_options = options_from_config(config)
    except ParsingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    if parsed_args.case_sensitive:
        search_options = search_options.create_updated(case_sensitive=True)

    path = Path(parsed_args.path)
    try:
        document = load_document(path, parsed_args.format, editor_options)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {path}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except ParsingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    logger.debug("Loaded %s as %s document (size %d)", path, document.substrate, document.size)

    if parsed_args.command == "find":
        return run_find(parsed_args, document, search_options)

    try:
        return run_replace(parsed_args, document, search_options)
    except OSError as e:
        print(f"Error: cannot write output: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR


if __name__ == "__main__":
    sys.exit(main())
