"""
Command-line interface for synthesizing named-export statements.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .analyzer import ExtractionError
from .emitter import EmitOptions, append_statement, render_named_export
from .frontend import run_frontend
from .parser import DIALECTS, ParseError

JSX_SUFFIXES = {".jsx", ".tsx"}


def _format_location(line: int | None, column: int | None) -> str:
    if line is None:
        return ""
    if column is None:
        return f":{line}"
    return f":{line}:{column}"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _resolve_dialect(args: argparse.Namespace) -> str:
    # tree-sitter also reads modern JavaScript; esprima only when asked for.
    return args.dialect or "typescript"


def scan_command(args: argparse.Namespace) -> int:
    input_path = Path(args.input).resolve()
    if not input_path.exists():
        sys.stderr.write(f"ERROR: Input file not found: {input_path}\n")
        return 1

    try:
        source = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        sys.stderr.write(f"ERROR: Failed to read {input_path}: {exc}\n")
        return 1

    emit_options = EmitOptions(semicolon=args.semicolon)
    try:
        result = run_frontend(
            source,
            source_name=str(input_path),
            dialect=_resolve_dialect(args),
            jsx=args.jsx or input_path.suffix in JSX_SUFFIXES,
            cache_dir=args.cache_dir,
            emit_options=emit_options,
        )
    except ParseError as exc:
        loc = _format_location(exc.line, exc.column)
        sys.stderr.write(f"ERROR {input_path}{loc}: {exc.description}\n")
        return 1
    except ExtractionError as exc:
        sys.stderr.write(f"ERROR {input_path}: {exc}\n")
        return 1

    names = result.exportable_names if args.all else result.missing_names
    if not names:
        sys.stderr.write(f"INFO {input_path}: nothing to export\n")
        return 0

    statement = render_named_export(names, emit_options)
    if args.write:
        append_statement(input_path, statement)
        sys.stderr.write(f"INFO {input_path}: appended {statement}\n")
    else:
        sys.stdout.write(statement + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autoexport",
        description="Generate an export statement for top-level declarations",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log parsing and analysis details to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    scan_parser = subparsers.add_parser(
        "scan", help="Print an export statement for unexported declarations"
    )
    scan_parser.add_argument("input", help="Path to the JavaScript or TypeScript file")
    scan_parser.add_argument(
        "--dialect",
        choices=DIALECTS,
        help="Source dialect (defaults to typescript, which also reads modern JavaScript)",
    )
    scan_parser.add_argument(
        "--jsx",
        action="store_true",
        help="Enable JSX syntax (implied for .jsx and .tsx files).",
    )
    scan_parser.add_argument(
        "--all",
        action="store_true",
        help="Include names an existing export list already covers.",
    )
    scan_parser.add_argument(
        "--semicolon",
        action="store_true",
        help="Terminate the generated statement with a semicolon.",
    )
    scan_parser.add_argument(
        "--write",
        action="store_true",
        help="Append the statement to the input file instead of printing it.",
    )
    scan_parser.add_argument(
        "--cache-dir",
        help="Directory to store the parsed program as JSON.",
    )
    scan_parser.set_defaults(func=scan_command)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
