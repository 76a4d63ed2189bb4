"""
Front-end integration utilities stitching together parsing and export analysis.

The `run_frontend` function accepts raw source text, builds a `Parser` for it,
collects the exportable names and the names already re-exported, and renders
the statement that would export the rest. Parse artefacts can be cached to
disk for inspection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from ..analyzer import Parser
from ..emitter import EmitOptions, render_named_export
from ..parser import ParseResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrontEndResult:
    """Combined output from the parsing and export analysis pipeline."""

    parse: ParseResult
    exportable_names: List[str]
    exported_names: List[str]
    missing_names: List[str]
    statement: Optional[str]

    @property
    def has_missing(self) -> bool:
        return bool(self.missing_names)


def run_frontend(
    source: str,
    *,
    source_name: str = "<input>",
    dialect: str = "typescript",
    jsx: bool = False,
    cache_dir: Optional[Union[str, Path]] = None,
    emit_options: Optional[EmitOptions] = None,
) -> FrontEndResult:
    """
    Parse `source` and work out which top-level declarations still need exporting.

    Args:
        source: Raw JavaScript or TypeScript source text.
        source_name: Identifier used in diagnostics, e.g. file path.
        dialect: `"typescript"` or `"javascript"`, forwarded to the parser.
        jsx: Enable JSX syntax in the TypeScript dialect.
        cache_dir: Optional directory to write parse artefacts (`None` disables).
        emit_options: Formatting of the rendered statement.

    Returns:
        FrontEndResult with the names involved and the statement exporting the
        missing ones (`None` when every exportable name is already exported).

    Raises:
        ParseError: If the source is not valid for the dialect.
        ExtractionError: If a declaration's names cannot be extracted.
    """
    parser = Parser(source, source_name=source_name, dialect=dialect, jsx=jsx)

    exportable_names = parser.get_variables_name(parser.get_exportable_statements())
    exported_names = parser.get_named_exported_variables()
    missing_names = parser.get_unexported_names()

    statement: Optional[str] = None
    if missing_names:
        statement = render_named_export(missing_names, emit_options)

    if cache_dir is not None:
        _persist_parse(cache_dir, parser.parse_result)

    return FrontEndResult(
        parse=parser.parse_result,
        exportable_names=exportable_names,
        exported_names=exported_names,
        missing_names=missing_names,
        statement=statement,
    )


def _persist_parse(cache_dir: Union[str, Path], parse_result: ParseResult) -> None:
    """Store the raw parse output to disk for reuse in subsequent runs."""
    path = Path(cache_dir)
    path.mkdir(parents=True, exist_ok=True)
    cache_file = path / f"{parse_result.source_hash}.json"
    cache_file.write_text(parse_result.to_json(), encoding="utf-8")
    logger.debug("Cached parse of %s at %s", parse_result.source_name, cache_file)


__all__ = ["FrontEndResult", "run_frontend"]
