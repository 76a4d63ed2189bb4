"""
Dialect dispatch for turning a source document into a program AST.

`parse_source` is the single ingestion entry point. Both backends return the
same `ParseResult` shape so callers never branch on the dialect.
"""

from __future__ import annotations

import logging

from .js_parser import parse_javascript
from .result import ParseResult
from .ts_parser import parse_typescript

logger = logging.getLogger(__name__)

DIALECTS = ("typescript", "javascript")


def parse_source(
    source: str,
    *,
    source_name: str = "<input>",
    dialect: str = "typescript",
    jsx: bool = False,
) -> ParseResult:
    """
    Parse a JavaScript-family document.

    Args:
        source: Raw source text.
        source_name: Label used in diagnostics (defaults to `<input>`).
        dialect: `"typescript"` (tree-sitter, understands type annotations) or
            `"javascript"` (esprima, plain ECMAScript).
        jsx: Enable JSX syntax; only honoured by the TypeScript dialect.

    Raises:
        ParseError: If the document is not valid in the requested dialect.
        ValueError: If `dialect` is unknown.
    """
    if dialect not in DIALECTS:
        raise ValueError(f"Unknown dialect {dialect!r}; expected one of {DIALECTS}")
    logger.debug("Parsing %s as %s", source_name, dialect)
    if dialect == "javascript":
        return parse_javascript(source, source_name=source_name)
    return parse_typescript(source, source_name=source_name, jsx=jsx)


__all__ = ["DIALECTS", "parse_source"]
