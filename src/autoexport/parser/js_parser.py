"""
JavaScript parsing backend built on top of the Python `esprima` port.

esprima expects callers to choose between `parseModule` and `parseScript`.
Documents are parsed as modules first; when that fails (sloppy-mode scripts
using `with`, legacy octal literals and the like) the script grammar gets a
second attempt, which approximates an "unambiguous" source type.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

import esprima

from .errors import ParseError
from .result import ParseResult, detect_source_type, encode_source, hash_source

logger = logging.getLogger(__name__)

_LINE_PREFIX = re.compile(r"^Line \d+: ")


def _to_parse_error(exc: "esprima.Error", source_name: str) -> ParseError:
    description = _LINE_PREFIX.sub("", getattr(exc, "description", None) or str(exc))
    line: Optional[int] = getattr(exc, "lineNumber", None)
    column: Optional[int] = getattr(exc, "column", None)
    if column is not None:
        # esprima reports 1-based columns; Babel-style locations are 0-based.
        column = max(column - 1, 0)
    return ParseError(description, line=line, column=column, source_name=source_name)


def parse_javascript(source: str, *, source_name: str = "<input>") -> ParseResult:
    """
    Parse plain ECMAScript text into an ESTree program dict.

    Raises:
        ParseError: If neither the module nor the script grammar accepts the
            document, or the text is not encodable as UTF-8. The reported
            location is the module grammar's.
    """
    encode_source(source, source_name)
    options = dict(loc=True, range=True)
    try:
        ast = esprima.parseModule(source, **options)
    except esprima.Error as module_error:
        logger.debug("Module parse of %s failed, retrying as script", source_name)
        try:
            ast = esprima.parseScript(source, **options)
        except esprima.Error:
            raise _to_parse_error(module_error, source_name) from module_error

    raw_ast: Dict[str, Any] = ast.toDict() if hasattr(ast, "toDict") else ast
    body = raw_ast.get("body") or []
    return ParseResult(
        ast=raw_ast,
        source_type=detect_source_type(body),
        dialect="javascript",
        source_hash=hash_source(source),
        source_name=source_name,
    )


__all__ = ["parse_javascript"]
