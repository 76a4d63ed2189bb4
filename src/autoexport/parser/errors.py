"""Exceptions raised while turning source text into a program AST."""

from __future__ import annotations

from typing import Optional


class ParseError(SyntaxError):
    """Raised when a document is not syntactically valid for its dialect."""

    def __init__(
        self,
        description: str,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
        source_name: str = "<input>",
    ):
        loc = ""
        if line is not None and column is not None:
            loc = f" (line {line}, column {column})"
        super().__init__(f"{description}{loc}")
        self.description = description
        self.line = line
        self.column = column
        self.source_name = source_name


__all__ = ["ParseError"]
