"""Interfaces for parsing JavaScript and TypeScript source code."""

from .errors import ParseError
from .result import ParseResult
from .source import DIALECTS, parse_source

__all__ = ["DIALECTS", "ParseError", "ParseResult", "parse_source"]
