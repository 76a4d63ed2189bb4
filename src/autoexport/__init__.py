"""Find exportable top-level declarations and synthesize `export { ... }` statements."""

from .analyzer import (
    EXPORTABLE_DECLARATIONS,
    ExtractionError,
    MissingIdentifier,
    Parser,
    UnsupportedBindingPattern,
)
from .emitter import EmitOptions, render_named_export
from .frontend import FrontEndResult, run_frontend
from .parser import ParseError, ParseResult, parse_source

__all__ = [
    "EXPORTABLE_DECLARATIONS",
    "EmitOptions",
    "ExtractionError",
    "FrontEndResult",
    "MissingIdentifier",
    "ParseError",
    "ParseResult",
    "Parser",
    "UnsupportedBindingPattern",
    "parse_source",
    "render_named_export",
    "run_frontend",
]
