"""Export analysis over top-level JavaScript and TypeScript declarations."""

from .declarations import EXPORTABLE_DECLARATIONS, Parser, Statement
from .errors import ExtractionError, MissingIdentifier, UnsupportedBindingPattern

__all__ = [
    "EXPORTABLE_DECLARATIONS",
    "ExtractionError",
    "MissingIdentifier",
    "Parser",
    "Statement",
    "UnsupportedBindingPattern",
]
