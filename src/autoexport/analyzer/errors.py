"""Errors raised when a declaration does not have the shape name extraction expects."""

from __future__ import annotations

from typing import Any, Dict, Optional


def format_location(node: Optional[Dict[str, Any]]) -> str:
    if not node or not isinstance(node, dict):
        return ""
    loc_meta = node.get("loc") or {}
    start = loc_meta.get("start") or {}
    line = start.get("line")
    column = start.get("column")
    if line is None or column is None:
        return ""
    return f" (line {line}, column {column})"


class ExtractionError(RuntimeError):
    """Raised when bound names cannot be derived from a declaration node."""

    def __init__(self, message: str, node: Optional[Dict[str, Any]] = None):
        super().__init__(f"{message}{format_location(node)}")
        self.node = node


class UnsupportedBindingPattern(ExtractionError):
    """A variable binding uses a destructuring pattern instead of an identifier."""


class MissingIdentifier(ExtractionError):
    """A declaration has no `id` to take its name from."""


__all__ = [
    "ExtractionError",
    "MissingIdentifier",
    "UnsupportedBindingPattern",
    "format_location",
]
