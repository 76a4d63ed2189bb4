"""Parse result container shared by the parsing backends."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .errors import ParseError

MODULE_STATEMENT_TYPES = frozenset(
    {
        "ImportDeclaration",
        "TSImportEqualsDeclaration",
        "ExportNamedDeclaration",
        "ExportDefaultDeclaration",
        "ExportAllDeclaration",
        "TSExportAssignment",
        "TSNamespaceExportDeclaration",
    }
)


@dataclass(frozen=True)
class ParseResult:
    """Program AST produced by a backend plus metadata about the parse run."""

    ast: Dict[str, Any]
    source_type: str
    dialect: str
    source_hash: str
    source_name: str

    @property
    def body(self) -> Tuple[Dict[str, Any], ...]:
        """Top-level statements in source order."""
        return tuple(self.ast.get("body", ()))

    def to_json(self) -> str:
        """Serialise the parse result to JSON for debugging or caching."""
        payload = {
            "ast": self.ast,
            "source_type": self.source_type,
            "dialect": self.dialect,
            "source_hash": self.source_hash,
            "source_name": self.source_name,
        }
        return json.dumps(payload, ensure_ascii=False, indent=2)


def hash_source(source: str) -> str:
    """Create a deterministic hash for cache keying."""
    return hashlib.sha256(source.encode("utf-8")).hexdigest()


def encode_source(source: str, source_name: str = "<input>") -> bytes:
    """UTF-8 encode `source`, reporting unencodable characters as a `ParseError`."""
    try:
        return source.encode("utf-8")
    except UnicodeEncodeError as exc:
        line = source.count("\n", 0, exc.start) + 1
        column = exc.start - (source.rfind("\n", 0, exc.start) + 1)
        raise ParseError(
            f"Invalid character {source[exc.start]!r}: {exc.reason}",
            line=line,
            column=column,
            source_name=source_name,
        ) from exc


def detect_source_type(body) -> str:
    """Classify a program as a module when it imports or exports anything."""
    for statement in body:
        if statement.get("type") in MODULE_STATEMENT_TYPES:
            return "module"
    return "script"


__all__ = ["ParseResult", "detect_source_type", "encode_source", "hash_source"]
