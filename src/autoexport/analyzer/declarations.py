"""
Classification of exportable top-level declarations.

`Parser` parses a document once and answers questions about its top-level
statements: which declarations could be exported by name, which names an
existing `export { ... }` list already re-exports, and what statement would
export a given list of names. Statements are Babel/ESTree-shaped dicts, so the
same logic serves both parsing dialects.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

from ..emitter import render_named_export
from ..parser import ParseResult, parse_source
from .errors import MissingIdentifier, UnsupportedBindingPattern

logger = logging.getLogger(__name__)

Statement = Dict[str, Any]

# Declaration tags from Babel's Flow and TypeScript plugins. Module
# declarations (TSModuleDeclaration, DeclareModule, DeclareExportDeclaration,
# DeclareExportAllDeclaration, DeclareModuleExports) are deliberately absent.
EXPORTABLE_DECLARATIONS = frozenset(
    {
        "FunctionDeclaration",
        "VariableDeclaration",
        "ClassDeclaration",
        "DeclareClass",
        "DeclareFunction",
        "DeclareInterface",
        "DeclareTypeAlias",
        "DeclareOpaqueType",
        "DeclareVariable",
        "InterfaceDeclaration",
        "OpaqueType",
        "TypeAlias",
        "EnumDeclaration",
        "TSDeclareFunction",
        "TSInterfaceDeclaration",
        "TSTypeAliasDeclaration",
        "TSEnumDeclaration",
    }
)


def _unique(names: Iterable[str]) -> List[str]:
    seen = set()
    result: List[str] = []
    for name in names:
        if name not in seen:
            seen.add(name)
            result.append(name)
    return result


class Parser:
    """Parses a document as an entire program and inspects its exports."""

    exportable_declarations = EXPORTABLE_DECLARATIONS

    def __init__(
        self,
        document: str,
        *,
        source_name: str = "<input>",
        dialect: str = "typescript",
        jsx: bool = False,
    ):
        self._document = document
        self._parse = parse_source(
            document, source_name=source_name, dialect=dialect, jsx=jsx
        )
        self._statements: Tuple[Statement, ...] = self._parse.body

    @property
    def parse_result(self) -> ParseResult:
        return self._parse

    @property
    def statements(self) -> Tuple[Statement, ...]:
        return self._statements

    @property
    def source_type(self) -> str:
        return self._parse.source_type

    # ------------------------------------------------------------- extraction

    def _bound_names(self, node: Statement) -> List[str]:
        if node.get("type") == "VariableDeclaration":
            names = []
            for declarator in node.get("declarations") or []:
                pattern = declarator.get("id") or {}
                if pattern.get("type") != "Identifier":
                    raise UnsupportedBindingPattern(
                        f"Unsupported binding pattern: {pattern.get('type')}",
                        declarator,
                    )
                names.append(pattern["name"])
            return names

        identifier = node.get("id")
        if not isinstance(identifier, dict) or identifier.get("name") is None:
            raise MissingIdentifier(
                f"{node.get('type')} has no identifier.", node
            )
        return [identifier["name"]]

    def get_variable_name(self, node: Statement) -> Union[str, List[str]]:
        """
        Find the name(s) bound by `node`.

        A `VariableDeclaration` yields one name per declarator, in order, as a
        list. Any other declaration yields the single name of its `id`.

        Raises:
            UnsupportedBindingPattern: A declarator destructures its value.
            MissingIdentifier: A non-variable declaration has no `id`.
        """
        names = self._bound_names(node)
        if node.get("type") == "VariableDeclaration":
            return names
        return names[0]

    def get_variables_name(self, nodes: Sequence[Statement]) -> List[str]:
        """Names bound by `nodes`, flattened, first occurrence wins."""
        return _unique(name for node in nodes for name in self._bound_names(node))

    # ---------------------------------------------------------- classification

    def get_exportable_statements(self) -> List[Statement]:
        """Top-level declarations whose type is on the exportable allow-list."""
        exportable = [
            statement
            for statement in self._statements
            if statement.get("type") in self.exportable_declarations
        ]
        logger.debug(
            "%d of %d top-level statements are exportable",
            len(exportable),
            len(self._statements),
        )
        return exportable

    def get_export_named_declarations(self) -> List[Statement]:
        """Bare `export { a, b }` statements; inline `export const` is excluded."""
        return [
            statement
            for statement in self._statements
            if statement.get("type") == "ExportNamedDeclaration"
            and statement.get("declaration") is None
            and statement.get("specifiers")
        ]

    def get_named_exported_variables(self) -> List[str]:
        """Local names re-exported by the bare `export { ... }` statements."""
        names = []
        for statement in self.get_export_named_declarations():
            for specifier in statement.get("specifiers") or []:
                local = specifier.get("local") or {}
                if local.get("type") == "Identifier":
                    names.append(local["name"])
        return _unique(names)

    def get_unexported_names(self) -> List[str]:
        """Exportable names that no `export { ... }` list mentions yet."""
        exported = set(self.get_named_exported_variables())
        names = self.get_variables_name(self.get_exportable_statements())
        return [name for name in names if name not in exported]

    # --------------------------------------------------------------- synthesis

    def get_named_export_statement(self, names: Sequence[str]) -> str:
        """`export { n1, n2 }` for `names` in the given order."""
        return render_named_export(names)


__all__ = ["EXPORTABLE_DECLARATIONS", "Parser", "Statement"]
