"""
TypeScript parsing backend built on tree-sitter.

tree-sitter produces a concrete syntax tree whose node names differ from the
Babel/ESTree vocabulary the analyzer speaks. `_ProgramBuilder` normalizes the
top-level statements of that tree into Babel-shaped dicts (`type`, `id`,
`declarations`, `declaration`, `specifiers`, ...). Only the fields the export
analysis relies on are materialized; statement bodies are not converted.

`loc` uses 1-based lines and 0-based character columns. `range` holds UTF-8
byte offsets.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import tree_sitter as ts
import tree_sitter_typescript as tsts

from .errors import ParseError
from .result import ParseResult, detect_source_type, encode_source, hash_source

logger = logging.getLogger(__name__)

TS_LANGUAGE = ts.Language(tsts.language_typescript())
TSX_LANGUAGE = ts.Language(tsts.language_tsx())

_SKIPPED_NODES = frozenset({"comment", "hash_bang_line", "html_comment"})

_parsers: Dict[bool, ts.Parser] = {}


def _get_parser(jsx: bool) -> ts.Parser:
    parser = _parsers.get(jsx)
    if parser is None:
        parser = ts.Parser(TSX_LANGUAGE if jsx else TS_LANGUAGE)
        _parsers[jsx] = parser
    return parser


def _camel(node_type: str) -> str:
    return "".join(part.capitalize() for part in node_type.split("_"))


def _tokens(node: ts.Node) -> List[str]:
    """Types of the anonymous (keyword / punctuation) children of `node`."""
    return [child.type for child in node.children if not child.is_named]


def _char_column(source: bytes, byte_offset: int, byte_column: int) -> int:
    """Convert a tree-sitter byte column into a character column."""
    line_start = byte_offset - byte_column
    return len(source[line_start:byte_offset].decode("utf-8", errors="replace"))


def _first_error(node: ts.Node) -> Optional[ts.Node]:
    if node.is_error or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return node


class _ProgramBuilder:
    """Convert a tree-sitter `program` node into a Babel-shaped Program dict."""

    def __init__(self, source: bytes, source_name: str):
        self.source = source
        self.source_name = source_name

    # ------------------------------------------------------------------ helpers

    def _text(self, node: ts.Node) -> str:
        return node.text.decode("utf-8")

    def _base(self, node: ts.Node, node_type: str) -> Dict[str, Any]:
        start_row, start_column = node.start_point
        end_row, end_column = node.end_point
        start_column = _char_column(self.source, node.start_byte, start_column)
        end_column = _char_column(self.source, node.end_byte, end_column)
        return {
            "type": node_type,
            "loc": {
                "start": {"line": start_row + 1, "column": start_column},
                "end": {"line": end_row + 1, "column": end_column},
            },
            "range": [node.start_byte, node.end_byte],
        }

    def _identifier(self, node: Optional[ts.Node]) -> Optional[Dict[str, Any]]:
        if node is None:
            return None
        if node.type == "string":
            literal = self._base(node, "StringLiteral")
            literal["value"] = self._text(node)[1:-1]
            return literal
        identifier = self._base(node, "Identifier")
        identifier["name"] = self._text(node)
        return identifier

    def _named(self, node: ts.Node, node_type: str, **extra: Any) -> Dict[str, Any]:
        result = self._base(node, node_type)
        result["id"] = self._identifier(node.child_by_field_name("name"))
        result.update(extra)
        return result

    def _pattern(self, node: Optional[ts.Node]) -> Optional[Dict[str, Any]]:
        if node is None:
            return None
        if node.type == "identifier":
            return self._identifier(node)
        return self._base(node, _camel(node.type))

    def _source(self, node: ts.Node) -> Optional[Dict[str, Any]]:
        return self._identifier(node.child_by_field_name("source"))

    # ------------------------------------------------------------------ program

    def program(self, root: ts.Node) -> Dict[str, Any]:
        program = self._base(root, "Program")
        program["body"] = [
            self.statement(child)
            for child in root.named_children
            if child.type not in _SKIPPED_NODES
        ]
        return program

    def statement(self, node: ts.Node) -> Dict[str, Any]:
        handler = getattr(self, f"_stmt_{node.type}", None)
        if handler is None:
            return self._base(node, _camel(node.type))
        return handler(node)

    # ----------------------------------------------------------- declarations

    def _stmt_function_declaration(self, node: ts.Node) -> Dict[str, Any]:
        return self._named(
            node,
            "FunctionDeclaration",
            generator=False,
            **{"async": "async" in _tokens(node)},
        )

    def _stmt_generator_function_declaration(self, node: ts.Node) -> Dict[str, Any]:
        return self._named(
            node,
            "FunctionDeclaration",
            generator=True,
            **{"async": "async" in _tokens(node)},
        )

    def _stmt_function_signature(self, node: ts.Node) -> Dict[str, Any]:
        return self._named(node, "TSDeclareFunction")

    def _stmt_class_declaration(self, node: ts.Node) -> Dict[str, Any]:
        return self._named(node, "ClassDeclaration", abstract=False)

    def _stmt_abstract_class_declaration(self, node: ts.Node) -> Dict[str, Any]:
        return self._named(node, "ClassDeclaration", abstract=True)

    def _stmt_interface_declaration(self, node: ts.Node) -> Dict[str, Any]:
        return self._named(node, "TSInterfaceDeclaration")

    def _stmt_type_alias_declaration(self, node: ts.Node) -> Dict[str, Any]:
        return self._named(node, "TSTypeAliasDeclaration")

    def _stmt_enum_declaration(self, node: ts.Node) -> Dict[str, Any]:
        return self._named(node, "TSEnumDeclaration", const="const" in _tokens(node))

    def _stmt_lexical_declaration(self, node: ts.Node) -> Dict[str, Any]:
        declaration = self._base(node, "VariableDeclaration")
        declaration["kind"] = self._text(node.children[0]) if node.children else "var"
        declarators = []
        for child in node.named_children:
            if child.type != "variable_declarator":
                continue
            declarator = self._base(child, "VariableDeclarator")
            declarator["id"] = self._pattern(child.child_by_field_name("name"))
            declarators.append(declarator)
        declaration["declarations"] = declarators
        return declaration

    _stmt_variable_declaration = _stmt_lexical_declaration

    def _stmt_module(self, node: ts.Node) -> Dict[str, Any]:
        return self._named(node, "TSModuleDeclaration")

    def _stmt_internal_module(self, node: ts.Node) -> Dict[str, Any]:
        return self._named(node, "TSModuleDeclaration")

    def _stmt_ambient_declaration(self, node: ts.Node) -> Dict[str, Any]:
        inner = next(
            (child for child in node.named_children if child.type not in _SKIPPED_NODES),
            None,
        )
        if inner is None:
            return self._base(node, "AmbientDeclaration")
        if "global" in _tokens(node):
            declaration = self._base(node, "TSModuleDeclaration")
            declaration["id"] = {**self._base(node, "Identifier"), "name": "global"}
            declaration["global"] = True
        elif "module" in _tokens(node):
            # `declare module.exports: T`
            declaration = self._base(node, "AmbientDeclaration")
        else:
            declaration = self.statement(inner)
            declaration.update(self._base(node, declaration["type"]))
        declaration["declare"] = True
        return declaration

    def _stmt_expression_statement(self, node: ts.Node) -> Dict[str, Any]:
        named = node.named_children
        if len(named) == 1 and named[0].type == "internal_module":
            return self._stmt_internal_module(named[0])
        return self._base(node, "ExpressionStatement")

    # ---------------------------------------------------------- module syntax

    def _stmt_import_statement(self, node: ts.Node) -> Dict[str, Any]:
        if any(child.type == "import_require_clause" for child in node.named_children):
            return self._base(node, "TSImportEqualsDeclaration")
        declaration = self._base(node, "ImportDeclaration")
        declaration["importKind"] = "type" if "type" in _tokens(node) else "value"
        declaration["source"] = self._source(node)
        return declaration

    def _stmt_import_alias(self, node: ts.Node) -> Dict[str, Any]:
        return self._base(node, "TSImportEqualsDeclaration")

    def _export_specifiers(self, clause: ts.Node) -> List[Dict[str, Any]]:
        specifiers = []
        for child in clause.named_children:
            if child.type != "export_specifier":
                continue
            name = child.child_by_field_name("name")
            alias = child.child_by_field_name("alias")
            specifier = self._base(child, "ExportSpecifier")
            specifier["local"] = self._identifier(name)
            specifier["exported"] = self._identifier(alias if alias is not None else name)
            specifier["exportKind"] = "type" if "type" in _tokens(child) else "value"
            specifiers.append(specifier)
        return specifiers

    def _stmt_export_statement(self, node: ts.Node) -> Dict[str, Any]:
        tokens = _tokens(node)
        declaration_node = node.child_by_field_name("declaration")
        clause = next(
            (child for child in node.named_children if child.type == "export_clause"),
            None,
        )
        namespace = next(
            (child for child in node.named_children if child.type == "namespace_export"),
            None,
        )

        if "default" in tokens:
            result = self._base(node, "ExportDefaultDeclaration")
            target = declaration_node or node.child_by_field_name("value")
            result["declaration"] = self.statement(target) if target is not None else None
            return result
        if "=" in tokens:
            return self._base(node, "TSExportAssignment")
        if "namespace" in tokens and clause is None and namespace is None:
            result = self._base(node, "TSNamespaceExportDeclaration")
            identifier = next(
                (child for child in node.named_children if child.type == "identifier"),
                None,
            )
            result["id"] = self._identifier(identifier)
            return result
        if "*" in tokens and namespace is None:
            result = self._base(node, "ExportAllDeclaration")
            result["source"] = self._source(node)
            return result

        result = self._base(node, "ExportNamedDeclaration")
        result["declaration"] = (
            self.statement(declaration_node) if declaration_node is not None else None
        )
        if namespace is not None:
            specifier = self._base(namespace, "ExportNamespaceSpecifier")
            exported = next(iter(namespace.named_children), None)
            specifier["exported"] = self._identifier(exported)
            result["specifiers"] = [specifier]
        elif clause is not None:
            result["specifiers"] = self._export_specifiers(clause)
        else:
            result["specifiers"] = []
        result["source"] = self._source(node)
        result["exportKind"] = "type" if "type" in tokens else "value"
        return result


def parse_typescript(
    source: str,
    *,
    source_name: str = "<input>",
    jsx: bool = False,
) -> ParseResult:
    """
    Parse TypeScript (or TSX when `jsx` is set) into a Babel-shaped program.

    tree-sitter only checks the grammar. Programs that are grammatical but
    rejected by a full ECMAScript parser (a top-level `return`, duplicate `let`
    bindings, `await` outside async code) parse without error.

    Raises:
        ParseError: If tree-sitter had to recover from any syntax error, or
            the text cannot be encoded as UTF-8 (lone surrogates).
    """
    encoded = encode_source(source, source_name)
    tree = _get_parser(jsx).parse(encoded)
    root = tree.root_node

    error_node = _first_error(root)
    if error_node is not None:
        row, column = error_node.start_point
        column = _char_column(encoded, error_node.start_byte, column)
        if error_node.is_missing:
            description = f"Missing {error_node.type}"
        else:
            snippet = error_node.text.decode("utf-8", errors="replace").split("\n", 1)[0]
            description = f"Unexpected token {snippet[:20]!r}" if snippet else "Unexpected token"
        raise ParseError(description, line=row + 1, column=column, source_name=source_name)

    program = _ProgramBuilder(encoded, source_name).program(root)
    logger.debug(
        "Parsed %s with tree-sitter (%d top-level statements)",
        source_name,
        len(program["body"]),
    )
    return ParseResult(
        ast=program,
        source_type=detect_source_type(program["body"]),
        dialect="typescript",
        source_hash=hash_source(source),
        source_name=source_name,
    )


__all__ = ["TS_LANGUAGE", "TSX_LANGUAGE", "parse_typescript"]
