import json
from pathlib import Path

import pytest

from autoexport.parser import ParseError, parse_source

CASES = Path(__file__).parent / "cases"


def _types(result):
    return [statement["type"] for statement in result.body]


def test_typescript_statements_use_babel_types():
    source = (CASES / "declarations.ts").read_text(encoding="utf-8")
    result = parse_source(source, source_name="declarations.ts")

    assert result.dialect == "typescript"
    assert result.source_type == "module"
    assert _types(result) == [
        "ImportDeclaration",
        "FunctionDeclaration",
        "VariableDeclaration",
        "ExportNamedDeclaration",
        "ClassDeclaration",
        "TSInterfaceDeclaration",
        "TSTypeAliasDeclaration",
        "TSEnumDeclaration",
        "TSEnumDeclaration",
        "ClassDeclaration",
        "TSModuleDeclaration",
        "ExportNamedDeclaration",
    ]


def test_typescript_variable_declaration_shape():
    result = parse_source("let a = 1, b, c: string;")
    (declaration,) = result.body

    assert declaration["kind"] == "let"
    assert [d["id"]["name"] for d in declaration["declarations"]] == ["a", "b", "c"]
    assert declaration["loc"]["start"] == {"line": 1, "column": 0}


def test_typescript_export_specifiers():
    result = parse_source("export { a, b as c };")
    (statement,) = result.body

    assert statement["type"] == "ExportNamedDeclaration"
    assert statement["declaration"] is None
    assert [s["local"]["name"] for s in statement["specifiers"]] == ["a", "b"]
    assert [s["exported"]["name"] for s in statement["specifiers"]] == ["a", "c"]


def test_typescript_inline_export_keeps_declaration():
    result = parse_source("export const c = 1;")
    (statement,) = result.body

    assert statement["specifiers"] == []
    assert statement["declaration"]["type"] == "VariableDeclaration"


@pytest.mark.parametrize(
    "source, expected",
    [
        ("export default function () {}", "ExportDefaultDeclaration"),
        ('export * from "./mod";', "ExportAllDeclaration"),
        ("export = value;", "TSExportAssignment"),
        ("export as namespace Lib;", "TSNamespaceExportDeclaration"),
    ],
)
def test_typescript_other_export_forms(source, expected):
    result = parse_source(source)
    assert _types(result) == [expected]


def test_typescript_ambient_declarations_are_flagged():
    source = (CASES / "ambient.d.ts").read_text(encoding="utf-8")
    result = parse_source(source)
    body = result.body

    assert body[0]["type"] == "TSDeclareFunction"
    assert body[0]["declare"] is True
    assert body[1]["type"] == "VariableDeclaration"
    assert body[1]["declare"] is True
    assert [s["type"] for s in body[7:10]] == ["TSModuleDeclaration"] * 3
    assert body[9]["global"] is True


def test_script_without_module_syntax():
    result = parse_source("const x = 1;\nfunction f() {}\n")
    assert result.source_type == "script"


def test_comments_are_not_statements():
    result = parse_source("// leading\n/* block */\nconst x = 1;\n")
    assert _types(result) == ["VariableDeclaration"]


def test_typescript_parse_error_location():
    with pytest.raises(ParseError) as excinfo:
        parse_source("const x = 1;\nfunction (", source_name="broken.ts")

    error = excinfo.value
    assert error.line == 2
    assert error.source_name == "broken.ts"
    assert "line 2" in str(error)


def test_tsx_component_parses():
    source = (CASES / "component.tsx").read_text(encoding="utf-8")
    result = parse_source(source, jsx=True)
    assert _types(result) == [
        "TSTypeAliasDeclaration",
        "FunctionDeclaration",
        "ExportNamedDeclaration",
    ]


def test_javascript_module_with_esprima():
    source = (CASES / "module.js").read_text(encoding="utf-8")
    result = parse_source(source, dialect="javascript")

    assert result.dialect == "javascript"
    assert result.source_type == "module"
    assert _types(result) == [
        "ImportDeclaration",
        "ExportNamedDeclaration",
        "VariableDeclaration",
        "ClassDeclaration",
        "ExportNamedDeclaration",
    ]


def test_javascript_falls_back_to_script_grammar():
    source = (CASES / "legacy_script.js").read_text(encoding="utf-8")
    result = parse_source(source, dialect="javascript")

    assert result.source_type == "script"
    assert _types(result) == ["VariableDeclaration", "FunctionDeclaration", "WithStatement"]


def test_javascript_parse_error():
    with pytest.raises(ParseError) as excinfo:
        parse_source("let = ;", dialect="javascript")
    assert excinfo.value.line == 1


def test_unknown_dialect():
    with pytest.raises(ValueError):
        parse_source("const x = 1;", dialect="coffeescript")


def test_parse_result_to_json_round_trips():
    result = parse_source("function f() {}", source_name="f.ts")
    payload = json.loads(result.to_json())

    assert payload["source_name"] == "f.ts"
    assert payload["source_hash"] == result.source_hash
    assert payload["ast"]["body"][0]["id"]["name"] == "f"


def test_typescript_backend_reads_modern_javascript():
    source = (CASES / "modern.js").read_text(encoding="utf-8")
    result = parse_source(source, source_name="modern.js")
    assert _types(result) == [
        "ClassDeclaration",
        "ExportNamedDeclaration",
        "VariableDeclaration",
    ]


def test_typescript_columns_count_characters():
    result = parse_source("const é = 1; function f() {}")
    assert result.body[1]["loc"]["start"] == {"line": 1, "column": 13}
    assert result.body[1]["range"][0] == 14


@pytest.mark.parametrize("dialect", ["typescript", "javascript"])
def test_unencodable_source_is_a_parse_error(dialect):
    with pytest.raises(ParseError) as excinfo:
        parse_source("const a = 1;\nconst x = '\ud800';", dialect=dialect)
    assert excinfo.value.line == 2
    assert excinfo.value.column == 11


def test_javascript_error_description_has_no_line_prefix():
    with pytest.raises(ParseError) as excinfo:
        parse_source("let = ;", dialect="javascript")
    assert not excinfo.value.description.startswith("Line ")


def test_typescript_checks_grammar_only():
    # Early errors such as a top-level `return` are not reported.
    result = parse_source("return 1;")
    assert _types(result) == ["ReturnStatement"]
