from autoexport.emitter import EmitOptions, append_statement, render_named_export


def test_render_defaults_match_bare_statement():
    assert render_named_export(["a", "b"]) == "export { a, b }"


def test_render_empty_list_keeps_both_spaces():
    assert render_named_export([]) == "export {  }"


def test_render_with_terminators():
    options = EmitOptions(semicolon=True, trailing_newline=True)
    assert render_named_export(["a"], options) == "export { a };\n"


def test_append_adds_separating_newline(tmp_path):
    target = tmp_path / "mod.ts"
    target.write_text("const a = 1;", encoding="utf-8")

    append_statement(target, "export { a };")

    assert target.read_text(encoding="utf-8") == "const a = 1;\nexport { a };\n"


def test_append_to_file_ending_with_newline(tmp_path):
    target = tmp_path / "mod.ts"
    target.write_text("const a = 1;\n", encoding="utf-8")

    append_statement(target, "export { a }\n")

    assert target.read_text(encoding="utf-8") == "const a = 1;\nexport { a }\n"
