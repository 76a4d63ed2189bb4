import json
from pathlib import Path

import pytest

from autoexport import EmitOptions, ParseError, UnsupportedBindingPattern, run_frontend

CASES = Path(__file__).parent / "cases"


def _run(name: str, **kwargs):
    source = (CASES / name).read_text(encoding="utf-8")
    return run_frontend(source, source_name=name, **kwargs)


def test_frontend_reports_missing_names():
    result = _run("declarations.ts")

    assert result.exported_names == ["greet", "first"]
    assert result.missing_names[:2] == ["second", "third"]
    assert result.has_missing
    assert result.statement == (
        "export { second, third, Counter, Shape, Point, Color, Direction, Base }"
    )


def test_frontend_nothing_missing():
    result = run_frontend("const a = 1;\nexport { a };\n")

    assert result.exportable_names == ["a"]
    assert not result.has_missing
    assert result.statement is None


def test_frontend_emit_options():
    result = run_frontend("const a = 1;", emit_options=EmitOptions(semicolon=True))
    assert result.statement == "export { a };"


def test_frontend_javascript_dialect():
    result = _run("legacy_script.js", dialect="javascript")

    assert result.parse.source_type == "script"
    assert result.statement == "export { total, add }"


def test_frontend_tsx():
    result = _run("component.tsx", jsx=True)
    assert result.missing_names == ["Props"]


def test_frontend_writes_parse_cache(tmp_path):
    result = _run("module.js", dialect="javascript", cache_dir=tmp_path / "cache")

    cache_file = tmp_path / "cache" / f"{result.parse.source_hash}.json"
    assert cache_file.exists()
    payload = json.loads(cache_file.read_text(encoding="utf-8"))
    assert payload["dialect"] == "javascript"
    assert payload["source_name"] == "module.js"


def test_frontend_propagates_errors():
    with pytest.raises(ParseError):
        run_frontend("class {")
    with pytest.raises(UnsupportedBindingPattern):
        _run("destructuring.ts")
