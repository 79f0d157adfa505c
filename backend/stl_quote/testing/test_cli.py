# testing/test_cli.py

import json

from typer.testing import CliRunner

from stl_quote.main_cli import app

runner = CliRunner()

def test_cli_analyze_prints_summary(cube_stl_file):
    result = runner.invoke(app, ["analyze", str(cube_stl_file)])
    assert result.exit_code == 0, result.output
    assert "Binary" in result.output
    assert "12 facets" in result.output

def test_cli_analyze_writes_json(cube_stl_file, tmp_path):
    out = tmp_path / "reports" / "cube.json"
    result = runner.invoke(app, ["analyze", str(cube_stl_file), "--output", str(out)])
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text())
    assert data["metadata"] == {"fileFormat": "Binary", "facetCount": 12}
    assert data["material"]["estimatedCostINR"] == 3.1

def test_cli_analyze_truncated_file_fails(tmp_path, cube_binary_stl):
    path = tmp_path / "broken.stl"
    path.write_bytes(cube_binary_stl[:120])
    result = runner.invoke(app, ["analyze", str(path)])
    assert result.exit_code == 1
    assert "MalformedInput" in result.output

def test_cli_analyze_strict_flag(tmp_path):
    path = tmp_path / "bad.stl"
    path.write_text("solid bad\nfacet normal 0 0 1 outer loop vertex 0 0 0 vertex 1 0 0 endloop endfacet\nendsolid bad\n")
    assert runner.invoke(app, ["analyze", str(path)]).exit_code == 0
    assert runner.invoke(app, ["analyze", str(path), "--strict"]).exit_code == 1

def test_cli_price_faculty():
    result = runner.invoke(app, ["price", "100", "--category", "faculty"])
    assert result.exit_code == 0, result.output
    assert "184.80" in result.output
    assert "185" in result.output

def test_cli_price_defaults_to_guest():
    result = runner.invoke(app, ["price", "100"])
    assert result.exit_code == 0, result.output
    assert "guest" in result.output

def test_cli_price_unknown_category_fails():
    result = runner.invoke(app, ["price", "100", "-c", "admin"])
    assert result.exit_code == 1
    assert "ValidationError" in result.output

def test_cli_rates_lists_categories():
    result = runner.invoke(app, ["rates"])
    assert result.exit_code == 0
    for category in ("student", "faculty", "guest"):
        assert category in result.output

def test_cli_price_negative_grams_reports_validation_error():
    result = runner.invoke(app, ["price", "-5", "--category", "guest"])
    assert result.exit_code == 1
    assert "ValidationError" in result.output
