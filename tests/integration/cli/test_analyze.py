"""Integration tests for the analyze and blocks commands"""

import json

from typer.testing import CliRunner

from doclayout.cli.cli import app


runner = CliRunner()

REPORT_MD = """\
# Q4 Report

## Revenue

| Month | Revenue |
|-------|---------|
| Jan   | 100     |
| Feb   | 120     |
| Mar   | 135     |

## Team

- Alice
- Bob
"""


def test_analyze_cmd_writes_layout(tmp_path):
    """analyze writes one layout JSON per document."""
    (tmp_path / "report.md").write_text(REPORT_MD)
    result = runner.invoke(app, ["analyze", "report.md", "--out-dir", str(tmp_path / "dist")])

    assert result.exit_code == 0, result.output
    out_file = tmp_path / "dist" / "report.layout.json"
    assert out_file.exists()
    data = json.loads(out_file.read_text())
    assert data["slide_plan"][1]["layout_hint"] == "data-viz"
    assert "Analyzed 1 document(s)" in result.output


def test_analyze_cmd_no_charts(tmp_path):
    (tmp_path / "report.md").write_text(REPORT_MD)
    result = runner.invoke(app, ["analyze", "report.md", "--no-charts"])
    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / "layouts" / "report.layout.json").read_text())
    assert all(b["chart"] is None for s in data["slide_plan"] for b in s["blocks"])


def test_analyze_cmd_smart_grouping(tmp_path):
    (tmp_path / "report.md").write_text(REPORT_MD)
    result = runner.invoke(app, ["analyze", "report.md", "--smart-grouping", "--smart-page-breaks"])
    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / "layouts" / "report.layout.json").read_text())
    assert len(data["slide_plan"]) == 1


def test_analyze_cmd_directory(tmp_path):
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "a.md").write_text("# A\n\ntext\n")
    (docs / "b.html").write_text("<h1>B</h1><p>text</p>")
    result = runner.invoke(app, ["analyze", "docs", "--strategy", "masonry"])
    assert result.exit_code == 0, result.output
    assert {p.name for p in (tmp_path / "layouts").iterdir()} == {"a.layout.json", "b.layout.json"}


def test_analyze_cmd_invalid_strategy(tmp_path):
    """An unknown strategy is a configuration error with exit code 1."""
    (tmp_path / "report.md").write_text(REPORT_MD)
    result = runner.invoke(app, ["analyze", "report.md", "--strategy", "spiral"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_analyze_cmd_no_files(tmp_path):
    result = runner.invoke(app, ["analyze", str(tmp_path)])
    assert result.exit_code == 1
    assert "No HTML or Markdown files" in result.output


def test_analyze_cmd_bad_frontmatter(tmp_path):
    (tmp_path / "bad.md").write_text("---\ntitle: [oops\n---\nbody\n")
    result = runner.invoke(app, ["analyze", "bad.md"])
    assert result.exit_code == 1
    assert "Failed to analyze" in result.output


def test_blocks_cmd_lists_blocks(tmp_path):
    (tmp_path / "report.md").write_text(REPORT_MD)
    result = runner.invoke(app, ["blocks", "report.md"])
    assert result.exit_code == 0, result.output
    assert "title" in result.output
    assert "Q4 Report" in result.output
    assert "table" in result.output
