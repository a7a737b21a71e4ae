"""Unit tests for core/pipeline.py"""

import json

import pytest

from doclayout.config import Settings
from doclayout.core.models import BlockType, LayoutPattern
from doclayout.core.parse import document_root, parse_html
from doclayout.core.pipeline import (
    analyze_document,
    build_layout,
    content_area,
    layout_section,
    run_analyze,
)


def test_analyze_document_requires_root():
    with pytest.raises(ValueError, match="root"):
        analyze_document(None)


def test_analyze_document_empty_tree():
    """An empty document is an empty analysis, not an error."""
    analysis = analyze_document(parse_html(""))
    assert analysis.sections == []
    assert analysis.total_blocks == 0
    assert analysis.suggested_page_breaks == []
    assert analysis.pattern == LayoutPattern.document


def test_analyze_document_accepts_full_tree():
    """Both a parsed tree and its body are accepted."""
    tree = parse_html("<html><body><h1>T</h1><p>one</p><p>two</p></body></html>")
    assert analyze_document(tree).total_blocks == 3
    assert analyze_document(document_root(tree)).total_blocks == 3


def test_analyze_document_sections_and_breaks(report_root):
    analysis = analyze_document(report_root)
    assert [s.title for s in analysis.sections] == ["Q4 Report", "Revenue", "Team"]
    assert analysis.suggested_page_breaks == [0, 1, 3]
    assert analysis.metadata.has_title


def test_analyze_document_smart_grouping(report_root):
    """Short sections merge into a single page under smart grouping."""
    analysis = analyze_document(report_root, Settings(smart_grouping=True))
    assert len(analysis.sections) == 1
    assert [b.id for b in analysis.blocks] == [f"block-{i}" for i in range(5)]


def test_content_area_subtracts_margins():
    area = content_area(Settings(slide_width=10, slide_height=5.625, slide_margin=0.5))
    assert (area.x, area.y) == (0.5, 0.5)
    assert area.width == pytest.approx(9.0)
    assert area.height == pytest.approx(4.625)


def test_layout_section_places_every_block(report_root):
    analysis = analyze_document(report_root)
    layout = layout_section(analysis.sections[1])
    assert [p.element_id for p in layout.placements] == [b.id for b in analysis.sections[1].blocks]
    assert layout.template.name == "comparison"
    assert layout.strategy == "even"


def test_layout_section_builds_chart_for_table(report_root):
    analysis = analyze_document(report_root)
    revenue = analysis.sections[1]
    table_block = next(b for b in revenue.blocks if b.type == BlockType.table)
    layout = layout_section(revenue)
    assert layout.charts[table_block.id].chart_type == "line"
    assert layout.charts[table_block.id].categories == ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]


def test_layout_section_no_charts_when_disabled(report_root):
    analysis = analyze_document(report_root)
    assert layout_section(analysis.sections[1], Settings(auto_charts=False)).charts == {}


def test_golden_falls_back_to_even(root_of):
    settings = Settings(distribution_strategy="golden")
    analysis = analyze_document(root_of("<h2>A</h2><p>one</p><p>two</p>"), settings)
    layout = layout_section(analysis.sections[0], settings)
    assert layout.strategy == "even"
    assert len(layout.placements) == 3


def test_golden_used_for_two_blocks(root_of):
    settings = Settings(distribution_strategy="golden")
    analysis = analyze_document(root_of("<h2>A</h2><p>one</p>"), settings)
    layout = layout_section(analysis.sections[0], settings)
    assert layout.strategy == "golden"
    assert layout.placements[0].rect.width == pytest.approx(9 / 1.618)


def test_grid_too_small_uses_square_grid(root_of):
    settings = Settings(distribution_strategy="grid", grid_rows=1, grid_cols=1)
    analysis = analyze_document(root_of("<h2>A</h2><p>one</p><p>two</p>"), settings)
    layout = layout_section(analysis.sections[0], settings)
    assert len(layout.placements) == 3


def test_build_layout_one_layout_per_section(report_root):
    layout = build_layout(report_root)
    assert [s.section_id for s in layout.sections] == [s.id for s in layout.analysis.sections]


def test_run_analyze_writes_layout_json(tmp_path):
    (tmp_path / "deck.md").write_text("# Deck\n\n## One\n\nHello there.\n")
    out_dir = tmp_path / "out"
    results = run_analyze(str(tmp_path / "deck.md"), Settings(), out_dir)
    assert results == [(tmp_path / "deck.md", out_dir / "deck.layout.json")]
    data = json.loads((out_dir / "deck.layout.json").read_text())
    assert data["slug"] == "deck"
    assert data["pattern"] == "presentation"


def test_run_analyze_wraps_failures(tmp_path):
    """A failing file is reported by name as a RuntimeError."""
    bad = tmp_path / "bad.md"
    bad.write_text("---\ntitle: [oops\n---\nbody\n")
    with pytest.raises(RuntimeError, match="Failed to analyze .*bad.md"):
        run_analyze(str(bad), Settings(), tmp_path / "out")


def test_wrapped_page_with_canvas_keeps_sections():
    """A page wrapper holding a canvas is analyzed section by section, not as one chart."""
    root = parse_html(
        "<body><div class='container'><h1>Sales Dashboard</h1><h2>North</h2><p>North grew.</p>"
        "<canvas id='c1'></canvas><h2>South</h2><p>South held.</p></div></body>"
    )
    layout = build_layout(root)
    assert len(layout.analysis.sections) == 3
    assert BlockType.chart not in [b.type for b in layout.analysis.blocks]
    assert layout.analysis.pattern != LayoutPattern.dashboard


def test_head_only_document_is_empty_analysis():
    """A file with only a <head> has no blocks; its <title> is not content."""
    analysis = analyze_document(parse_html("<html><head><title>Only a title</title></head></html>"))
    assert analysis.total_blocks == 0
    assert analysis.sections == []
