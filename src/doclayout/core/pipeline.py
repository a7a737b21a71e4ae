"""Pipeline step functions: analyze, lay out and write orchestration"""

import logging
from pathlib import Path

from doclayout.config import Settings
from doclayout.core.detect.genre import detect_genre, document_metadata
from doclayout.core.detect.templates import match_template
from doclayout.core.export import write_layout
from doclayout.core.extract.blocks import classify_blocks
from doclayout.core.extract.sections import apply_smart_grouping, group_sections, page_breaks
from doclayout.core.layout.charts import chart_for_table
from doclayout.core.layout.distribute import distribute
from doclayout.core.models import (
    BlockType,
    ChartSpec,
    DocumentLayout,
    LayoutAnalysis,
    LayoutElement,
    Rect,
    Section,
    SectionLayout,
)
from doclayout.core.parse import discover_files, document_root, parse_file


logger = logging.getLogger(__name__)


def analyze_document(root, settings: Settings = None) -> LayoutAnalysis:
    """Classify, group and detect the genre of a parsed document tree."""
    if root is None:
        raise ValueError("Document root is required")
    settings = settings or Settings()
    lexicon = settings.lexicon

    blocks = classify_blocks(document_root(root), lexicon)
    sections = group_sections(blocks)
    if settings.smart_grouping:
        sections = apply_smart_grouping(sections, settings.target_words_per_page, settings.max_words_per_page)
    pattern, confidence = detect_genre(blocks, lexicon.toc_markers)

    logger.debug(
        "Analyzed %d block(s) into %d section(s): %s (%.2f)",
        len(blocks), len(sections), pattern.value, confidence,
    )
    return LayoutAnalysis(
        pattern=pattern,
        confidence=confidence,
        sections=sections,
        total_blocks=len(blocks),
        suggested_page_breaks=page_breaks(sections, settings.smart_page_breaks),
        metadata=document_metadata(blocks, sections, lexicon.toc_markers),
    )


def content_area(settings: Settings) -> Rect:
    """The slide rectangle less its margins."""
    m = settings.slide_margin
    return Rect(
        x=m, y=m,
        width=max(0.0, settings.slide_width - 2 * m),
        height=max(0.0, settings.slide_height - 2 * m),
    )


def _section_strategy(section: Section, settings: Settings) -> tuple[str, int | None, int | None]:
    strategy = settings.distribution_strategy
    rows, cols = settings.grid_rows, settings.grid_cols
    n = len(section.blocks)
    if strategy == "golden" and n > 2:
        logger.debug("%s has %d blocks; golden falls back to even", section.id, n)
        return "even", None, None
    if strategy == "grid" and rows and cols and n > rows * cols:
        logger.warning("%s has %d blocks, more than a %dx%d grid; using a square grid", section.id, n, rows, cols)
        return "grid", None, None
    return strategy, rows, cols


def _section_charts(section: Section, settings: Settings) -> dict[str, ChartSpec]:
    charts = {}
    for block in section.blocks:
        if block.type not in (BlockType.table, BlockType.chart) or block.node is None:
            continue
        table = block.node if block.node.name == 'table' else block.node.find('table')
        if table is None:
            continue
        spec = chart_for_table(table, settings)
        if spec is not None:
            charts[block.id] = spec
    return charts


def layout_section(section: Section, settings: Settings = None) -> SectionLayout:
    """Match a template, place every block and build charts for eligible tables."""
    settings = settings or Settings()
    container = content_area(settings)
    strategy, rows, cols = _section_strategy(section, settings)
    elements = [LayoutElement(id=b.id) for b in section.blocks]
    return SectionLayout(
        section_id=section.id,
        template=match_template(section),
        strategy=strategy,
        container=container,
        placements=distribute(elements, container, strategy, rows=rows, cols=cols, gap=settings.gap),
        charts=_section_charts(section, settings),
    )


def layout_sections(analysis: LayoutAnalysis, settings: Settings = None) -> list[SectionLayout]:
    return [layout_section(s, settings) for s in analysis.sections]


def build_layout(root, settings: Settings = None) -> DocumentLayout:
    """Full pipeline for one document tree: analysis plus per-section layouts."""
    settings = settings or Settings()
    analysis = analyze_document(root, settings)
    return DocumentLayout(analysis=analysis, sections=layout_sections(analysis, settings))


def run_analyze(
    path: str,
    settings: Settings,
    output_dir: Path,
    ) -> list[tuple[Path, Path]]:
    """Lay out every document under path and write layout JSON. Returns (source_path, layout_file) pairs."""
    output_dir.mkdir(parents=True, exist_ok=True)
    results = []
    for p in discover_files(Path(path)):
        try:
            parsed = parse_file(p)
            layout = build_layout(parsed.root, settings)
            out_file = write_layout(parsed, layout, output_dir)
            results.append((p, out_file))
        except Exception as e:
            raise RuntimeError(f"Failed to analyze {p}: {e}") from e
        logger.info("Analyzed %s -> %s", p, out_file)
    return results
