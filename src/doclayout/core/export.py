"""Renderer plans: page, slide and document views of a layout, plus the JSON writer"""

import json
from pathlib import Path

from doclayout.core.models import DocumentLayout, LayoutAnalysis, ParsedDoc


def _section_spans(analysis: LayoutAnalysis) -> list[tuple[int, int]]:
    """(start, end) block offsets of each section, end exclusive."""
    spans, offset = [], 0
    for s in analysis.sections:
        spans.append((offset, offset + len(s.blocks)))
        offset += len(s.blocks)
    return spans


def build_page_plan(analysis: LayoutAnalysis) -> dict:
    """Section boundaries and page breaks only; no block-level placement."""
    breaks = set(analysis.suggested_page_breaks)
    return {
        "pattern": analysis.pattern.value,
        "page_breaks": list(analysis.suggested_page_breaks),
        "sections": [
            {
                "id": s.id,
                "title": s.title,
                "start": start,
                "end": end,
                "new_page": start in breaks,
            }
            for s, (start, end) in zip(analysis.sections, _section_spans(analysis))
        ],
    }


def build_slide_plan(layout: DocumentLayout) -> list[dict]:
    """Per section: blocks with their rectangles, layout hint, template and charts."""
    slides = []
    for section, sl in zip(layout.analysis.sections, layout.sections):
        rects = {p.element_id: p.rect.model_dump() for p in sl.placements}
        slides.append({
            "section_id": section.id,
            "title": section.title,
            "layout_hint": section.layout_hint,
            "template": sl.template.model_dump(),
            "strategy": sl.strategy,
            "container": sl.container.model_dump(),
            "blocks": [
                {
                    "id": b.id,
                    "type": b.type.value,
                    "text": b.raw_text,
                    "importance": int(b.importance),
                    "rect": rects.get(b.id),
                    "chart": sl.charts[b.id].model_dump() if b.id in sl.charts else None,
                }
                for b in section.blocks
            ],
        })
    return slides


def build_document_plan(analysis: LayoutAnalysis) -> dict:
    """Flat block sequence with section boundaries; linear flow, no rectangles."""
    return {
        "sections": [
            {"id": s.id, "title": s.title, "start": start}
            for s, (start, _) in zip(analysis.sections, _section_spans(analysis))
        ],
        "blocks": [b.model_dump(mode="json") for b in analysis.blocks],
    }


def write_layout(doc: ParsedDoc, layout: DocumentLayout, output_dir: Path) -> Path:
    """Write <slug>.layout.json holding the analysis and all three renderer plans."""
    output_dir.mkdir(parents=True, exist_ok=True)
    analysis = layout.analysis
    payload = {
        "slug": doc.slug,
        "path": str(doc.path),
        "frontmatter": doc.frontmatter,
        "pattern": analysis.pattern.value,
        "confidence": analysis.confidence,
        "total_blocks": analysis.total_blocks,
        "metadata": analysis.metadata.model_dump(),
        "page_plan": build_page_plan(analysis),
        "slide_plan": build_slide_plan(layout),
        "document_plan": build_document_plan(analysis),
    }
    out_file = output_dir / f"{doc.slug}.layout.json"
    out_file.write_text(json.dumps(payload, indent=2, default=str), encoding='utf-8')
    return out_file
