"""Per-section template matching against a fixed, ordered template library"""

from dataclasses import dataclass
from typing import Callable

from doclayout.core.models import BlockType, Section, Template


@dataclass(frozen=True)
class Indicator:
    """One template signal: kind is 'marker', 'text' or 'shape'."""
    kind: str
    value: str

    @property
    def weight(self) -> int:
        return 2 if self.kind == "text" else 1


@dataclass(frozen=True)
class TemplateSpec:
    name: str
    layout: str
    design: str
    indicators: tuple[Indicator, ...]
    style: tuple[tuple[str, object], ...] = ()

    def to_template(self) -> Template:
        return Template(name=self.name, layout=self.layout, design=self.design, style=dict(self.style))


def _marker(*values: str) -> tuple[Indicator, ...]:
    return tuple(Indicator("marker", v) for v in values)


# Declaration order breaks ties.
TEMPLATES: tuple[TemplateSpec, ...] = (
    TemplateSpec(
        "title-slide", "center-aligned", "hero",
        (Indicator("shape", "lone-heading"), Indicator("shape", "title-then-heading")) + _marker(".title", "#title"),
        (("title_size", 48), ("title_position", "center"), ("background", "gradient"), ("animation", "zoom")),
    ),
    TemplateSpec(
        "agenda", "list-centered", "clean",
        (Indicator("text", "agenda"),) + _marker("link-list", ".agenda", "nav"),
        (("bullet_style", "numbered"), ("indentation", True), ("background", "subtle"), ("animation", "slide")),
    ),
    TemplateSpec(
        "comparison", "two-column", "balanced",
        _marker("table", ".comparison", ".versus", ".vs"),
        (("border_between", True), ("equal_columns", True), ("background", "split"), ("animation", "fade")),
    ),
    TemplateSpec(
        "timeline", "horizontal-flow", "linear",
        _marker(".timeline", "time", ".date", ".year"),
        (("connectors", True), ("date_highlight", True), ("background", "linear"), ("animation", "sequence")),
    ),
    TemplateSpec(
        "team", "grid", "cards",
        _marker(".team", ".people", ".staff", "captioned-figure"),
        (("image_shape", "circle"), ("name_cards", True), ("background", "pattern"), ("animation", "grid")),
    ),
    TemplateSpec(
        "statistics", "dashboard", "data-viz",
        _marker(".stats", ".numbers", ".metrics", "[data-value]"),
        (("large_numbers", True), ("charts", True), ("background", "data"), ("animation", "counter")),
    ),
    TemplateSpec(
        "quote", "center-focused", "elegant",
        _marker("blockquote", ".quote", ".testimonial"),
        (("italic_text", True), ("attribution", True), ("background", "elegant"), ("animation", "fade")),
    ),
    TemplateSpec(
        "contact", "info-card", "clean",
        _marker(".contact", "address", "href:tel", "href:mailto", ".email"),
        (("icons", True), ("card_layout", True), ("background", "clean"), ("animation", "slide")),
    ),
)

DEFAULT_TEMPLATE = TemplateSpec("content", "default", "standard", ())

_HEADING_TYPES = (BlockType.title, BlockType.heading)


def _lone_heading(section: Section) -> bool:
    return len(section.blocks) == 1 and section.blocks[0].type in _HEADING_TYPES


def _title_then_heading(section: Section) -> bool:
    types = [b.type for b in section.blocks]
    return any(a == BlockType.title and b == BlockType.heading for a, b in zip(types, types[1:]))


SHAPES: dict[str, Callable[[Section], bool]] = {
    "lone-heading": _lone_heading,
    "title-then-heading": _title_then_heading,
}


def indicator_hits(indicator: Indicator, section: Section, markers: set[str], text: str) -> bool:
    if indicator.kind == "text":
        return indicator.value.lower() in text
    if indicator.kind == "shape":
        return SHAPES[indicator.value](section)
    return indicator.value in markers


def score_template(spec: TemplateSpec, section: Section) -> int:
    markers = {m for b in section.blocks for m in b.metadata.markers}
    text = " ".join(b.raw_text for b in section.blocks).lower()
    return sum(i.weight for i in spec.indicators if indicator_hits(i, section, markers, text))


def match_template(section: Section) -> Template:
    """Highest indicator score wins; ties keep the earlier template; no hits means 'content'."""
    best, best_score = DEFAULT_TEMPLATE, 0
    for spec in TEMPLATES:
        score = score_template(spec, section)
        if score > best_score:
            best, best_score = spec, score
    return best.to_template()
