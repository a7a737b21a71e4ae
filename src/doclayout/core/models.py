"""Data models for the classify, group and layout pipeline"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class BlockType(str, Enum):
    """Restrict content blocks to a closed set of element kinds"""
    title = "title"
    heading = "heading"
    paragraph = "paragraph"
    list = "list"
    table = "table"
    image = "image"
    code = "code"
    quote = "quote"
    chart = "chart"
    callout = "callout"
    footer = "footer"


class Importance(IntEnum):
    MINIMAL = 1     # can be summarized or omitted
    LOW = 2
    MEDIUM = 3
    HIGH = 4
    CRITICAL = 5    # must include, primary content


class LayoutPattern(str, Enum):
    """Coarse document genre"""
    document = "document"
    presentation = "presentation"
    report = "report"
    article = "article"
    tutorial = "tutorial"
    dashboard = "dashboard"
    landing_page = "landing-page"


Sentiment = Literal["positive", "neutral", "negative"]

LayoutHint = Literal[
    "title-slide", "content", "data-viz", "image-focus", "agenda", "comparison",
    "timeline", "team", "statistics", "quote", "contact",
]

ChartType = Literal["bar", "line", "pie", "area", "scatter"]


class BlockMetadata(BaseModel):
    depth:       Optional[int] = None   # heading level (1-6) for titles and headings
    list_items:  Optional[int] = None
    rows:        Optional[int] = None
    columns:     Optional[int] = None
    is_numeric:  Optional[bool] = None
    image_count: Optional[int] = None
    keywords:    list[str] = []
    sentiment:   Sentiment = "neutral"
    markers:     list[str] = []         # tag names, .class, #id, [attr], href:scheme


class ContentBlock(BaseModel):
    """A single classified and scored unit of document content."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    type: BlockType
    raw_text: str
    word_count: int
    importance: Importance
    position: int
    has_media: bool = False
    metadata: BlockMetadata = Field(default_factory=BlockMetadata)
    node: Any = Field(default=None, exclude=True, repr=False)   # source tree node; not serialized


class Section(BaseModel):
    """A contiguous run of blocks destined for one page or slide."""
    id: str
    title: Optional[str] = None
    blocks: list[ContentBlock]
    total_importance: int
    should_start_new_page: bool = True
    layout_hint: LayoutHint = "content"

    @property
    def word_count(self) -> int:
        return sum(b.word_count for b in self.blocks)


class AnalysisMetadata(BaseModel):
    has_table_of_contents: bool = False
    has_title: bool = False
    has_subtitles: bool = False
    average_words_per_section: float = 0.0
    content_density: float = 0.0       # average words per block
    media_ratio: float = 0.0


class LayoutAnalysis(BaseModel):
    """Pipeline output: genre, sections and page breaks for one document."""
    pattern: LayoutPattern
    confidence: float = Field(ge=0.0, le=1.0)
    sections: list[Section]
    total_blocks: int
    suggested_page_breaks: list[int]
    metadata: AnalysisMetadata = Field(default_factory=AnalysisMetadata)

    @property
    def blocks(self) -> list[ContentBlock]:
        return [b for s in self.sections for b in s.blocks]


class Rect(BaseModel):
    x: float
    y: float
    width: float
    height: float


class LayoutElement(BaseModel):
    """Something the distribution engine places; preferred_height is used by masonry."""
    id: str
    preferred_height: Optional[float] = None


class Placement(BaseModel):
    element_id: str
    rect: Rect


class TableData(BaseModel):
    headers: list[str] = []
    rows: list[list[str]] = []


class ChartSeries(BaseModel):
    name: str
    values: list[float]
    color: Optional[str] = None


class ChartStyle(BaseModel):
    show_legend: bool = False
    show_title: bool = True
    show_values: bool = True
    grid_lines: bool = True
    theme: str = "colorful"


class ChartSpec(BaseModel):
    chart_type: ChartType
    title: str
    categories: list[str]
    series: list[ChartSeries]
    style: ChartStyle = Field(default_factory=ChartStyle)


class Template(BaseModel):
    """A named presentational pattern for a single section."""
    name: str
    layout: str
    design: str
    style: dict[str, Any] = {}


class SectionLayout(BaseModel):
    """Per-section slide plan: template, placements and charts."""
    section_id: str
    template: Template
    strategy: str
    container: Rect
    placements: list[Placement]
    charts: dict[str, ChartSpec] = {}    # block id -> chart replacing that table


class DocumentLayout(BaseModel):
    analysis: LayoutAnalysis
    sections: list[SectionLayout]


@dataclass
class ParsedDoc:
    """Internal parse result carrying the document tree; not persisted."""
    path:        Path
    slug:        str
    raw:         str                # full file content (includes frontmatter)
    frontmatter: dict[str, Any]
    root:        Any                # BeautifulSoup document tree
