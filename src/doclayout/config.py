"""Application configuration: settings schema, lexicon data and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "DOCLAYOUT_"


class Lexicon(BaseModel):
    """Word lists driving the rule-based classifier; tunable from config.yaml."""
    importance_keywords: list[str] = [
        'important', 'critical', 'key', 'essential', 'must', 'required',
        'summary', 'conclusion', 'overview', 'introduction',
        'warning', 'caution', 'note', 'attention',
    ]
    importance_hints: list[str] = ['important', 'primary', 'key', 'main', 'hero', 'featured']
    callout_markers:  list[str] = ['callout', 'alert', 'note', 'tip', 'warning']
    chart_markers:    list[str] = ['chart', 'graph']
    stopwords: list[str] = [
        'the', 'a', 'an', 'and', 'or', 'but', 'is', 'are', 'was', 'were',
        'in', 'on', 'at', 'to', 'for', 'of', 'with', 'by',
        'this', 'that', 'these', 'those', 'from', 'have', 'has', 'will',
    ]
    positive_words: list[str] = [
        'good', 'great', 'excellent', 'amazing', 'best',
        'success', 'improve', 'growth', 'increase', 'benefit',
    ]
    negative_words: list[str] = [
        'bad', 'poor', 'worst', 'fail', 'problem',
        'issue', 'decrease', 'decline', 'loss', 'error',
    ]
    toc_markers: list[str] = ['table of contents']


class Settings(BaseModel):
    app_name: str = "doclayout"
    smart_grouping:        bool = Field(default=False, description="Merge short adjacent sections")
    target_words_per_page: int  = Field(default=300, ge=1, description="Merge while a group is below this")
    max_words_per_page:    int  = Field(default=500, ge=1, description="Never merge past this")
    smart_page_breaks:     bool = Field(default=False, description="Break only where a section asks for it")
    distribution_strategy: str  = Field(
        default="even",
        pattern="^(even|golden|grid|thirds|masonry|custom)$",
        description="even, golden, grid, thirds, masonry or custom",
    )
    auto_charts:    bool = Field(default=True, description="Convert eligible tables to charts")
    chart_min_rows: int  = Field(default=2,  ge=1)
    chart_max_rows: int  = Field(default=50, ge=1)
    preferred_chart_types: list[str] = Field(default_factory=list, description="Ordered chart type preference")
    slide_width:  float = Field(default=10.0,  gt=0, description="Slide width in inches")
    slide_height: float = Field(default=5.625, gt=0, description="Slide height in inches")
    slide_margin: float = Field(default=0.5,   ge=0, description="Margin around the slide content area")
    gap:          float = Field(default=0.2,   ge=0, description="Gap between placed elements")
    grid_rows: int | None = Field(default=None, ge=1)
    grid_cols: int | None = Field(default=None, ge=1)
    output_dir: str = Field(default="layouts", description="Directory for layout JSON files")
    lexicon: Lexicon = Field(default_factory=Lexicon)

    @field_validator("preferred_chart_types", mode="before")
    @classmethod
    def _split_chart_types(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [t.strip() for t in value.split(",") if t.strip()]
        return value

    @field_validator("preferred_chart_types")
    @classmethod
    def _known_chart_types(cls, value: list[str]) -> list[str]:
        unknown = [t for t in value if t not in {"bar", "line", "pie", "area", "scatter"}]
        if unknown:
            raise ValueError(f"Unknown chart type(s): {', '.join(unknown)}")
        return value

    @model_validator(mode="after")
    def _check_bounds(self) -> "Settings":
        if self.max_words_per_page < self.target_words_per_page:
            raise ValueError("max_words_per_page must be >= target_words_per_page")
        if self.chart_max_rows < self.chart_min_rows:
            raise ValueError("chart_max_rows must be >= chart_min_rows")
        return self


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then DOCLAYOUT_<FIELD> env vars, then non-None overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if name == "lexicon":
            continue
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
