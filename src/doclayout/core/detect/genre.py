"""Document-level feature extraction and rule-based genre detection"""

from dataclasses import dataclass
from typing import Iterable

from doclayout.core.models import (
    AnalysisMetadata,
    BlockType,
    ContentBlock,
    Importance,
    LayoutPattern,
    Section,
)


@dataclass(frozen=True)
class DocumentFeatures:
    has_title: bool = False
    has_table_of_contents: bool = False
    has_hero: bool = False
    heading_ratio: float = 0.0
    table_count: int = 0
    chart_count: int = 0
    list_ratio: float = 0.0
    code_block_count: int = 0
    callout_count: int = 0
    average_words_per_block: float = 0.0
    media_ratio: float = 0.0
    block_count: int = 0


def has_table_of_contents(blocks: list[ContentBlock], markers: Iterable[str]) -> bool:
    """A TOC phrase anywhere, or a title/heading that reads exactly 'contents'."""
    markers = [m.lower() for m in markers]
    for b in blocks:
        text = b.raw_text.lower()
        if any(m in text for m in markers):
            return True
        if b.type in (BlockType.title, BlockType.heading) and text.strip() == "contents":
            return True
    return False


def extract_features(blocks: list[ContentBlock], toc_markers: Iterable[str] = ("table of contents",)) -> DocumentFeatures:
    if not blocks:
        return DocumentFeatures()
    n = len(blocks)

    def count(*types: BlockType) -> int:
        return sum(1 for b in blocks if b.type in types)

    return DocumentFeatures(
        has_title=count(BlockType.title) > 0,
        has_table_of_contents=has_table_of_contents(blocks, toc_markers),
        has_hero=any(b.importance == Importance.CRITICAL and b.position < 2 for b in blocks),
        heading_ratio=count(BlockType.heading, BlockType.title) / n,
        table_count=count(BlockType.table),
        chart_count=count(BlockType.chart),
        list_ratio=count(BlockType.list) / n,
        code_block_count=count(BlockType.code),
        callout_count=count(BlockType.callout),
        average_words_per_block=sum(b.word_count for b in blocks) / n,
        media_ratio=sum(1 for b in blocks if b.has_media) / n,
        block_count=n,
    )


def detect_pattern(features: DocumentFeatures) -> LayoutPattern:
    """First matching rule wins; the order is significant."""
    if features.has_title and features.heading_ratio > 0.3:
        return LayoutPattern.presentation
    if features.table_count > features.block_count * 0.4 or features.chart_count > 0:
        return LayoutPattern.dashboard
    if features.has_table_of_contents:
        return LayoutPattern.report
    if features.list_ratio > 0.4 and features.code_block_count > 0:
        return LayoutPattern.tutorial
    if features.has_hero and features.callout_count > 2:
        return LayoutPattern.landing_page
    if features.average_words_per_block > 100:
        return LayoutPattern.article
    return LayoutPattern.document


def pattern_confidence(pattern: LayoutPattern, features: DocumentFeatures) -> float:
    """Base 0.5, raised by features that corroborate the chosen pattern, capped at 1.0."""
    confidence = 0.5
    if pattern == LayoutPattern.presentation:
        confidence += 0.2 if features.has_title else 0.0
        confidence += 0.2 if features.heading_ratio > 0.3 else 0.0
    elif pattern == LayoutPattern.dashboard:
        confidence += 0.2 if features.table_count > 0 else 0.0
        confidence += 0.3 if features.chart_count > 0 else 0.0
    elif pattern == LayoutPattern.report:
        confidence += 0.4 if features.has_table_of_contents else 0.0
    elif pattern == LayoutPattern.tutorial:
        confidence += 0.2 if features.list_ratio > 0.3 else 0.0
        confidence += 0.3 if features.code_block_count > 0 else 0.0
    elif pattern == LayoutPattern.landing_page:
        confidence += 0.2 if features.has_hero else 0.0
        confidence += 0.2 if features.callout_count > 2 else 0.0
    elif pattern == LayoutPattern.article:
        confidence += 0.2 if features.average_words_per_block > 100 else 0.0
    return round(min(1.0, confidence), 4)


def detect_genre(blocks: list[ContentBlock], toc_markers: Iterable[str] = ("table of contents",)) -> tuple[LayoutPattern, float]:
    """Return (pattern, confidence) for a classified block sequence."""
    features = extract_features(blocks, toc_markers)
    pattern = detect_pattern(features)
    return pattern, pattern_confidence(pattern, features)


def document_metadata(
    blocks: list[ContentBlock],
    sections: list[Section],
    toc_markers: Iterable[str] = ("table of contents",),
    ) -> AnalysisMetadata:
    """Document-level aggregates; all ratios are 0 for an empty document."""
    if not blocks:
        return AnalysisMetadata()
    total_words = sum(b.word_count for b in blocks)
    return AnalysisMetadata(
        has_table_of_contents=has_table_of_contents(blocks, toc_markers),
        has_title=any(b.type == BlockType.title for b in blocks),
        has_subtitles=any(b.type == BlockType.heading and b.metadata.depth == 2 for b in blocks),
        average_words_per_section=total_words / len(sections) if sections else 0.0,
        content_density=total_words / len(blocks),
        media_ratio=sum(1 for b in blocks if b.has_media) / len(blocks),
    )
