"""Block grouping into sections/slides, smart merging and page-break placement"""

import logging

from doclayout.core.models import BlockType, ContentBlock, Importance, LayoutHint, Section


logger = logging.getLogger(__name__)

UPGRADABLE_HINTS = {"content", "title-slide"}


def _starts_section(block: ContentBlock) -> bool:
    """Titles and depth-2 headings open a new section."""
    return block.type == BlockType.title or (
        block.type == BlockType.heading and block.metadata.depth == 2
    )


def _upgrade_hint(hint: LayoutHint, block: ContentBlock) -> LayoutHint:
    """Tables/charts promote to data-viz, strong images to image-focus; the first upgrade sticks."""
    if hint not in UPGRADABLE_HINTS:
        return hint
    if block.type in (BlockType.table, BlockType.chart):
        return "data-viz"
    if block.type == BlockType.image and block.importance >= Importance.HIGH:
        return "image-focus"
    return hint


def _make_section(position: int, blocks: list[ContentBlock], title, hint: LayoutHint) -> Section:
    return Section(
        id=f"section-{position}",
        title=title,
        blocks=blocks,
        total_importance=sum(int(b.importance) for b in blocks),
        should_start_new_page=True,
        layout_hint=hint,
    )


def group_sections(blocks: list[ContentBlock]) -> list[Section]:
    """Split blocks into sections; each title or h2 starts a new one, leading blocks form a preamble."""
    groups: list[tuple[list[ContentBlock], str | None, LayoutHint]] = []

    for block in blocks:
        if _starts_section(block):
            hint: LayoutHint = "title-slide" if block.type == BlockType.title else "content"
            groups.append(([block], block.raw_text, hint))
            continue
        if not groups:
            groups.append(([], None, "content"))
        members, title, hint = groups[-1]
        members.append(block)
        groups[-1] = (members, title, _upgrade_hint(hint, block))

    return [_make_section(i, members, title, hint) for i, (members, title, hint) in enumerate(groups)]


def apply_smart_grouping(
    sections: list[Section],
    target_words: int,
    max_words: int,
    ) -> list[Section]:
    """Greedily merge whole adjacent sections while the group is under target and the merge stays within max."""
    merged: list[tuple[list[ContentBlock], str | None, LayoutHint, bool]] = []
    group_words = 0

    for section in sections:
        words = section.word_count
        if merged and group_words < target_words and group_words + words <= max_words:
            blocks, title, hint, new_page = merged[-1]
            if hint in UPGRADABLE_HINTS and section.layout_hint in ("data-viz", "image-focus"):
                hint = section.layout_hint
            merged[-1] = (blocks + section.blocks, title, hint, new_page)
            group_words += words
        else:
            merged.append((list(section.blocks), section.title, section.layout_hint, section.should_start_new_page))
            group_words = words

    result = []
    for i, (blocks, title, hint, new_page) in enumerate(merged):
        section = _make_section(i, blocks, title, hint)
        section.should_start_new_page = new_page
        result.append(section)
    logger.debug("Smart grouping merged %d section(s) into %d", len(sections), len(result))
    return result


def page_breaks(sections: list[Section], smart: bool) -> list[int]:
    """Block-sequence offsets where a new page starts."""
    breaks: list[int] = []
    offset = 0
    for section in sections:
        if not smart or section.should_start_new_page or offset == 0:
            breaks.append(offset)
        offset += len(section.blocks)
    return breaks
