"""Importance scoring: type base score plus independent additive adjustments"""

import math
import re
from typing import Iterable

from doclayout.core.models import BlockType, Importance
from doclayout.core.utils.text import contains_any


BASE_IMPORTANCE: dict[BlockType, int] = {
    BlockType.title:   5,
    BlockType.heading: 4,
    BlockType.table:   4,
    BlockType.chart:   4,
    BlockType.callout: 4,
    BlockType.image:   3,
    BlockType.footer:  1,
}
DEFAULT_IMPORTANCE = 3

EMPHASIS_TAGS = ['strong', 'b', 'em', 'i', 'mark']
_EMPHASIS_STYLE_RE = re.compile(r'font-weight\s*:\s*(bold|bolder|[6-9]00)|font-style\s*:\s*italic', re.I)


def _class_and_id(node) -> str:
    classes = node.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return f"{' '.join(classes)} {node.get('id') or ''}".lower()


def has_marker(node, markers: Iterable[str]) -> bool:
    """True when the node's class or id contains any of the given substrings."""
    if not hasattr(node, "get"):
        return False
    text = _class_and_id(node)
    return any(m in text for m in markers)


def has_emphasis(node) -> bool:
    """Bold/italic tags or an inline bold/italic style anywhere inside the node."""
    if node.name in EMPHASIS_TAGS or node.find(EMPHASIS_TAGS) is not None:
        return True
    styled = [node] + node.find_all(style=True)
    return any(_EMPHASIS_STYLE_RE.search(el.get("style") or "") for el in styled)


def score_importance(
    block_type: BlockType,
    text: str,
    word_count: int,
    position: int,
    keywords: Iterable[str],
    emphasis: bool = False,
    hinted: bool = False,
    ) -> Importance:
    """Score a block 1-5 from its type, position, length, wording and markup signals."""
    score: float = BASE_IMPORTANCE.get(block_type, DEFAULT_IMPORTANCE)

    if position < 3:
        score += 1
    if position > 20:
        score -= 1

    if word_count > 100:
        score += 1
    if word_count < 10 and block_type == BlockType.paragraph:
        score -= 1

    if contains_any(text, keywords):
        score += 1
    if emphasis:
        score += 0.5
    if hinted:
        score += 1

    # half-up rounding, then clamp
    return Importance(max(1, min(5, math.floor(score + 0.5))))
