"""Document-tree walk and node-to-ContentBlock classification"""

import logging
from typing import Iterator, Optional

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from doclayout.config import Lexicon
from doclayout.core.extract.scoring import has_emphasis, has_marker, score_importance
from doclayout.core.models import BlockMetadata, BlockType, ContentBlock
from doclayout.core.utils.text import analyze_sentiment, count_words, extract_keywords, looks_numeric


logger = logging.getLogger(__name__)

BLOCK_TYPE_MAP: dict[str, BlockType] = {
    'h1':         BlockType.title,
    'h2':         BlockType.heading,
    'h3':         BlockType.heading,
    'h4':         BlockType.heading,
    'h5':         BlockType.heading,
    'h6':         BlockType.heading,
    'p':          BlockType.paragraph,
    'ul':         BlockType.list,
    'ol':         BlockType.list,
    'table':      BlockType.table,
    'img':        BlockType.image,
    'figure':     BlockType.image,
    'pre':        BlockType.code,
    'code':       BlockType.code,
    'blockquote': BlockType.quote,
    'footer':     BlockType.footer,
}

SKIP_TAGS = {'script', 'style', 'meta', 'link', 'noscript', 'template', 'head', 'title'}
ATOMIC_TAGS = set(BLOCK_TYPE_MAP) - {'code'}
CONTAINER_TAGS = {'section', 'article', 'header', 'aside', 'div', 'main', 'nav'}
MEDIA_TAGS = ['img', 'video', 'svg', 'canvas']
HEADING_TAGS = ['h1', 'h2', 'h3', 'h4', 'h5', 'h6']


def _is_block_tag(node) -> bool:
    return isinstance(node, Tag) and (node.name in ATOMIC_TAGS or node.name in CONTAINER_TAGS)


def _has_block_child(node) -> bool:
    return any(_is_block_tag(c) for c in node.children)


def _has_direct_text(node) -> bool:
    return any(
        isinstance(c, NavigableString) and not isinstance(c, PreformattedString) and c.strip()
        for c in node.children
    )


def is_callout(node, lexicon: Lexicon) -> bool:
    return has_marker(node, lexicon.callout_markers)


def is_chart(node, lexicon: Lexicon) -> bool:
    """Chart class/id, a canvas descendant, or a descendant with a chart-like class."""
    if has_marker(node, lexicon.chart_markers):
        return True
    if node.find('canvas') is not None:
        return True
    return node.find(class_=lambda c: bool(c) and 'chart' in c.lower()) is not None


def _is_chart_wrapper(node, lexicon: Lexicon) -> bool:
    """Own chart class/id, or a canvas or chart-classed element as a direct child."""
    if has_marker(node, lexicon.chart_markers):
        return True
    return any(
        isinstance(c, Tag) and (c.name == 'canvas' or has_marker(c, lexicon.chart_markers))
        for c in node.children
    )


def _is_marked_unit(node, lexicon: Lexicon) -> bool:
    """A callout or chart wrapper kept whole; wrappers holding headings are always descended."""
    if node.find(HEADING_TAGS) is not None:
        return False
    return is_callout(node, lexicon) or _is_chart_wrapper(node, lexicon) or _has_direct_text(node)


def _walk(node: Tag, lexicon: Lexicon) -> Iterator[Tag]:
    """Atomic tags are leaves; anything else is a leaf unless it only wraps other blocks."""
    if node.name in SKIP_TAGS:
        return
    if node.name in ATOMIC_TAGS:
        yield node
        return
    if not _has_block_child(node) or _is_marked_unit(node, lexicon):
        yield node
        return
    for child in node.children:
        if isinstance(child, Tag):
            yield from _walk(child, lexicon)


def iter_block_nodes(root, lexicon: Lexicon) -> Iterator[Tag]:
    """Yield block-level nodes in document order; the root is descended unless it is a leaf."""
    if getattr(root, "name", None) in SKIP_TAGS:
        return
    if not _has_block_child(root):
        yield root
        return
    for child in root.children:
        if isinstance(child, Tag):
            yield from _walk(child, lexicon)


def classify_type(node, lexicon: Lexicon) -> BlockType:
    """Callout and chart markers win over the tag map; containers fall back on descendants."""
    if is_callout(node, lexicon):
        return BlockType.callout
    if is_chart(node, lexicon):
        return BlockType.chart

    block_type = BLOCK_TYPE_MAP.get(node.name)
    if block_type is not None:
        return block_type
    if node.find(['img', 'figure']) is not None:
        return BlockType.image
    if node.find('table') is not None:
        return BlockType.table
    if node.find(['ul', 'ol']) is not None:
        return BlockType.list
    return BlockType.paragraph


def _visible_strings(node) -> Iterator[str]:
    """Stripped strings of a node, leaving out text inside skipped tags such as <title>."""
    for s in node.descendants:
        if not isinstance(s, NavigableString) or isinstance(s, PreformattedString) or not s.strip():
            continue
        hidden = False
        for parent in s.parents:
            if parent is node:
                break
            if parent.name in SKIP_TAGS:
                hidden = True
                break
        if not hidden:
            yield s.strip()


def node_text(node) -> str:
    """Trimmed text of a node; images without text fall back to alt/title attributes."""
    text = " ".join(_visible_strings(node))
    if text:
        return text
    images = [node] if node.name == 'img' else node.find_all('img')
    return " ".join(
        (img.get('alt') or img.get('title') or '').strip() for img in images
    ).strip()


def has_media(node) -> bool:
    return node.name in MEDIA_TAGS or node.find(MEDIA_TAGS) is not None


def _heading_depth(node) -> int:
    """Heading level (1-6) from an hN tag, else 1."""
    name = node.name or ''
    if len(name) == 2 and name[0] == 'h' and name[1].isdigit():
        return int(name[1])
    return 1


def _is_numeric_table(node) -> bool:
    """More than half of the data cells look like numbers."""
    cells = node.find_all('td')
    numeric = sum(1 for td in cells if looks_numeric(td.get_text(strip=True)))
    return numeric > len(cells) * 0.5


def _markers(node) -> list[str]:
    """Structural markers for template matching: tags, .class, #id, [data-*], href schemes."""
    found: set[str] = set()
    elements = [node] + node.find_all(True)
    for el in elements:
        if not isinstance(el, Tag):
            continue
        found.add(el.name)
        for cls in el.get('class') or []:
            found.add(f".{cls.lower()}")
        if el.get('id'):
            found.add(f"#{el['id'].lower()}")
        for attr in el.attrs:
            if attr.startswith('data-'):
                found.add(f"[{attr}]")
        href = (el.get('href') or '').strip().lower() if el.name == 'a' else ''
        for scheme in ('mailto', 'tel'):
            if href.startswith(f"{scheme}:"):
                found.add(f"href:{scheme}")
        if el.name == 'figure' and el.find('img') and el.find('figcaption'):
            found.add('captioned-figure')
        if el.name in ('ul', 'ol') and any(li.find('a') for li in el.find_all('li')):
            found.add('link-list')
    found.discard('[document]')
    return sorted(found)


def extract_metadata(node, block_type: BlockType, text: str, lexicon: Lexicon) -> BlockMetadata:
    meta = BlockMetadata(
        keywords=extract_keywords(text, lexicon.stopwords),
        sentiment=analyze_sentiment(text, lexicon.positive_words, lexicon.negative_words),
        markers=_markers(node),
    )
    if block_type in (BlockType.title, BlockType.heading):
        meta.depth = _heading_depth(node)
    elif block_type == BlockType.list:
        meta.list_items = len(node.find_all('li'))
    elif block_type == BlockType.table:
        rows = node.find_all('tr')
        meta.rows = len(rows)
        meta.columns = len(rows[0].find_all(['td', 'th'])) if rows else 0
        meta.is_numeric = _is_numeric_table(node)
    elif block_type == BlockType.image:
        meta.image_count = (1 if node.name == 'img' else 0) + len(node.find_all('img'))
    return meta


def classify_node(node, position: int, lexicon: Lexicon) -> Optional[ContentBlock]:
    """Classify and score one node; None when it carries no text."""
    text = node_text(node)
    if not text:
        return None
    block_type = classify_type(node, lexicon)
    word_count = count_words(text)
    importance = score_importance(
        block_type, text, word_count, position,
        keywords=lexicon.importance_keywords,
        emphasis=has_emphasis(node),
        hinted=has_marker(node, lexicon.importance_hints),
    )
    return ContentBlock(
        id=f"block-{position}",
        type=block_type,
        raw_text=text,
        word_count=word_count,
        importance=importance,
        position=position,
        has_media=has_media(node),
        metadata=extract_metadata(node, block_type, text, lexicon),
        node=node,
    )


def classify_blocks(root, lexicon: Lexicon | None = None) -> list[ContentBlock]:
    """Walk a document tree and return its ordered, scored content blocks."""
    lexicon = lexicon or Lexicon()
    blocks: list[ContentBlock] = []
    for node in iter_block_nodes(root, lexicon):
        block = classify_node(node, len(blocks), lexicon)
        if block is not None:
            blocks.append(block)
    logger.debug("Classified %d block(s)", len(blocks))
    return blocks
