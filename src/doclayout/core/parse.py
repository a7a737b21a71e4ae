"""File discovery, frontmatter extraction, and HTML/Markdown tree building"""

import re
from pathlib import Path
from typing import Any

import yaml
from bs4 import BeautifulSoup
from markdown_it import MarkdownIt

from doclayout.core.models import ParsedDoc
from doclayout.core.utils.slug import slugify


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
HTML_EXTENSIONS = {'.html', '.htm'}
MD_EXTENSIONS = {'.md', '.markdown'}


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a document tree."""
    return BeautifulSoup(html, "lxml")


def parse_markdown(markdown: str, parser_config: str = 'gfm-like') -> BeautifulSoup:
    """Render markdown to HTML and parse the result into a document tree."""
    return parse_html(_make_parser(parser_config).render(markdown))


def document_root(tree):
    """Return the <body> of a parsed tree, or the tree itself when there is none."""
    body = tree.find("body") if hasattr(tree, "find") else None
    return body if body is not None else tree


def discover_files(path: Path) -> list[Path]:
    """Return sorted HTML/Markdown files under path, or [path] if a single supported file."""
    suffixes = HTML_EXTENSIONS | MD_EXTENSIONS
    if path.is_file():
        return [path] if path.suffix.lower() in suffixes else []
    return sorted(p for p in path.rglob('*') if p.suffix.lower() in suffixes)


def parse_file(path: Path, parser_config: str = 'gfm-like') -> ParsedDoc:
    """Parse a single HTML or markdown file into a ParsedDoc with a document tree."""
    raw = path.read_text(encoding='utf-8')
    if path.suffix.lower() in MD_EXTENSIONS:
        frontmatter, body = _strip_frontmatter(raw)
        tree = parse_markdown(body, parser_config)
    else:
        frontmatter, tree = {}, parse_html(raw)
    slug = frontmatter.get('slug') or slugify(path.stem, fallback="document")
    return ParsedDoc(
        path=path,
        slug=slug,
        raw=raw,
        frontmatter=frontmatter,
        root=tree,
    )
