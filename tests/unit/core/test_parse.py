"""Unit tests for core/parse.py"""

import pytest

from doclayout.core.models import ParsedDoc
from doclayout.core.parse import (
    _strip_frontmatter,
    discover_files,
    document_root,
    parse_file,
    parse_html,
    parse_markdown,
)


def test_strip_frontmatter_with_yaml():
    """_strip_frontmatter extracts YAML header and returns body."""
    text = "---\ntitle: Hello\n---\n# Body\n"
    fm, body = _strip_frontmatter(text)
    assert fm == {"title": "Hello"}
    assert body == "# Body\n"


def test_strip_frontmatter_no_frontmatter():
    """_strip_frontmatter returns empty dict and full text when no header."""
    text = "# No frontmatter\n"
    fm, body = _strip_frontmatter(text)
    assert fm == {}
    assert body == text


def test_strip_frontmatter_invalid_yaml():
    """Malformed frontmatter raises ValueError."""
    with pytest.raises(ValueError, match="Invalid YAML frontmatter"):
        _strip_frontmatter("---\ntitle: [oops\n---\nbody\n")


def test_strip_frontmatter_non_mapping():
    """Frontmatter that is not a mapping raises ValueError."""
    with pytest.raises(ValueError, match="expected a mapping"):
        _strip_frontmatter("---\n- a\n- b\n---\nbody\n")


def test_parse_markdown_renders_html_tree():
    """Markdown is rendered to HTML elements."""
    root = document_root(parse_markdown("# Title\n\n| a | b |\n|---|---|\n| 1 | 2 |\n"))
    assert root.find("h1").get_text() == "Title"
    assert root.find("table") is not None


def test_document_root_prefers_body():
    """document_root returns <body> when the tree has one."""
    root = document_root(parse_html("<html><body><p>x</p></body></html>"))
    assert root.name == "body"


def test_document_root_empty_input():
    """An empty document still yields a usable root."""
    root = document_root(parse_html(""))
    assert root is not None


def test_discover_files_single(tmp_path):
    """discover_files returns a list with one file when given a file path."""
    f = tmp_path / "doc.html"
    f.write_text("<h1>Hello</h1>")
    assert discover_files(f) == [f]


def test_discover_files_unsupported_skipped(tmp_path):
    """discover_files ignores files that are neither HTML nor Markdown."""
    (tmp_path / "notes.txt").write_text("text")
    assert discover_files(tmp_path) == []
    assert discover_files(tmp_path / "notes.txt") == []


def test_discover_files_dir(tmp_path):
    """discover_files finds HTML and Markdown files recursively, sorted."""
    (tmp_path / "b.md").write_text("b")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "a.htm").write_text("a")
    (tmp_path / "c.HTML").write_text("c")
    files = discover_files(tmp_path)
    assert len(files) == 3
    assert files == sorted(files)


def test_parse_file_markdown(tmp_path, sample_md):
    """parse_file strips frontmatter and uses its slug."""
    f = tmp_path / "anything.md"
    f.write_text(sample_md)
    doc = parse_file(f)
    assert isinstance(doc, ParsedDoc)
    assert doc.frontmatter["title"] == "Test Doc"
    assert doc.slug == "test-doc"
    assert "title: Test Doc" not in document_root(doc.root).get_text()


def test_parse_file_html_slug_from_stem(tmp_path):
    """HTML files have no frontmatter; the slug comes from the file name."""
    f = tmp_path / "Quarterly Report.html"
    f.write_text("<html><body><h1>Q4</h1></body></html>")
    doc = parse_file(f)
    assert doc.frontmatter == {}
    assert doc.slug == "quarterly-report"
    assert document_root(doc.root).find("h1") is not None


def test_parse_file_slug_falls_back_for_symbol_names(tmp_path):
    """A file name with no slug characters still gets a visible slug."""
    f = tmp_path / "!!!.html"
    f.write_text("<html><body><p>x</p></body></html>")
    assert parse_file(f).slug == "document"
