"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from doclayout.config import Settings, load_config
from doclayout.core.extract.blocks import classify_blocks
from doclayout.core.parse import discover_files, document_root, parse_file
from doclayout.core.pipeline import run_analyze


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def analyze_cmd(
    path: Annotated[str, typer.Argument(help="HTML/Markdown file or directory to analyze")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    smart_grouping: Annotated[bool, typer.Option("--smart-grouping", help="Merge short adjacent sections")] = False,
    smart_breaks: Annotated[bool, typer.Option("--smart-page-breaks", help="Break only where a section asks for it")] = False,
    strategy: Annotated[Optional[str], typer.Option("--strategy", help="even, golden, grid, thirds or masonry")] = None,
    no_charts: Annotated[bool, typer.Option("--no-charts", help="Keep tables as tables")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log pipeline details")] = False,
    ):
    """Classify, group and lay out documents, writing <slug>.layout.json per document."""
    _configure_logging(verbose)
    settings = _settings(overrides={
        "output_dir": out,
        "smart_grouping": smart_grouping or None,
        "smart_page_breaks": smart_breaks or None,
        "distribution_strategy": strategy,
        "auto_charts": False if no_charts else None,
    })
    output_dir = Path(settings.output_dir)

    try:
        results = run_analyze(path, settings, output_dir)
    except RuntimeError as e:
        _fail(str(e))
    if not results:
        typer.echo(f"No HTML or Markdown files found at {path}.")
        raise typer.Exit(1)
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Analyzed {len(results)} document(s) to {output_dir}/")


def blocks_cmd(
    path: Annotated[str, typer.Argument(help="HTML/Markdown file or directory")],
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log pipeline details")] = False,
    ):
    """Print the classified block sequence of each document."""
    _configure_logging(verbose)
    settings = _settings()
    files = discover_files(Path(path))
    if not files:
        typer.echo(f"No HTML or Markdown files found at {path}.")
        raise typer.Exit(1)

    for p in files:
        try:
            parsed = parse_file(p)
        except (OSError, ValueError) as e:
            _fail(f"Failed to parse {p}", e)
        typer.echo(f"{p}:")
        for b in classify_blocks(document_root(parsed.root), settings.lexicon):
            text = b.raw_text if len(b.raw_text) <= 60 else b.raw_text[:57] + "..."
            typer.echo(f"  {b.position:>4}  {b.type.value:<10} {int(b.importance)}  {text}")
