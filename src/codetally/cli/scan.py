"""Scan command: measure files and report per-file and project metrics."""

import json
from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.markup import escape
from rich.table import Table

from ..exceptions import CodetallyError
from ..infrastructure import Metric, SourceIndex
from ..logging_config import setup_logging
from ..scanner import scan as run_scan
from . import app
from ._common import console, resolve_config

_COLUMNS = (
    (Metric.LINES, "Lines"),
    (Metric.LINES_OF_CODE, "LOC"),
    (Metric.COMMENT_LINES, "Comments"),
    (Metric.COMMENT_BLANK_LINES, "Blank comments"),
)


@app.command()
def scan(
    files: List[Path] = typer.Argument(
        ...,
        help="Source files to measure",
        exists=True,
    ),
    language: Optional[str] = typer.Option(
        None,
        "--language",
        "-l",
        help="Parse every file as this language (objc, c). Default: by file extension",
    ),
    backend: Optional[str] = typer.Option(
        None,
        "--backend",
        "-b",
        help="Parser backend: auto, tree-sitter or lexer",
        click_type=click.Choice(["auto", "tree-sitter", "lexer"]),
    ),
    ignore_header_comments: Optional[bool] = typer.Option(
        None,
        "--ignore-header-comments/--count-header-comments",
        help="Exclude each file's leading comment from comment metrics",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Parallel workers",
        min=1,
        max=32,
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json",
        click_type=click.Choice(["rich", "json"], case_sensitive=False),
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    Measure source files: lines, lines of code, comment lines.

    Files that fail to parse are reported and the exit code is 1; the other
    files are still measured.

    [bold cyan]Examples:[/bold cyan]

      codetally scan Sources/*.m

      codetally scan Foo.m Bar.m --ignore-header-comments --format json
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            language=language,
            backend=backend,
            ignore_header_comments=ignore_header_comments,
            workers=workers,
        )
        index = run_scan(files, settings)
    except CodetallyError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    if fmt.lower() == "json":
        typer.echo(json.dumps(_to_json(index), indent=2))
    else:
        _print_table(index)

    if index.failures:
        raise typer.Exit(1)


def _to_json(index: SourceIndex) -> dict:
    return {
        "project": {
            "name": index.project.key,
            "measures": {m.value: v for m, v in index.project.measures.items()},
        },
        "files": [
            {
                "path": entity.key,
                "measures": {m.value: v for m, v in entity.measures.items()},
                "metadata": entity.metadata,
            }
            for entity in sorted(index.files(), key=lambda e: e.key)
        ],
        "failures": [{"path": f.path, "reason": f.reason} for f in index.failures],
    }


def _print_table(index: SourceIndex) -> None:
    table = Table(title=index.project.key, show_footer=True)
    table.add_column("File", footer=f"{index.project.get(Metric.FILES, 0)} files")
    for metric, label in _COLUMNS:
        total = index.project.get(metric)
        table.add_column(label, justify="right", footer="" if total is None else str(total))

    for entity in sorted(index.files(), key=lambda e: e.key):
        cells = [escape(entity.key)]
        for metric, _ in _COLUMNS:
            value = entity.get(metric)
            cells.append("-" if value is None else str(value))
        table.add_row(*cells)

    console.print(table)

    for failure in index.failures:
        console.print(f"[red]Failed:[/red] {escape(failure.path)}: {escape(failure.reason)}")
