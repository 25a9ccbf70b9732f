"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="codetally",
    help="codetally - line and comment metrics for C-family sources",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback()
def main() -> None:
    """Measure source files with codetally."""


# Import subcommands to register them
from .scan import scan as _scan  # noqa: F401, E402
