from __future__ import annotations

import typer

from .generate_cli import generate
from .render_cli import render


_HELP = """Framestack command line interface.

Subcommands generate shared stack trees and render arena graph dumps."""

app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    help=_HELP,
)


@app.callback()
def framestack_callback() -> None:
    """Root callback reserved for shared options (none yet)."""
    pass


app.command("generate", help="Build a random shared stack tree and dump it.")(generate)
app.command("render", help="Render an existing graph dump with Graphviz.")(render)


def main() -> None:
    app()


__all__ = ["app", "main"]
