from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from framestack.demo import RenderError, render_dot

from .options import resolve_format_flag


def render(
    dot_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Graph dump to render."),
    render_format: Optional[str] = typer.Option(
        None, "--format", callback=resolve_format_flag, help="Graphviz output format (svg, png, pdf, dot)."
    ),
    renderer: Optional[str] = typer.Option(None, "--renderer", help="Graphviz executable."),
) -> None:
    try:
        output = render_dot(dot_file, renderer=renderer, render_format=render_format)
    except RenderError as exc:
        typer.echo(f"[error] {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"rendered={output}")


__all__ = ["render"]
