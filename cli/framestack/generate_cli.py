from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from framestack.demo import DEFAULT_OUTPUT, RenderError, run_demo

from .options import resolve_format_flag


def generate(
    seed: Optional[int] = typer.Option(None, "--seed", help="Generator seed (default: FRAMESTACK_SEED or 69)."),
    depth: Optional[int] = typer.Option(
        None, "--depth", min=0, help="Tree depth (default: FRAMESTACK_TREE_DEPTH or 4)."
    ),
    output: Path = typer.Option(Path(DEFAULT_OUTPUT), "--output", "-o", help="Graph dump destination."),
    render: bool = typer.Option(True, "--render/--no-render", help="Invoke Graphviz on the dump."),
    render_format: Optional[str] = typer.Option(
        None, "--format", callback=resolve_format_flag, help="Graphviz output format (svg, png, pdf, dot)."
    ),
) -> None:
    try:
        result = run_demo(
            seed=seed,
            depth=depth,
            output=output,
            render=render,
            render_format=render_format,
        )
    except (RenderError, OSError) as exc:
        typer.echo(f"[error] {exc}", err=True)
        raise typer.Exit(code=1) from exc

    stats = result.stats_at_dump
    typer.echo(
        f"dump={result.dot_path} | frames={stats.live} branches={result.branches} "
        f"references={stats.total_references} capacity={stats.capacity}"
    )
    if result.rendered_path is not None:
        typer.echo(f"rendered={result.rendered_path}")
    typer.echo(f"live after drop={result.stats_after_drop.live}")


__all__ = ["generate"]
