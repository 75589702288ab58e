from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from framestack import config as fs_config
from framestack.core.arena import ArenaStats, FrameArena
from framestack.core.stack import TypeStack
from framestack.demo.generator import Rand, generate_tree
from framestack.demo.render import render_dot, write_dot
from framestack.logging import DEMO_LOGGER, get_logger, log_arena_stats

LOGGER = get_logger(f"{DEMO_LOGGER}.driver")

DEFAULT_OUTPUT = "out.dot"


@dataclass(frozen=True)
class DemoResult:
    dot_path: Path
    rendered_path: Optional[Path]
    branches: int
    stats_at_dump: ArenaStats
    stats_after_drop: ArenaStats


def run_demo(
    *,
    seed: int | None = None,
    depth: int | None = None,
    output: str | Path = DEFAULT_OUTPUT,
    render: bool = True,
    render_format: str | None = None,
    arena: FrameArena | None = None,
) -> DemoResult:
    """Generate a shared stack tree, dump it, optionally render it, then release it all."""

    runtime = fs_config.runtime_config()
    seed = runtime.seed if seed is None else seed
    depth = runtime.tree_depth if depth is None else depth
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}.")

    arena = arena if arena is not None else FrameArena()
    root = TypeStack()
    branches = generate_tree(arena, Rand(seed), root, depth)
    LOGGER.debug("Generated %d branches over %d live frames.", len(branches), len(arena))

    stats_at_dump = arena.stats()
    log_arena_stats(LOGGER, stats_at_dump, label="at dump")
    try:
        dot_path = write_dot(arena, output)
        image_path = render_dot(dot_path, render_format=render_format) if render else None
    finally:
        for branch in branches:
            branch.drop(arena)
        root.drop(arena)
        log_arena_stats(LOGGER, arena.stats(), label="after drop")

    return DemoResult(
        dot_path=dot_path,
        rendered_path=image_path,
        branches=len(branches),
        stats_at_dump=stats_at_dump,
        stats_after_drop=arena.stats(),
    )


__all__ = ["DEFAULT_OUTPUT", "DemoResult", "run_demo"]
