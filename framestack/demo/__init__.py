"""Demonstration harness: random tree generation and Graphviz rendering."""

from .driver import DEFAULT_OUTPUT, DemoResult, run_demo
from .generator import Rand, expected_frame_count, generate_tree, rand_kind
from .render import RenderError, render_dot, rendered_path, write_dot

__all__ = [
    "DEFAULT_OUTPUT",
    "DemoResult",
    "Rand",
    "RenderError",
    "expected_frame_count",
    "generate_tree",
    "rand_kind",
    "render_dot",
    "rendered_path",
    "run_demo",
    "write_dot",
]
