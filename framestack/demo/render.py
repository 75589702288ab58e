"""Graph dump output and the external Graphviz invocation."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Sequence

from framestack import config as fs_config
from framestack.core.arena import FrameArena
from framestack.core.errors import FrameStackError
from framestack.logging import DEMO_LOGGER, get_logger

LOGGER = get_logger(f"{DEMO_LOGGER}.render")


class RenderError(FrameStackError, RuntimeError):
    """Raised when the external renderer is missing or exits unsuccessfully."""


def write_dot(arena: FrameArena, path: str | Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    LOGGER.info("Generating `%s`", target)
    with target.open("w", encoding="utf-8") as sink:
        arena.dump(sink)
    return target


def rendered_path(path: str | Path, render_format: str) -> Path:
    """Path produced by `dot -O`, which appends the format to the input name."""

    source = Path(path)
    return source.with_name(f"{source.name}.{render_format}")


def build_render_command(
    path: str | Path,
    *,
    renderer: str | None = None,
    render_format: str | None = None,
) -> Sequence[str]:
    runtime = fs_config.runtime_config()
    renderer = renderer or runtime.renderer
    render_format = fs_config.normalise_render_format(render_format or runtime.render_format)
    return [renderer, f"-T{render_format}", "-O", str(path)]


def render_dot(
    path: str | Path,
    *,
    renderer: str | None = None,
    render_format: str | None = None,
) -> Path:
    """Run Graphviz on `path` and return the rendered file's location."""

    runtime = fs_config.runtime_config()
    render_format = fs_config.normalise_render_format(render_format or runtime.render_format)
    cmd = build_render_command(path, renderer=renderer, render_format=render_format)
    if shutil.which(cmd[0]) is None:
        raise RenderError(f"Renderer '{cmd[0]}' was not found on PATH")
    LOGGER.debug("Running %s", " ".join(cmd))
    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise RenderError(
            f"Renderer '{cmd[0]}' exited with status {exc.returncode}: {stderr}"
        ) from exc
    except OSError as exc:
        raise RenderError(f"Renderer '{cmd[0]}' could not be started: {exc}") from exc
    return rendered_path(path, render_format)


__all__ = ["RenderError", "build_render_command", "render_dot", "rendered_path", "write_dot"]
