from __future__ import annotations

from typing import Optional

import typer

from framestack import config as fs_config


def resolve_format_flag(value: Optional[str]) -> Optional[str]:
    """Validate `--format` against the formats `FRAMESTACK_RENDER_FORMAT` accepts."""

    if value is None:
        return None
    try:
        return fs_config.normalise_render_format(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


__all__ = ["resolve_format_flag"]
