"""Logger names for the arena and demo layers, plus arena occupancy reporting."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from . import config as fs_config

if TYPE_CHECKING:
    from framestack.core.arena import ArenaStats

ROOT_LOGGER = "framestack"
ARENA_LOGGER = "core.arena"
DEMO_LOGGER = "demo"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return `framestack.<name>` at the level from `RuntimeConfig`."""

    logger_name = ROOT_LOGGER if name is None else f"{ROOT_LOGGER}.{name}"
    runtime = fs_config.runtime_config()
    logger = logging.getLogger(logger_name)
    logger.setLevel(runtime.log_level)
    return logger


def log_arena_stats(logger: logging.Logger, stats: "ArenaStats", *, label: str) -> None:
    logger.debug(
        "Arena %s: live=%d free=%d capacity=%d references=%d",
        label,
        stats.live,
        stats.free,
        stats.capacity,
        stats.total_references,
    )
