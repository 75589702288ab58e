from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

SUPPORTED_RENDER_FORMATS = ("svg", "png", "pdf", "dot")
_DEFAULT_SEED = 69
_DEFAULT_TREE_DEPTH = 4
_DEFAULT_INITIAL_CAPACITY = 16


def _parse_int(raw: str | None, *, default: int, name: str) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid integer value '{raw}' for {name}") from exc


def normalise_render_format(value: str | None) -> str:
    if value is None:
        return "svg"
    value = value.strip().lower()
    if value not in SUPPORTED_RENDER_FORMATS:
        raise ValueError(
            f"Unsupported render format '{value}'. Expected one of {SUPPORTED_RENDER_FORMATS}."
        )
    return value


def _infer_tree_depth_from_env() -> int:
    depth = _parse_int(
        os.getenv("FRAMESTACK_TREE_DEPTH"), default=_DEFAULT_TREE_DEPTH, name="FRAMESTACK_TREE_DEPTH"
    )
    if depth < 0:
        raise ValueError(f"Tree depth must be non-negative, got {depth}.")
    return depth


def _infer_initial_capacity_from_env() -> int:
    capacity = _parse_int(
        os.getenv("FRAMESTACK_INITIAL_CAPACITY"),
        default=_DEFAULT_INITIAL_CAPACITY,
        name="FRAMESTACK_INITIAL_CAPACITY",
    )
    if capacity <= 0:
        raise ValueError(f"Initial capacity must be positive, got {capacity}.")
    return capacity


@dataclass(frozen=True)
class RuntimeConfig:
    log_level: str
    seed: int
    tree_depth: int
    initial_capacity: int
    renderer: str
    render_format: str


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("framestack")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    log_level = os.getenv("FRAMESTACK_LOG_LEVEL", "INFO").upper()
    seed = _parse_int(os.getenv("FRAMESTACK_SEED"), default=_DEFAULT_SEED, name="FRAMESTACK_SEED")
    renderer = os.getenv("FRAMESTACK_RENDERER", "dot").strip() or "dot"

    config = RuntimeConfig(
        log_level=log_level,
        seed=seed,
        tree_depth=_infer_tree_depth_from_env(),
        initial_capacity=_infer_initial_capacity_from_env(),
        renderer=renderer,
        render_format=normalise_render_format(os.getenv("FRAMESTACK_RENDER_FORMAT")),
    )
    _configure_logging(config.log_level)
    return config


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()
