"""Framestack: persistent stacks sharing suffixes through a reference-counted arena.

Quick Start
-----------
>>> from framestack import DataKind, FrameArena, TypeStack
>>>
>>> arena = FrameArena()
>>> stack = TypeStack()
>>> stack.push(arena, DataKind.Int)
>>> stack.push(arena, DataKind.Bool)
>>> branch = stack.clone(arena)   # O(1), shares every frame
>>> branch.pop(arena)
>>> list(branch.dump(arena))
[<DataKind.Int: 0>]

Classes
-------
FrameArena : Slot table owning frames, with reference counts and a free list.
TypeStack : Handle to the top frame of one logical stack.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("framestack")
except Exception:  # pragma: no cover - best effort during local development
    __version__ = "0.0.1"

from .core import (
    NO_FRAME,
    ArenaStats,
    DataKind,
    Frame,
    FrameArena,
    FrameIndex,
    FrameSlot,
    FrameStackError,
    InvalidFrameIndexError,
    RefCountUnderflowError,
    TypeStack,
)

__all__ = [
    "__version__",
    "ArenaStats",
    "DataKind",
    "Frame",
    "FrameArena",
    "FrameIndex",
    "FrameSlot",
    "FrameStackError",
    "InvalidFrameIndexError",
    "NO_FRAME",
    "RefCountUnderflowError",
    "TypeStack",
]
