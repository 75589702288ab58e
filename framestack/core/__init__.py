"""Core data structures: the reference-counted frame arena and persistent stacks."""

from .arena import ArenaStats, FrameArena, FrameSlot
from .errors import FrameStackError, InvalidFrameIndexError, RefCountUnderflowError
from .stack import TypeStack
from .types import NO_FRAME, DataKind, Frame, FrameIndex

__all__ = [
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
