from __future__ import annotations

from typing import Iterator, Optional

from framestack.core.arena import FrameArena
from framestack.core.types import DataKind, Frame, FrameIndex


class TypeStack:
    """Persistent stack handle: at most one index into a shared `FrameArena`.

    Handles own exactly one reference to their top frame. Every operation that
    changes ownership goes through the arena, and a handle that is no longer
    needed must be `drop`-ped so its top is released; nothing does that
    automatically.
    """

    __slots__ = ("top",)

    def __init__(self, top: Optional[FrameIndex] = None) -> None:
        self.top = top

    @property
    def is_empty(self) -> bool:
        return self.top is None

    def clone(self, arena: FrameArena) -> "TypeStack":
        if self.top is not None:
            arena.acquire(self.top)
        return TypeStack(self.top)

    def push(self, arena: FrameArena, data_type: DataKind) -> None:
        self.top = arena.allocate(Frame(data_type=DataKind(data_type), previous=self.top))

    def pop(self, arena: FrameArena) -> None:
        if self.top is None:
            return
        frame = arena.deref(self.top)
        if frame is None:
            raise IndexError(f"Stack top {self.top} is outside the arena")
        previous = frame.previous
        # The handle takes its own reference before the popped frame gives up its one.
        if previous is not None:
            arena.acquire(previous)
        arena.release(self.top)
        self.top = previous

    def drop(self, arena: FrameArena) -> None:
        if self.top is not None:
            arena.release(self.top)
        self.top = None

    def dump(self, arena: FrameArena) -> Iterator[DataKind]:
        """Yield the payload tags from top to bottom without touching ownership."""

        current = self.top
        while current is not None:
            frame = arena.deref(current)
            if frame is None:
                raise IndexError(f"Frame index {current} is outside the arena")
            yield frame.data_type
            if frame.is_bottom:
                break
            current = frame.previous

    def depth(self, arena: FrameArena) -> int:
        return sum(1 for _ in self.dump(arena))

    def __repr__(self) -> str:
        return "TypeStack(empty)" if self.top is None else f"TypeStack(top={self.top})"


__all__ = ["TypeStack"]
