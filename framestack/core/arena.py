from __future__ import annotations

import io
from dataclasses import dataclass
from typing import List, Optional, TextIO, Tuple

import numpy as np

from framestack import config as fs_config
from framestack.core.errors import InvalidFrameIndexError, RefCountUnderflowError
from framestack.core.types import NO_FRAME, DataKind, Frame, FrameIndex
from framestack.logging import ARENA_LOGGER, get_logger

LOGGER = get_logger(ARENA_LOGGER)

_KIND_DTYPE = np.int8
_INDEX_DTYPE = np.int64


@dataclass(frozen=True)
class ArenaStats:
    """Occupancy snapshot of a `FrameArena`."""

    live: int
    free: int
    capacity: int
    total_references: int

    @property
    def slots(self) -> int:
        return self.live + self.free


class FrameSlot:
    """Mutable view onto the payload stored at one arena index."""

    __slots__ = ("_arena", "index")

    def __init__(self, arena: "FrameArena", index: FrameIndex) -> None:
        self._arena = arena
        self.index = index

    @property
    def data_type(self) -> DataKind:
        return DataKind(int(self._arena._kinds[self.index]))

    @data_type.setter
    def data_type(self, value: DataKind) -> None:
        self._arena._kinds[self.index] = int(DataKind(value))

    @property
    def previous(self) -> Optional[FrameIndex]:
        return _decode_previous(self._arena._previous[self.index])

    @previous.setter
    def previous(self, value: Optional[FrameIndex]) -> None:
        self._arena._previous[self.index] = NO_FRAME if value is None else int(value)

    @property
    def ref_count(self) -> int:
        return int(self._arena._ref_counts[self.index])

    def freeze(self) -> Frame:
        return Frame(data_type=self.data_type, previous=self.previous)

    def __repr__(self) -> str:
        return (
            f"FrameSlot(index={self.index}, data_type={self.data_type.name}, "
            f"previous={self.previous}, ref_count={self.ref_count})"
        )


def _decode_previous(raw: np.integer) -> Optional[FrameIndex]:
    value = int(raw)
    return None if value == NO_FRAME else value


class FrameArena:
    """Reference-counted slot table holding every frame of every stack.

    Slots live in three parallel columns (`kinds`, `previous`, `ref_counts`)
    addressed by a stable integer index. A slot is live while its count is at
    least one; once the count reaches zero the slot's back-link is released in
    turn and the index is pushed on the free list, from which `allocate` pops
    before growing the table.
    """

    def __init__(self, initial_capacity: int | None = None) -> None:
        if initial_capacity is None:
            initial_capacity = fs_config.runtime_config().initial_capacity
        if initial_capacity <= 0:
            raise ValueError(f"initial_capacity must be positive, got {initial_capacity}.")
        self._kinds = np.zeros(initial_capacity, dtype=_KIND_DTYPE)
        self._previous = np.full(initial_capacity, NO_FRAME, dtype=_INDEX_DTYPE)
        self._ref_counts = np.zeros(initial_capacity, dtype=_INDEX_DTYPE)
        self._size = 0
        self._free: List[FrameIndex] = []

    # ------------------------------------------------------------------
    # storage

    @property
    def capacity(self) -> int:
        return int(self._kinds.shape[0])

    def _grow(self) -> None:
        old_capacity = self.capacity
        new_capacity = max(1, old_capacity * 2)
        extra = new_capacity - old_capacity
        self._kinds = np.concatenate([self._kinds, np.zeros(extra, dtype=_KIND_DTYPE)])
        self._previous = np.concatenate(
            [self._previous, np.full(extra, NO_FRAME, dtype=_INDEX_DTYPE)]
        )
        self._ref_counts = np.concatenate(
            [self._ref_counts, np.zeros(extra, dtype=_INDEX_DTYPE)]
        )
        LOGGER.debug("Grew frame arena from %d to %d slots.", old_capacity, new_capacity)

    def _check_live(self, index: FrameIndex) -> None:
        if index < 0 or index >= self._size:
            raise InvalidFrameIndexError(index, f"outside the arena (size {self._size})")
        if self._ref_counts[index] <= 0:
            raise InvalidFrameIndexError(index, "on the free list")

    # ------------------------------------------------------------------
    # reference counting

    def allocate(self, frame: Frame) -> FrameIndex:
        """Store `frame` with a reference count of one and return its index.

        The new frame takes over the caller's reference to `frame.previous`;
        no acquire is performed on it.
        """

        if frame.previous is not None:
            self._check_live(frame.previous)
        if self._free:
            index = self._free.pop()
        else:
            if self._size == self.capacity:
                self._grow()
            index = self._size
            self._size += 1
        self._kinds[index] = int(frame.data_type)
        self._previous[index] = NO_FRAME if frame.previous is None else frame.previous
        self._ref_counts[index] = 1
        return index

    def acquire(self, index: FrameIndex) -> None:
        self._check_live(index)
        self._ref_counts[index] += 1

    def release(self, index: FrameIndex) -> None:
        """Drop one reference to `index`, reclaiming the chain below it as needed.

        When a count reaches zero its back-link is released next, so a whole
        suffix is reclaimed once its last holder lets go. Reclaimed indices
        enter the free list oldest-first. The whole cascade is checked before
        any count is written, so an underflow leaves the arena untouched.
        """

        if index < 0 or index >= self._size:
            raise InvalidFrameIndexError(index, f"outside the arena (size {self._size})")
        reclaimed: List[FrameIndex] = []
        survivor: Optional[FrameIndex] = None
        current = index
        while True:
            count = int(self._ref_counts[current])
            if count <= 0:
                raise RefCountUnderflowError(current)
            if count > 1:
                survivor = current
                break
            reclaimed.append(current)
            previous = int(self._previous[current])
            if previous == NO_FRAME:
                break
            current = previous
        if survivor is not None:
            self._ref_counts[survivor] -= 1
        if reclaimed:
            self._ref_counts[reclaimed] = 0
            self._free.extend(reversed(reclaimed))

    # ------------------------------------------------------------------
    # access

    def deref(self, index: FrameIndex) -> Optional[Frame]:
        if index < 0 or index >= self._size:
            return None
        return Frame(
            data_type=DataKind(int(self._kinds[index])),
            previous=_decode_previous(self._previous[index]),
        )

    def deref_mut(self, index: FrameIndex) -> Optional[FrameSlot]:
        if index < 0 or index >= self._size:
            return None
        return FrameSlot(self, index)

    def ref_count(self, index: FrameIndex) -> int:
        if index < 0 or index >= self._size:
            raise InvalidFrameIndexError(index, f"outside the arena (size {self._size})")
        return int(self._ref_counts[index])

    def is_live(self, index: FrameIndex) -> bool:
        return 0 <= index < self._size and bool(self._ref_counts[index] > 0)

    def live_indices(self) -> Tuple[FrameIndex, ...]:
        return tuple(int(i) for i in np.flatnonzero(self._ref_counts[: self._size] > 0))

    def free_indices(self) -> Tuple[FrameIndex, ...]:
        return tuple(self._free)

    def __len__(self) -> int:
        return self._size - len(self._free)

    def stats(self) -> ArenaStats:
        return ArenaStats(
            live=len(self),
            free=len(self._free),
            capacity=self.capacity,
            total_references=int(self._ref_counts[: self._size].sum()),
        )

    # ------------------------------------------------------------------
    # graph dump

    def dump(self, sink: TextIO) -> None:
        """Write every live slot to `sink` as a Graphviz digraph."""

        free = set(self._free)
        sink.write("digraph Stacks {\n")
        for index in range(self._size):
            if index in free:
                continue
            kind = DataKind(int(self._kinds[index]))
            count = int(self._ref_counts[index])
            sink.write(f'    node_{index} [label="{kind.name} ({count})"]\n')
            previous = int(self._previous[index])
            if previous != NO_FRAME:
                sink.write(f"    node_{index} -> node_{previous}\n")
        sink.write("}\n")

    def to_dot(self) -> str:
        buffer = io.StringIO()
        self.dump(buffer)
        return buffer.getvalue()


__all__ = ["ArenaStats", "FrameArena", "FrameSlot"]
