from __future__ import annotations

from dataclasses import dataclass
from typing import List

from framestack.core.arena import FrameArena
from framestack.core.stack import TypeStack
from framestack.core.types import DataKind

RAND_A = 6364136223846793005
RAND_C = 1442695040888963407
_MASK_64 = (1 << 64) - 1

PUSHES_PER_LEVEL = 3


@dataclass
class Rand:
    """64-bit linear congruential generator yielding the high 32 bits of its state."""

    seed: int

    def __post_init__(self) -> None:
        self.seed &= _MASK_64

    def rand(self) -> int:
        self.seed = (RAND_A * self.seed + RAND_C) & _MASK_64
        return self.seed >> 32


def rand_kind(rand: Rand) -> DataKind:
    return DataKind(rand.rand() % len(DataKind))


def generate_tree(
    arena: FrameArena,
    rand: Rand,
    stack: TypeStack,
    level: int,
) -> List[TypeStack]:
    """Grow a ternary tree of shared stacks rooted at `stack`.

    Each level pushes three random frames and then branches twice, so every
    branch shares the frames pushed above it. The returned handles are owned by
    the caller, who must `drop` them.
    """

    if level <= 0:
        return []

    for _ in range(PUSHES_PER_LEVEL):
        stack.push(arena, rand_kind(rand))

    left = stack.clone(arena)
    right = stack.clone(arena)
    branches = [left, right]
    branches.extend(generate_tree(arena, rand, stack, level - 1))
    branches.extend(generate_tree(arena, rand, left, level - 1))
    branches.extend(generate_tree(arena, rand, right, level - 1))
    return branches


def expected_frame_count(level: int) -> int:
    """Number of frames `generate_tree` allocates for a tree of depth `level`."""

    if level <= 0:
        return 0
    return PUSHES_PER_LEVEL + 3 * expected_frame_count(level - 1)


__all__ = [
    "PUSHES_PER_LEVEL",
    "RAND_A",
    "RAND_C",
    "Rand",
    "expected_frame_count",
    "generate_tree",
    "rand_kind",
]
