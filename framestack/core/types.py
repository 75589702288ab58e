from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

FrameIndex = int

NO_FRAME: FrameIndex = -1
"""Sentinel stored in the `previous` column for a frame with no back-link."""


class DataKind(IntEnum):
    """Closed set of payload tags carried by a frame."""

    Int = 0
    Ptr = 1
    Bool = 2

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Frame:
    """One stack element: a payload tag plus a link to the element below it."""

    data_type: DataKind
    previous: Optional[FrameIndex] = None

    @property
    def is_bottom(self) -> bool:
        return self.previous is None
