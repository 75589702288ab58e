"""Contract violations raised by the frame arena."""

from __future__ import annotations


class FrameStackError(Exception):
    """Base class for framestack errors."""


class InvalidFrameIndexError(FrameStackError, IndexError):
    """Raised when a reference-count operation targets an index that is not live."""

    def __init__(self, index: int, reason: str) -> None:
        super().__init__(f"Frame index {index} is {reason}")
        self.index = index


class RefCountUnderflowError(FrameStackError, RuntimeError):
    """Raised when a release would drive a slot's reference count below zero."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Reference count underflow on frame index {index}")
        self.index = index
