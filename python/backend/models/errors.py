"""Exceptions raised by the puzzle engine."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for engine errors."""


class OutOfRangeError(PuzzleError, IndexError):
    """A coordinate fell outside the ``[0, size)`` grid range."""

    def __init__(self, row: int, col: int, size: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is outside the {size}×{size} board."
        )
        self.row = row
        self.col = col
        self.size = size


class InvariantViolationError(PuzzleError, RuntimeError):
    """The board reached an inconsistent state.

    Only a defect in the move or scramble code can raise this; it is never
    recovered from.
    """
