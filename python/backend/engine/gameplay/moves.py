"""Line-shift move rule: plans and applies shift chains on a board."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from backend.models.board import Board, Direction, Shift
from backend.models.errors import InvariantViolationError

logger = logging.getLogger(__name__)

# Offset from the empty cell to the tile that slides in, keyed by the
# direction the *tile* travels.
# UP   → tile at (er+1, ec) moves up   → empty shifts down
# DOWN → tile at (er-1, ec) moves down → empty shifts up
# LEFT → tile at (er, ec+1) moves left → empty shifts right
# RIGHT→ tile at (er, ec-1) moves right→ empty shifts left
_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class MoveEngine:
    """Stateless move rule. All methods are static."""

    @staticmethod
    def plan_shift(
        tapped_row: int, tapped_col: int, empty_row: int, empty_col: int
    ) -> list[Shift]:
        """Return the single-cell shifts that bring the tapped tile to the empty cell.

        Tiles between the tapped cell and the empty cell each advance one
        cell toward the empty cell, nearest first.  A tap that shares
        neither row nor column with the empty cell (or is the empty cell)
        yields ``[]``.
        """
        shifts: list[Shift] = []

        # Shift along the row.
        if tapped_row == empty_row and tapped_col != empty_col:
            inc = _sign(tapped_col - empty_col)
            hole = empty_col
            for col in range(empty_col + inc, tapped_col + inc, inc):
                shifts.append(Shift(empty_row, col, empty_row, hole))
                hole = col

        # Shift along the column.
        elif tapped_col == empty_col and tapped_row != empty_row:
            inc = _sign(tapped_row - empty_row)
            hole = empty_row
            for row in range(empty_row + inc, tapped_row + inc, inc):
                shifts.append(Shift(row, empty_col, hole, empty_col))
                hole = row

        return shifts

    @staticmethod
    def apply_shift(board: Board, shift: Shift) -> None:
        """Move the tile at ``shift.source`` into the empty cell."""
        if shift.target != board.empty_pos:
            raise InvariantViolationError(
                f"Shift targets {shift.target} but the empty cell is at "
                f"{board.empty_pos}."
            )
        fr, fc = shift.source
        if (fr == shift.to_row) == (fc == shift.to_col):
            raise InvariantViolationError(
                f"Shift {shift.source} → {shift.target} is not along a row "
                f"or column."
            )
        tile = board.tile_at(fr, fc)
        if tile is None:
            raise InvariantViolationError(
                f"Shift source {shift.source} holds no tile."
            )
        board.place_tile(tile, shift.to_row, shift.to_col)
        board.clear_cell(fr, fc)
        board.check_invariants()

    @staticmethod
    def shift_into_empty(board: Board, row: int, col: int) -> Iterator[Shift]:
        """Apply the chain for a tap on (row, col), yielding after each shift.

        Each shift is already applied to *board* when it is yielded, so a
        caller suspended between shifts always sees a consistent board.
        """
        board.check_range(row, col)
        er, ec = board.empty_pos
        for shift in MoveEngine.plan_shift(row, col, er, ec):
            MoveEngine.apply_shift(board, shift)
            yield shift

    @staticmethod
    def tap(board: Board, row: int, col: int) -> list[Shift]:
        """Apply a whole chain at once and return it."""
        shifts = list(MoveEngine.shift_into_empty(board, row, col))
        logger.debug("Tap on (%d, %d) applied %d shift(s)", row, col, len(shifts))
        return shifts

    @staticmethod
    def target_for(board: Board, direction: Direction) -> tuple[int, int] | None:
        """Return the cell whose tile slides in *direction*, or None if off-board."""
        er, ec = board.empty_pos
        dr, dc = _OFFSETS[direction]
        tr, tc = er + dr, ec + dc
        if not board.in_range(tr, tc):
            return None
        return tr, tc
