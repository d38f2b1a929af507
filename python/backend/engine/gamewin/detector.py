"""Win condition."""

from __future__ import annotations

from backend.models.board import Board


class WinDetector:
    """Stateless win check. All methods are static."""

    @staticmethod
    def check_win(board: Board) -> bool:
        """Return True if every tile sits at its home cell and the empty cell is last."""
        return board.is_solved()
