from backend.models.board import Board, Direction, Shift, Tile
from backend.models.config import GameConfig
from backend.models.errors import (
    InvariantViolationError,
    OutOfRangeError,
    PuzzleError,
)

__all__ = [
    "Board",
    "Direction",
    "GameConfig",
    "InvariantViolationError",
    "OutOfRangeError",
    "PuzzleError",
    "Shift",
    "Tile",
]
