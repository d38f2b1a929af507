"""Builds the solved board and scrambles it with legal line shifts."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator

from backend.engine.gameplay import MoveEngine
from backend.models.board import Board, Shift, Tile

logger = logging.getLogger(__name__)

DEFAULT_WIN_WORD = "CONGRATULATIONS"
DEFAULT_ROUNDS = 100


def _labels(text: str | None, count: int, fallback: list[str]) -> list[str]:
    if text is None:
        return fallback
    if len(text) != count:
        raise ValueError(f"Expected {count} label characters, got {len(text)}.")
    return list(text)


class GameGenerator:
    """Creates solvable puzzles by shuffling from the solved state."""

    @staticmethod
    def solved(
        size: int, text: str | None = None, win_text: str | None = None
    ) -> Board:
        """Return the goal-state board (all tiles in order, empty bottom-right).

        Without explicit labels tiles show their 1-based number and spell
        ``CONGRATULATIONS`` (cyclically) once the puzzle is won.
        """
        if size < 2:
            raise ValueError(f"Board size must be at least 2, got {size}.")
        count = size * size - 1
        normal = _labels(text, count, [str(i + 1) for i in range(count)])
        winning = _labels(
            win_text,
            count,
            [DEFAULT_WIN_WORD[i % len(DEFAULT_WIN_WORD)] for i in range(count)],
        )

        cells: list[list[Tile | None]] = []
        index = 0
        for r in range(size):
            row: list[Tile | None] = []
            for c in range(size):
                if r == size - 1 and c == size - 1:
                    row.append(None)
                else:
                    row.append(Tile(index, normal[index], winning[index]))
                    index += 1
            cells.append(row)
        return Board(size=size, cells=cells, empty_pos=(size - 1, size - 1))

    @staticmethod
    def iter_scramble(
        board: Board, rounds: int, rng: random.Random
    ) -> Iterator[Shift]:
        """Scramble *board* in place, yielding every applied shift.

        Each round taps a random row in the empty cell's column, then a
        random column in the empty cell's row.  Taps that land on the empty
        cell produce no shifts.
        """
        for _ in range(rounds):
            yield from MoveEngine.shift_into_empty(
                board, rng.randrange(board.size), board.empty_pos[1]
            )
            yield from MoveEngine.shift_into_empty(
                board, board.empty_pos[0], rng.randrange(board.size)
            )

    @staticmethod
    def scramble(
        board: Board,
        rounds: int = DEFAULT_ROUNDS,
        rng: random.Random | None = None,
    ) -> list[Shift]:
        """Scramble *board* in place and return the applied shifts."""
        shifts = list(
            GameGenerator.iter_scramble(board, rounds, rng or random.Random())
        )
        logger.debug(
            "Scrambled %d×%d board with %d shifts",
            board.size,
            board.size,
            len(shifts),
        )
        return shifts
