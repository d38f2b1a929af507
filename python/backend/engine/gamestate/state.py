"""Tracks the mutable state of a game session."""

from __future__ import annotations

import time
from collections.abc import Callable
from enum import StrEnum

from backend.models.board import Board


class SessionState(StrEnum):
    IDLE = "idle"
    SCRAMBLING = "scrambling"
    AWAITING_MOVE = "awaiting_move"
    ANIMATING_MOVE = "animating_move"
    WON = "won"


def format_elapsed(seconds: float) -> str:
    """Round to the nearest second and format as ``M:SS`` or ``H:MM:SS``."""
    total = int(seconds + 0.5)
    h, rest = divmod(total, 3600)
    m, s = divmod(rest, 60)
    if h:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


class GameState:
    """Holds the board, session flags, move counter, and elapsed time.

    Only ``SequenceController`` writes the flags.  ``busy`` is the single
    mutual-exclusion signal; ``win_armed`` is set after a scramble and
    cleared once a win is detected; ``playing`` drives the elapsed clock.
    """

    def __init__(self, board: Board, clock: Callable[[], float] = time.time) -> None:
        self.board = board
        self.session = SessionState.IDLE
        self.busy: bool = False
        self.win_armed: bool = False
        self.playing: bool = False
        self.moves: int = 0
        self._clock = clock
        self._start_time: float = clock()
        self._elapsed_banked: float = 0.0
        self._running: bool = False

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (self._clock() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += self._clock() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = self._clock()
            self._running = True

    def restart_clock(self) -> None:
        self._elapsed_banked = 0.0
        self._start_time = self._clock()
        self._running = True

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    @property
    def is_solved(self) -> bool:
        return self.board.is_solved()
