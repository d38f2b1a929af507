"""Serializes moves, scrambles, and the win celebration.

The controller runs on an asyncio event loop.  Every animated step is an
``await`` on the frontend's renderer; returning from that call is the signal
that the animation finished and the next step may start.  The ``busy`` flag
is checked and set before the first ``await`` of a sequence, so a second
tap or scramble request arriving while a sequence runs is simply dropped.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Callable
from enum import StrEnum
from typing import Protocol

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import MoveEngine
from backend.engine.gamestate import GameState, SessionState, format_elapsed
from backend.engine.gamewin import WinDetector
from backend.models.board import Board, Direction, Shift, Tile
from backend.models.config import GameConfig

logger = logging.getLogger(__name__)

WIN_PASSES = 2


class WinPhase(StrEnum):
    FLIP = "flip"
    SHOW_WIN_TEXT = "show_win_text"
    SHOW_NORMAL_TEXT = "show_normal_text"
    SETTLE = "settle"


class Renderer(Protocol):
    """What a frontend implements to display the engine."""

    async def on_tile_shift(self, shift: Shift, duration_ms: int) -> None:
        """Animate one tile from ``shift.source`` to ``shift.target``."""

    async def on_win_sequence_step(
        self, tile: Tile, phase: WinPhase, duration_ms: int
    ) -> None:
        """Animate one phase of a tile's celebration."""

    def on_state_changed(self, state: SessionState) -> None:
        """Enable or disable input affordances."""

    def on_elapsed_time_tick(self, text: str) -> None:
        """Display the elapsed play time."""


class SequenceController:
    """Owns the game session and runs one move/scramble/win sequence at a time."""

    def __init__(
        self,
        renderer: Renderer,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config or GameConfig()
        self.renderer = renderer
        self._rng = rng or random.Random(self.config.seed)
        self.state = GameState(self._new_board(), clock=clock)
        self._ticker: asyncio.Task[None] | None = None

    # -- queries --------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def session(self) -> SessionState:
        return self.state.session

    @property
    def busy(self) -> bool:
        return self.state.busy

    # -- inbound --------------------------------------------------------------

    async def on_tile_tapped(self, row: int, col: int) -> list[Shift]:
        """Shift the tapped tile's line into the empty cell.

        Returns the applied shifts; ``[]`` when the tap was dropped because
        a sequence is running or when it shares no line with the empty cell.
        """
        self.board.check_range(row, col)
        if self.state.busy:
            logger.debug("Tap on (%d, %d) dropped: busy", row, col)
            return []

        er, ec = self.board.empty_pos
        if not MoveEngine.plan_shift(row, col, er, ec):
            return []

        self.state.busy = True
        applied: list[Shift] = []
        try:
            self._set_session(SessionState.ANIMATING_MOVE)
            for shift in MoveEngine.shift_into_empty(self.board, row, col):
                applied.append(shift)
                await self.renderer.on_tile_shift(shift, self.config.shift_ms)
            self.state.increment_moves()
            logger.debug("Tap on (%d, %d) moved %d tile(s)", row, col, len(applied))

            if self.state.win_armed and WinDetector.check_win(self.board):
                await self._run_win_sequence()
        finally:
            self.state.busy = False
            self._set_session(SessionState.AWAITING_MOVE)
        return applied

    async def on_direction(self, direction: Direction) -> list[Shift]:
        """Slide the tile next to the empty cell in *direction*."""
        target = MoveEngine.target_for(self.board, direction)
        if target is None:
            return []
        return await self.on_tile_tapped(*target)

    async def on_scramble_requested(self) -> list[Shift]:
        """Scramble the board with animated random line shifts and start play."""
        if self.state.busy:
            logger.debug("Scramble request dropped: busy")
            return []

        self.state.busy = True
        self.state.win_armed = False
        self.state.playing = False
        self.state.pause()
        applied: list[Shift] = []
        finished = False
        try:
            self._set_session(SessionState.SCRAMBLING)
            for shift in GameGenerator.iter_scramble(
                self.board, self.config.scramble_rounds, self._rng
            ):
                applied.append(shift)
                await self.renderer.on_tile_shift(
                    shift, self.config.scramble_shift_ms
                )
            finished = True
        finally:
            self.state.busy = False
            if not finished:
                # Half-scrambled board with win checking off.
                self._set_session(SessionState.IDLE)

        self.state.moves = 0
        self.state.restart_clock()
        self.state.playing = True
        self.state.win_armed = True
        logger.info("Scramble finished after %d shifts", len(applied))
        self._set_session(SessionState.AWAITING_MOVE)
        self._start_ticker()
        return applied

    def reset(self) -> bool:
        """Put a fresh solved board in place; False if a sequence is running."""
        if self.state.busy:
            logger.debug("Reset dropped: busy")
            return False
        self.state.board = self._new_board()
        self.state.win_armed = False
        self.state.playing = False
        self.state.moves = 0
        self.state.pause()
        logger.info("Board reset")
        self._set_session(SessionState.IDLE)
        return True

    # -- sequences ------------------------------------------------------------

    async def _run_win_sequence(self) -> None:
        self.state.win_armed = False
        self.state.playing = False
        self.state.pause()
        logger.info(
            "Solved in %d moves, %s",
            self.state.moves,
            format_elapsed(self.state.elapsed_time),
        )
        self._set_session(SessionState.WON)

        for cycle in range(WIN_PASSES):
            label = WinPhase.SHOW_WIN_TEXT if cycle == 0 else WinPhase.SHOW_NORMAL_TEXT
            for tile in list(self.board.tiles()):
                await self.renderer.on_win_sequence_step(
                    tile, WinPhase.FLIP, self.config.win_phase_ms
                )
                await self.renderer.on_win_sequence_step(tile, label, 0)
                await self.renderer.on_win_sequence_step(
                    tile, WinPhase.SETTLE, self.config.win_phase_ms
                )
            if cycle < WIN_PASSES - 1:
                await asyncio.sleep(self.config.win_pause_ms / 1000)

    # -- elapsed time ---------------------------------------------------------

    def _start_ticker(self) -> None:
        if self._ticker is not None and not self._ticker.done():
            return
        self._ticker = asyncio.get_running_loop().create_task(self._tick())

    async def _tick(self) -> None:
        interval = self.config.tick_interval_ms / 1000
        while True:
            await asyncio.sleep(interval)
            if not self.state.playing:
                return
            self.renderer.on_elapsed_time_tick(format_elapsed(self.state.elapsed_time))

    # -- helpers --------------------------------------------------------------

    def _new_board(self) -> Board:
        return GameGenerator.solved(
            self.config.size, self.config.text, self.config.win_text
        )

    def _set_session(self, session: SessionState) -> None:
        self.state.session = session
        self.renderer.on_state_changed(session)
