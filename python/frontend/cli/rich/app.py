"""Rich terminal frontend: styled board, live animations, elapsed clock.

Implements the controller's renderer callbacks by redrawing the board and
sleeping for each animation's duration.  Keys are read by the event loop
while a sequence animates, so taps during an animation reach the
controller and are dropped there.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gamecontroller import SequenceController, WinPhase
from backend.engine.gamestate import SessionState
from backend.models.board import Board, Direction, Shift, Tile
from backend.models.config import GameConfig
from frontend.cli.input_handler import KeyReader

console = Console()

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

_CURSOR = {
    "cursor_up": (-1, 0),
    "cursor_down": (1, 0),
    "cursor_left": (0, -1),
    "cursor_right": (0, 1),
}

_STATE_LABELS = {
    SessionState.IDLE: "[dim]Press R to randomize[/dim]",
    SessionState.SCRAMBLING: "[yellow]Scrambling…[/yellow]",
    SessionState.AWAITING_MOVE: "[cyan]Your move[/cyan]",
    SessionState.ANIMATING_MOVE: "[cyan]Moving…[/cyan]",
    SessionState.WON: "[bold green]★ Solved! ★[/bold green]",
}


# -- board rendering ----------------------------------------------------------


def _render_board(
    board: Board,
    cursor: tuple[int, int],
    moving: tuple[int, int] | None,
    flipping: int | None,
    win_labels: set[int],
) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = max((len(t.text) for t in board.tiles()), default=1)
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(board.cells):
        cells: list[str] = []
        for c, tile in enumerate(row):
            if tile is None:
                text, style = "·", "dim"
            else:
                text = tile.win_text if tile.index in win_labels else tile.text
                if tile.index == flipping:
                    style = "bold magenta"
                elif (r, c) == moving:
                    style = "bold yellow"
                elif board.is_tile_correct(r, c):
                    style = "bold green"
                else:
                    style = "bold white"
            if (r, c) == cursor:
                style += " reverse"
            cells.append(f"[{style}]{escape(text):>{width}}[/{style}]")
        table.add_row(*cells)

    return table


# -- renderer -----------------------------------------------------------------


class RichView:
    """Renderer callbacks that redraw the whole screen with Rich."""

    def __init__(self) -> None:
        self.controller: SequenceController | None = None
        self.cursor: tuple[int, int] = (0, 0)
        self._moving: tuple[int, int] | None = None
        self._flipping: int | None = None
        self._win_labels: set[int] = set()
        self._session = SessionState.IDLE
        self._time_text = "0:00"

    def attach(self, controller: SequenceController) -> None:
        self.controller = controller
        last = controller.board.size - 1
        self.cursor = (last, last)

    def move_cursor(self, dr: int, dc: int) -> None:
        assert self.controller is not None
        last = self.controller.board.size - 1
        r, c = self.cursor
        self.cursor = (min(max(r + dr, 0), last), min(max(c + dc, 0), last))
        self.draw()

    def clear_labels(self) -> None:
        self._win_labels.clear()
        self._time_text = "0:00"

    # -- Renderer protocol ----------------------------------------------------

    async def on_tile_shift(self, shift: Shift, duration_ms: int) -> None:
        self._moving = shift.target
        self.draw()
        await asyncio.sleep(duration_ms / 1000)
        self._moving = None

    async def on_win_sequence_step(
        self, tile: Tile, phase: WinPhase, duration_ms: int
    ) -> None:
        if phase == WinPhase.SHOW_WIN_TEXT:
            self._win_labels.add(tile.index)
        elif phase == WinPhase.SHOW_NORMAL_TEXT:
            self._win_labels.discard(tile.index)
        elif phase == WinPhase.FLIP:
            self._flipping = tile.index
        self.draw()
        await asyncio.sleep(duration_ms / 1000)
        if phase == WinPhase.SETTLE:
            self._flipping = None

    def on_state_changed(self, state: SessionState) -> None:
        self._session = state
        self.draw()

    def on_elapsed_time_tick(self, text: str) -> None:
        self._time_text = text
        self.draw()

    # -- drawing --------------------------------------------------------------

    def draw(self) -> None:
        controller = self.controller
        if controller is None:
            return
        console.clear()

        size = controller.board.size
        board_table = _render_board(
            controller.board,
            self.cursor,
            self._moving,
            self._flipping,
            self._win_labels,
        )

        stats = Text()
        stats.append("  Moves: ", style="dim")
        stats.append(str(controller.state.moves), style="bold yellow")
        stats.append("    Time: ", style="dim")
        stats.append(self._time_text, style="bold yellow")

        randomize_style = "dim" if controller.busy else "bold yellow"
        controls = Text()
        controls.append("  ↑↓←→", style="bold cyan")
        controls.append("  cursor   ", style="dim")
        controls.append("Space", style="bold cyan")
        controls.append("  tap   ", style="dim")
        controls.append("WASD", style="bold cyan")
        controls.append("  slide   ", style="dim")
        controls.append("R", style=randomize_style)
        controls.append("  randomize   ", style="dim")
        controls.append("X", style="bold cyan")
        controls.append("  reset   ", style="dim")
        controls.append("Q", style="bold cyan")
        controls.append("  quit", style="dim")

        won = self._session == SessionState.WON
        panel = Panel(
            Group(
                Align.center(board_table),
                Text(""),
                Align.center(Text.from_markup(_STATE_LABELS[self._session])),
            ),
            title=f"[bold cyan]Sliding Puzzle  {size}×{size}[/bold cyan]",
            border_style="bold green" if won else "bright_blue",
            padding=(1, 2),
        )

        console.print()
        console.print(Align.center(panel))
        console.print(Align.center(stats))
        console.print(Align.center(controls))


# -- game loop ----------------------------------------------------------------


async def _play(config: GameConfig) -> None:
    view = RichView()
    controller = SequenceController(view, config)
    view.attach(controller)
    view.draw()

    pending: set[asyncio.Task[Any]] = set()
    failures: list[BaseException] = []

    with KeyReader() as keys:

        def _spawn(coro: Coroutine[Any, Any, Any]) -> None:
            # Taps run as tasks so the key loop keeps reading; the controller
            # drops whatever arrives while it is busy.
            task = asyncio.create_task(coro)
            pending.add(task)
            task.add_done_callback(_finished)

        def _finished(task: asyncio.Task[Any]) -> None:
            pending.discard(task)
            if not task.cancelled() and task.exception() is not None:
                failures.append(task.exception())
                keys.push("quit")

        while True:
            action = await keys.get()

            if action == "quit":
                break
            elif action in _DIRECTIONS:
                _spawn(controller.on_direction(_DIRECTIONS[action]))
            elif action in _CURSOR:
                view.move_cursor(*_CURSOR[action])
            elif action == "tap":
                _spawn(controller.on_tile_tapped(*view.cursor))
            elif action == "randomize":
                if not controller.busy:
                    view.clear_labels()
                _spawn(controller.on_scramble_requested())
            elif action == "reset":
                if controller.reset():
                    view.clear_labels()
                    view.draw()

    console.clear()
    console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
    if failures:
        raise failures[0]


# -- public entry point -------------------------------------------------------


def run(config: GameConfig) -> None:
    """Launch the Rich terminal game."""
    asyncio.run(_play(config))
