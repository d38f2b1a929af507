#!/usr/bin/env python3
"""Sliding Puzzle Game.

Usage::

    python main.py                  # interactive menu
    python main.py -f rich -s 3     # Rich terminal, 3×3
    python main.py -f pygame        # Pygame GUI
    python main.py -f rich --seed 7 --log-level debug
    python main.py -f rich --text "{MSDOTNET.MAUI}" --win-text CONGRATULATIONS
"""

import importlib
import logging
import sys
from dataclasses import replace
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.models.config import GameConfig  # noqa: E402

# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"


class LogLevel(StrEnum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
}


# -- helpers ------------------------------------------------------------------


def _setup_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _ask_size() -> int:
    raw = input("  Grid size (2-8, default 4): ").strip() or "4"
    try:
        size = int(raw)
        if not 2 <= size <= 8:
            raise ValueError
    except ValueError:
        print("  Invalid size, using 4.")
        size = 4
    return size


def _launch(frontend: Frontend, config: GameConfig) -> None:
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(config)


def _menu_loop(config: GameConfig) -> None:
    while True:
        print()
        print("  ====================================")
        print("       S L I D I N G   P U Z Z L E    ")
        print("  ====================================")
        print()
        print("  1.  Play  (Rich Terminal)")
        print("  2.  Play  (Pygame GUI)")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in ("1", "2"):
            size = _ask_size()
            frontend = Frontend.rich if choice == "1" else Frontend.pygame
            try:
                sized = replace(config, size=size)
            except ValueError as exc:
                print(f"  {exc}")
                continue
            _launch(frontend, sized)

        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    size: int = typer.Option(
        4, "-s", "--size",
        min=2, max=8,
        help="Grid size (2-8).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for a reproducible scramble.",
    ),
    shift_ms: int = typer.Option(
        100, "--shift-ms", min=0,
        help="Duration of one tile shift after a tap (ms).",
    ),
    scramble_ms: int = typer.Option(
        25, "--scramble-ms", min=0,
        help="Duration of one tile shift while scrambling (ms).",
    ),
    win_phase_ms: int = typer.Option(
        150, "--win-phase-ms", min=0,
        help="Duration of each flip/settle phase of the win animation (ms).",
    ),
    win_pause_ms: int = typer.Option(
        1500, "--win-pause-ms", min=0,
        help="Pause between the two win animation passes (ms).",
    ),
    text: Optional[str] = typer.Option(
        None, "--text",
        help="Tile labels, one character per tile (N*N-1 characters).",
    ),
    win_text: Optional[str] = typer.Option(
        None, "--win-text",
        help="Labels shown during the win animation (N*N-1 characters).",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        help="Logging verbosity.",
    ),
) -> None:
    """Sliding Puzzle Game."""
    _setup_logging(log_level)
    try:
        config = GameConfig(
            size=size,
            shift_ms=shift_ms,
            scramble_shift_ms=scramble_ms,
            win_phase_ms=win_phase_ms,
            win_pause_ms=win_pause_ms,
            text=text,
            win_text=win_text,
            seed=seed,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if frontend is None:
        _menu_loop(config)
        return

    _launch(frontend, config)


if __name__ == "__main__":
    app()
