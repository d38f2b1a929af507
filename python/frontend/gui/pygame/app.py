"""Pygame GUI frontend with animated tile shifts and win sequence.

Runs the pygame frame loop as an asyncio coroutine so the sequence
controller can await animations: every renderer callback registers a tween
and returns a future that the frame loop resolves once the tween has run
for its duration.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any

import pygame

from backend.engine.gamecontroller import SequenceController, WinPhase
from backend.engine.gamestate import SessionState
from backend.models.board import Direction, Shift, Tile
from backend.models.config import GameConfig

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 500, 620
TILE_GAP = 4
MARGIN = 20
BOARD_TOP = 110
BOARD_MAX = WIN_W - 2 * MARGIN  # max board width/height in px
FPS = 60
WIN_SCALE = 3.0


# ---------------------------------------------------------------------------
# Tweens
# ---------------------------------------------------------------------------
@dataclass
class _Tween:
    tile: int
    start: float
    duration: float
    done: asyncio.Future[None]

    def progress(self, now: float) -> float:
        if self.duration <= 0:
            return 1.0
        return min(1.0, (now - self.start) / self.duration)


@dataclass
class _Slide(_Tween):
    source: tuple[int, int] = (0, 0)
    target: tuple[int, int] = (0, 0)


@dataclass
class _Spin(_Tween):
    phase: WinPhase = WinPhase.FLIP


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "enabled", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.enabled = True
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        if not self.enabled:
            c, fg = COL_SURFACE0, COL_OVERLAY0
        else:
            c, fg = (self.hover if self._hot else self.bg), self.fg
        pygame.draw.rect(surf, c, self.rect, border_radius=8)
        lbl = self.font.render(self.text, True, fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.enabled and self.rect.collidepoint(pos)


def _cx(w: int) -> int:
    return (WIN_W - w) // 2


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    _KEY_DIRS = {
        pygame.K_UP: Direction.UP,
        pygame.K_w: Direction.UP,
        pygame.K_DOWN: Direction.DOWN,
        pygame.K_s: Direction.DOWN,
        pygame.K_LEFT: Direction.LEFT,
        pygame.K_a: Direction.LEFT,
        pygame.K_RIGHT: Direction.RIGHT,
        pygame.K_d: Direction.RIGHT,
    }

    def __init__(self, config: GameConfig) -> None:
        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Sliding Puzzle")

        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_time = pygame.font.SysFont("Helvetica", 26, bold=True)
        self._f_btn = pygame.font.SysFont("Helvetica", 15, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self.controller = SequenceController(self, config)
        sz = config.size
        self._tile_px = (BOARD_MAX - (sz + 1) * TILE_GAP) // sz
        self._f_tile = pygame.font.SysFont(
            "Helvetica", max(14, int(self._tile_px * 0.4)), bold=True
        )
        self._f_badge = pygame.font.SysFont(
            "Helvetica", max(9, self._tile_px // 7)
        )

        self._slide: _Slide | None = None
        self._spin: _Spin | None = None
        self._win_labels: set[int] = set()
        self._time_text = ""
        self._session = SessionState.IDLE

        self._randomize_btn = _Btn(
            (_cx(320), 54, 150, 40), "RANDOMIZE (R)", self._f_btn,
            bg=COL_PINK, hover=(245, 210, 227), fg=COL_BASE,
        )
        self._reset_btn = _Btn(
            (_cx(320) + 170, 54, 150, 40), "RESET (X)", self._f_btn,
        )
        self._buttons = [self._randomize_btn, self._reset_btn]

        self._pending: set[asyncio.Task[Any]] = set()
        self._failures: list[BaseException] = []

    # ── geometry ────────────────────────────────────────────────────────────

    def _origin(self) -> tuple[int, int, int]:
        sz = self.controller.board.size
        total = sz * self._tile_px + (sz + 1) * TILE_GAP
        return _cx(total) + TILE_GAP, BOARD_TOP + TILE_GAP, total

    def _cell_xy(self, r: float, c: float) -> tuple[float, float]:
        ox, oy, _ = self._origin()
        return ox + c * (self._tile_px + TILE_GAP), oy + r * (self._tile_px + TILE_GAP)

    def _cell_at(self, pos: tuple[int, int]) -> tuple[int, int] | None:
        sz = self.controller.board.size
        for r in range(sz):
            for c in range(sz):
                x, y = self._cell_xy(r, c)
                if pygame.Rect(x, y, self._tile_px, self._tile_px).collidepoint(pos):
                    return r, c
        return None

    # ── Renderer protocol ───────────────────────────────────────────────────

    async def on_tile_shift(self, shift: Shift, duration_ms: int) -> None:
        tile = self.controller.board.tile_at(*shift.target)
        assert tile is not None
        done = asyncio.get_running_loop().create_future()
        self._slide = _Slide(
            tile.index, time.monotonic(), duration_ms / 1000, done,
            source=shift.source, target=shift.target,
        )
        await done
        self._slide = None

    async def on_win_sequence_step(
        self, tile: Tile, phase: WinPhase, duration_ms: int
    ) -> None:
        if phase == WinPhase.SHOW_WIN_TEXT:
            self._win_labels.add(tile.index)
            return
        if phase == WinPhase.SHOW_NORMAL_TEXT:
            self._win_labels.discard(tile.index)
            return
        done = asyncio.get_running_loop().create_future()
        self._spin = _Spin(
            tile.index, time.monotonic(), duration_ms / 1000, done, phase=phase
        )
        await done
        if phase == WinPhase.SETTLE:
            self._spin = None

    def on_state_changed(self, state: SessionState) -> None:
        self._session = state
        self._randomize_btn.enabled = state not in (
            SessionState.SCRAMBLING,
            SessionState.WON,
        )
        self._reset_btn.enabled = self._randomize_btn.enabled
        if state == SessionState.IDLE:
            self._time_text = ""
            self._win_labels.clear()

    def on_elapsed_time_tick(self, text: str) -> None:
        self._time_text = text

    # ── animation bookkeeping ───────────────────────────────────────────────

    def _advance(self, now: float) -> None:
        """Resolve tweens whose duration has elapsed, resuming the controller."""
        for tween in (self._slide, self._spin):
            if tween is not None and tween.progress(now) >= 1.0 and not tween.done.done():
                tween.done.set_result(None)

    # ── drawing ─────────────────────────────────────────────────────────────

    def _tile_surface(self, tile: Tile) -> pygame.Surface:
        tpx = self._tile_px
        surf = pygame.Surface((tpx, tpx), pygame.SRCALPHA)
        won = tile.index in self._win_labels
        pygame.draw.rect(
            surf, COL_GREEN if won else COL_BLUE, surf.get_rect(), border_radius=6
        )
        pygame.draw.rect(
            surf, COL_LAVENDER, surf.get_rect(), width=2, border_radius=6
        )
        label = self._f_tile.render(tile.win_text if won else tile.text, True, COL_BASE)
        surf.blit(label, ((tpx - label.get_width()) // 2, (tpx - label.get_height()) // 2))
        badge = self._f_badge.render(str(tile.index + 1), True, COL_SURFACE0)
        surf.blit(badge, (tpx - badge.get_width() - 4, tpx - badge.get_height() - 2))
        return surf

    def _draw(self, now: float) -> None:
        self._surf.fill(COL_BASE)
        board = self.controller.board
        sz = board.size

        title = self._f_title.render(f"Sliding Puzzle  {sz}×{sz}", True, COL_TEXT)
        self._surf.blit(title, (_cx(title.get_width()), 14))
        for btn in self._buttons:
            btn.draw(self._surf)

        ox, oy, total = self._origin()
        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(ox - TILE_GAP, oy - TILE_GAP, total, total),
            border_radius=10,
        )

        spinning: tuple[pygame.Surface, tuple[float, float]] | None = None
        for r, row in enumerate(board.cells):
            for c, tile in enumerate(row):
                if tile is None:
                    continue
                x, y = self._cell_xy(r, c)
                surf = self._tile_surface(tile)

                slide = self._slide
                if slide is not None and slide.tile == tile.index:
                    t = slide.progress(now)
                    sx, sy = self._cell_xy(*slide.source)
                    x, y = sx + (x - sx) * t, sy + (y - sy) * t

                spin = self._spin
                if spin is not None and spin.tile == tile.index:
                    t = spin.progress(now)
                    if spin.phase == WinPhase.FLIP:
                        scale, angle = 1 + (WIN_SCALE - 1) * t, 180 * t
                    else:
                        scale, angle = WIN_SCALE - (WIN_SCALE - 1) * t, 180 + 180 * t
                    surf = pygame.transform.rotozoom(surf, -angle, scale)
                    centre = (x + self._tile_px / 2, y + self._tile_px / 2)
                    spinning = surf, centre
                    continue

                self._surf.blit(surf, (x, y))

        # The spinning tile grows over its neighbours, so draw it last.
        if spinning is not None:
            surf, (cx, cy) = spinning
            self._surf.blit(surf, (cx - surf.get_width() / 2, cy - surf.get_height() / 2))

        if self._time_text:
            lbl = self._f_time.render(self._time_text, True, COL_YELLOW)
            self._surf.blit(lbl, (_cx(lbl.get_width()), oy + total + 8))

        footer = self._f_small.render(
            "Click a tile in the empty row/column     Arrows / WASD  slide     Esc  quit",
            True,
            COL_OVERLAY0,
        )
        self._surf.blit(footer, (_cx(footer.get_width()), WIN_H - 28))

    # ── event handling ──────────────────────────────────────────────────────

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task[Any]) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            self._failures.append(task.exception())

    def _on_event(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.QUIT:
            return False
        if ev.type == pygame.MOUSEMOTION:
            for btn in self._buttons:
                btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._randomize_btn.hit(ev.pos):
                self._spawn(self.controller.on_scramble_requested())
            elif self._reset_btn.hit(ev.pos):
                self.controller.reset()
            else:
                cell = self._cell_at(ev.pos)
                if cell is not None:
                    self._spawn(self.controller.on_tile_tapped(*cell))
        elif ev.type == pygame.KEYDOWN:
            if ev.key in self._KEY_DIRS:
                self._spawn(self.controller.on_direction(self._KEY_DIRS[ev.key]))
            elif ev.key == pygame.K_r and self._randomize_btn.enabled:
                self._spawn(self.controller.on_scramble_requested())
            elif ev.key == pygame.K_x:
                self.controller.reset()
            elif ev.key in (pygame.K_ESCAPE, pygame.K_q):
                return False
        return True

    # ── main loop ───────────────────────────────────────────────────────────

    async def run_loop(self) -> None:
        running = True
        while running and not self._failures:
            for ev in pygame.event.get():
                if not self._on_event(ev):
                    running = False
                    break

            now = time.monotonic()
            self._advance(now)
            self._draw(now)
            pygame.display.flip()
            await asyncio.sleep(1 / FPS)

        pygame.quit()
        if self._failures:
            raise self._failures[0]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(config: GameConfig) -> None:
    """Launch the Pygame GUI."""

    async def _main() -> None:
        await PygameApp(config).run_loop()

    asyncio.run(_main())
