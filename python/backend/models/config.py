"""Construction constants supplied by a frontend."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Grid size and animation timings (milliseconds).

    ``text`` and ``win_text`` optionally spell out one label character per
    tile; they must hold exactly ``size * size - 1`` characters.
    """

    size: int = 4
    shift_ms: int = 100
    scramble_shift_ms: int = 25
    win_phase_ms: int = 150
    win_pause_ms: int = 1500
    scramble_rounds: int = 100
    tick_interval_ms: int = 1000
    text: str | None = None
    win_text: str | None = None
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.size < 2:
            raise ValueError(f"Grid size must be at least 2, got {self.size}.")
        for name in ("shift_ms", "scramble_shift_ms", "win_phase_ms", "win_pause_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative.")
        if self.scramble_shift_ms > self.shift_ms:
            raise ValueError(
                "scramble_shift_ms must not exceed shift_ms "
                f"({self.scramble_shift_ms} > {self.shift_ms})."
            )
        if self.scramble_rounds < 0:
            raise ValueError("scramble_rounds must not be negative.")
        if self.tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive.")
        tile_count = self.size * self.size - 1
        for name in ("text", "win_text"):
            label = getattr(self, name)
            if label is not None and len(label) != tile_count:
                raise ValueError(
                    f"{name} must have {tile_count} characters for a "
                    f"{self.size}×{self.size} board, got {len(label)}."
                )
