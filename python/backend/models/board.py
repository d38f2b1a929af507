"""Board model for the sliding puzzle game."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

from backend.models.errors import InvariantViolationError, OutOfRangeError


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Tile:
    """A puzzle piece.

    ``index`` is the tile's home position in row-major order and is the only
    part the engine looks at.  ``text`` and ``win_text`` are display labels
    carried for the frontends.
    """

    index: int
    text: str = ""
    win_text: str = ""


@dataclass(frozen=True)
class Shift:
    """A single-cell move of the tile at the source into the empty target."""

    from_row: int
    from_col: int
    to_row: int
    to_col: int

    @property
    def source(self) -> tuple[int, int]:
        return self.from_row, self.from_col

    @property
    def target(self) -> tuple[int, int]:
        return self.to_row, self.to_col


@dataclass
class Board:
    """Represents the sliding puzzle board.

    Cells are stored as a 2D list of ``Tile`` objects. ``None`` marks the
    single empty cell, whose position is mirrored in ``empty_pos``.
    """

    size: int
    cells: list[list[Tile | None]]
    empty_pos: tuple[int, int]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, size: int, flat: list[int | None]) -> Board:
        """Create a board from a flat row-major list of home indices.

        ``None`` marks the empty cell.  Tiles get their 1-based number as
        label.  Example::

            Board.from_flat(2, [0, 1, None, 2])
        """
        if size < 2:
            raise ValueError(f"Board size must be at least 2, got {size}.")
        if len(flat) != size * size:
            raise ValueError(
                f"Expected {size * size} cells for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        present = sorted(v for v in flat if v is not None)
        if present != list(range(size * size - 1)):
            raise ValueError(
                f"Cells must hold home indices 0..{size * size - 2} exactly "
                f"once plus one empty cell."
            )
        cells: list[list[Tile | None]] = []
        empty_pos: tuple[int, int] = (0, 0)
        for r in range(size):
            row: list[Tile | None] = []
            for c, v in enumerate(flat[r * size : (r + 1) * size]):
                if v is None:
                    empty_pos = (r, c)
                    row.append(None)
                else:
                    row.append(Tile(v, str(v + 1)))
            cells.append(row)
        return cls(size=size, cells=cells, empty_pos=empty_pos)

    # -- queries --------------------------------------------------------------

    def in_range(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def check_range(self, row: int, col: int) -> None:
        if not self.in_range(row, col):
            raise OutOfRangeError(row, col, self.size)

    def tile_at(self, row: int, col: int) -> Tile | None:
        self.check_range(row, col)
        return self.cells[row][col]

    def empty_position(self) -> tuple[int, int]:
        return self.empty_pos

    def tiles(self) -> Iterator[Tile]:
        """Yield the tiles in row-major grid order, skipping the empty cell."""
        for row in self.cells:
            for tile in row:
                if tile is not None:
                    yield tile

    def home_indices(self) -> list[int | None]:
        """Flat row-major list of home indices, ``None`` for the empty cell."""
        return [
            None if tile is None else tile.index
            for row in self.cells
            for tile in row
        ]

    def is_solved(self) -> bool:
        """Check if all tiles are in their goal positions."""
        last = self.size - 1
        if self.empty_pos != (last, last) or self.cells[last][last] is not None:
            return False
        for i in range(self.size * self.size - 1):
            tile = self.cells[i // self.size][i % self.size]
            if tile is None or tile.index != i:
                return False
        return True

    def is_tile_correct(self, row: int, col: int) -> bool:
        """Check if a specific cell holds its goal tile."""
        tile = self.tile_at(row, col)
        if tile is None:
            return row == self.size - 1 and col == self.size - 1
        return divmod(tile.index, self.size) == (row, col)

    def check_invariants(self) -> None:
        """Raise ``InvariantViolationError`` if the grid is inconsistent."""
        empties = [
            (r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self.cells[r][c] is None
        ]
        if len(empties) != 1:
            raise InvariantViolationError(
                f"Expected exactly one empty cell, found {len(empties)}."
            )
        if empties[0] != self.empty_pos:
            raise InvariantViolationError(
                f"Empty cell is at {empties[0]} but the board records "
                f"{self.empty_pos}."
            )
        indices = sorted(tile.index for tile in self.tiles())
        if indices != list(range(self.size * self.size - 1)):
            raise InvariantViolationError(
                "Tile home indices are duplicated or missing."
            )

    # -- mutators (MoveEngine only) -------------------------------------------

    def place_tile(self, tile: Tile, row: int, col: int) -> None:
        self.check_range(row, col)
        self.cells[row][col] = tile

    def clear_cell(self, row: int, col: int) -> None:
        self.check_range(row, col)
        self.cells[row][col] = None
        self.empty_pos = (row, col)

    def copy(self) -> Board:
        return Board(
            size=self.size,
            cells=[row[:] for row in self.cells],
            empty_pos=self.empty_pos,
        )
