"""Board model: construction, queries, and invariant checks."""

from __future__ import annotations

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.models.board import Board
from backend.models.errors import InvariantViolationError, OutOfRangeError


# -- construction -------------------------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 4, 7])
def test_solved_board_is_canonical(size: int) -> None:
    board = GameGenerator.solved(size)

    assert board.is_solved()
    assert board.empty_position() == (size - 1, size - 1)
    for i in range(size * size - 1):
        tile = board.tile_at(i // size, i % size)
        assert tile is not None and tile.index == i
    board.check_invariants()


def test_from_flat_records_empty_cell() -> None:
    board = Board.from_flat(3, [0, 1, 2, 3, None, 4, 5, 6, 7])

    assert board.empty_position() == (1, 1)
    assert board.tile_at(1, 1) is None
    assert board.tile_at(1, 2).index == 4
    assert board.tile_at(1, 2).text == "5"
    assert not board.is_solved()
    board.check_invariants()


@pytest.mark.parametrize(
    "size, flat",
    [
        (2, [0, 1, None]),
        (2, [0, 1, 2, 3]),
        (2, [0, 0, 1, None]),
        (2, [0, 1, 5, None]),
        (2, [0, None, 1, None]),
        (1, [None]),
    ],
    ids=["short", "no-empty", "duplicate", "bad-index", "two-empties", "too-small"],
)
def test_from_flat_rejects_malformed_input(size: int, flat: list) -> None:
    with pytest.raises(ValueError):
        Board.from_flat(size, flat)


# -- queries ------------------------------------------------------------------


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (4, 0), (0, 4), (9, 9)])
def test_tile_at_out_of_range(row: int, col: int) -> None:
    board = GameGenerator.solved(4)

    with pytest.raises(OutOfRangeError) as info:
        board.tile_at(row, col)

    assert isinstance(info.value, IndexError)
    assert (info.value.row, info.value.col, info.value.size) == (row, col, 4)


def test_is_solved_requires_empty_in_last_cell() -> None:
    # Every tile precedes the next in row-major order, but the empty cell
    # is not last.
    board = Board.from_flat(2, [None, 0, 1, 2])
    assert not board.is_solved()


def test_is_tile_correct() -> None:
    board = Board.from_flat(2, [0, 2, 1, None])

    assert board.is_tile_correct(0, 0)
    assert not board.is_tile_correct(0, 1)
    assert not board.is_tile_correct(1, 0)
    assert board.is_tile_correct(1, 1)


def test_tiles_iterate_row_major_skipping_empty() -> None:
    board = Board.from_flat(3, [4, 0, 1, None, 7, 2, 3, 6, 5])

    assert [t.index for t in board.tiles()] == [4, 0, 1, 7, 2, 3, 6, 5]
    assert board.home_indices() == [4, 0, 1, None, 7, 2, 3, 6, 5]


def test_copy_is_independent() -> None:
    board = GameGenerator.solved(3)
    clone = board.copy()

    clone.clear_cell(0, 0)

    assert board.tile_at(0, 0) is not None
    assert board.empty_position() == (2, 2)


# -- invariants ---------------------------------------------------------------


def test_invariant_duplicate_tile() -> None:
    board = GameGenerator.solved(3)
    board.cells[0][0] = board.cells[0][1]

    with pytest.raises(InvariantViolationError):
        board.check_invariants()


def test_invariant_two_empty_cells() -> None:
    board = GameGenerator.solved(3)
    board.cells[0][0] = None

    with pytest.raises(InvariantViolationError, match="exactly one empty"):
        board.check_invariants()


def test_invariant_empty_position_out_of_sync() -> None:
    board = GameGenerator.solved(3)
    board.empty_pos = (0, 0)

    with pytest.raises(InvariantViolationError):
        board.check_invariants()


def test_mutators_range_check() -> None:
    board = GameGenerator.solved(3)
    tile = board.tile_at(0, 0)

    with pytest.raises(OutOfRangeError):
        board.place_tile(tile, 3, 0)
    with pytest.raises(OutOfRangeError):
        board.clear_cell(0, -1)
