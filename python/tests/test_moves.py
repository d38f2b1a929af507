"""Move rule: shift planning and application."""

from __future__ import annotations

import itertools

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import MoveEngine
from backend.models.board import Board, Direction, Shift
from backend.models.errors import InvariantViolationError, OutOfRangeError

SIZE = 4


# -- helpers ------------------------------------------------------------------


def _board_with_empty_at(size: int, row: int, col: int) -> Board:
    """A valid board with tiles in order around an empty cell at (row, col)."""
    indices = iter(range(size * size - 1))
    flat = [
        None if (r, c) == (row, col) else next(indices)
        for r in range(size)
        for c in range(size)
    ]
    return Board.from_flat(size, flat)


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


# -- planning -----------------------------------------------------------------


def test_plan_row_shift_toward_left() -> None:
    assert MoveEngine.plan_shift(3, 1, 3, 3) == [
        Shift(3, 2, 3, 3),
        Shift(3, 1, 3, 2),
    ]


def test_plan_column_shift_downward() -> None:
    assert MoveEngine.plan_shift(3, 0, 0, 0) == [
        Shift(1, 0, 0, 0),
        Shift(2, 0, 1, 0),
        Shift(3, 0, 2, 0),
    ]


@pytest.mark.parametrize("tap", [(0, 0), (1, 2), (2, 1), (3, 3)])
def test_plan_off_line_or_empty_is_noop(tap: tuple[int, int]) -> None:
    # Empty cell at (3, 3): (3, 3) is the empty cell itself, the rest share
    # neither its row nor its column.
    assert MoveEngine.plan_shift(*tap, 3, 3) == []


# -- application --------------------------------------------------------------


def test_tap_scenario_bottom_row() -> None:
    board = GameGenerator.solved(SIZE)
    t31 = board.tile_at(3, 1)
    t32 = board.tile_at(3, 2)

    shifts = MoveEngine.tap(board, 3, 1)

    assert len(shifts) == 2
    assert board.empty_position() == (3, 1)
    assert board.tile_at(3, 3) is t32
    assert board.tile_at(3, 2) is t31
    assert not board.is_solved()


@pytest.mark.parametrize(
    "empty",
    list(itertools.product(range(SIZE), repeat=2)),
    ids=lambda e: f"empty{e[0]}{e[1]}",
)
def test_every_tap_from_every_empty_cell(empty: tuple[int, int]) -> None:
    """Line taps move the run one cell toward the empty cell; others are no-ops."""
    er, ec = empty
    for r, c in itertools.product(range(SIZE), repeat=2):
        board = _board_with_empty_at(SIZE, er, ec)
        before = board.copy()

        shifts = MoveEngine.tap(board, r, c)

        if (r == er) == (c == ec):
            # Off-line tap, or the empty cell itself.
            assert shifts == []
            assert board.home_indices() == before.home_indices()
            continue

        assert len(shifts) == abs(r - er) + abs(c - ec)
        assert board.empty_position() == (r, c)
        assert sorted(t.index for t in board.tiles()) == sorted(
            t.index for t in before.tiles()
        )
        dr, dc = _sign(er - r), _sign(ec - c)
        for k in range(len(shifts)):
            # The tile k cells from the tap advanced one cell toward the
            # old empty cell.
            sr, sc = r + k * dr, c + k * dc
            assert board.tile_at(sr + dr, sc + dc) is before.tile_at(sr, sc)

        if len(shifts) == 1:
            assert board.tile_at(er, ec) is before.tile_at(r, c)


def test_shift_is_applied_before_it_is_yielded() -> None:
    board = GameGenerator.solved(SIZE)
    chain = MoveEngine.shift_into_empty(board, 0, 3)

    first = next(chain)
    assert board.empty_position() == first.source
    board.check_invariants()

    rest = list(chain)
    assert len(rest) == 2
    assert board.empty_position() == (0, 3)


def test_shift_into_empty_range_checks_tap() -> None:
    board = GameGenerator.solved(SIZE)

    with pytest.raises(OutOfRangeError):
        list(MoveEngine.shift_into_empty(board, 3, SIZE))


@pytest.mark.parametrize(
    "shift",
    [
        Shift(3, 2, 2, 2),  # target is not the empty cell
        Shift(2, 2, 3, 3),  # diagonal
        Shift(3, 3, 3, 3),  # empty onto itself
    ],
    ids=["wrong-target", "diagonal", "self"],
)
def test_apply_shift_rejects_invalid(shift: Shift) -> None:
    board = GameGenerator.solved(SIZE)

    with pytest.raises(InvariantViolationError):
        MoveEngine.apply_shift(board, shift)

    assert board.is_solved()


# -- keyboard directions ------------------------------------------------------


@pytest.mark.parametrize(
    "direction, expected",
    [
        (Direction.UP, None),
        (Direction.LEFT, None),
        (Direction.DOWN, (2, 3)),
        (Direction.RIGHT, (3, 2)),
    ],
)
def test_target_for_direction(
    direction: Direction, expected: tuple[int, int] | None
) -> None:
    board = GameGenerator.solved(SIZE)
    assert MoveEngine.target_for(board, direction) == expected


def test_target_for_from_top_left() -> None:
    board = _board_with_empty_at(SIZE, 0, 0)

    assert MoveEngine.target_for(board, Direction.UP) == (1, 0)
    assert MoveEngine.target_for(board, Direction.LEFT) == (0, 1)
    assert MoveEngine.target_for(board, Direction.DOWN) is None
    assert MoveEngine.target_for(board, Direction.RIGHT) is None
