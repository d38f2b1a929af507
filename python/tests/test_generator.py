"""Solved-board construction and scrambling."""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import MoveEngine
from backend.engine.gamewin import WinDetector


# -- solved board -------------------------------------------------------------


def test_default_labels() -> None:
    board = GameGenerator.solved(4)
    tiles = list(board.tiles())

    assert [t.text for t in tiles] == [str(i + 1) for i in range(15)]
    assert "".join(t.win_text for t in tiles) == "CONGRATULATIONS"


def test_default_win_labels_wrap_on_larger_boards() -> None:
    board = GameGenerator.solved(5)
    word = "".join(t.win_text for t in board.tiles())

    assert word.startswith("CONGRATULATIONS")
    assert word[15:] == "CONGRATUL"


def test_custom_labels() -> None:
    board = GameGenerator.solved(2, text="ABC", win_text="XYZ")

    assert [(t.text, t.win_text) for t in board.tiles()] == [
        ("A", "X"),
        ("B", "Y"),
        ("C", "Z"),
    ]


@pytest.mark.parametrize(
    "text, win_text", [("AB", None), (None, "WXYZ")], ids=["short", "long"]
)
def test_labels_must_match_tile_count(text: str | None, win_text: str | None) -> None:
    with pytest.raises(ValueError):
        GameGenerator.solved(2, text=text, win_text=win_text)


def test_solved_rejects_tiny_board() -> None:
    with pytest.raises(ValueError):
        GameGenerator.solved(1)


def test_fresh_board_is_a_win() -> None:
    assert WinDetector.check_win(GameGenerator.solved(4))


# -- scramble -----------------------------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 4, 6])
def test_scramble_is_reachable_from_solved(size: int) -> None:
    board = GameGenerator.solved(size)
    shifts = GameGenerator.scramble(board, rng=random.Random(size))

    replay = GameGenerator.solved(size)
    for shift in shifts:
        MoveEngine.apply_shift(replay, shift)

    assert replay.home_indices() == board.home_indices()
    board.check_invariants()


def test_scramble_is_deterministic_for_a_seed() -> None:
    a, b = GameGenerator.solved(4), GameGenerator.solved(4)

    shifts_a = GameGenerator.scramble(a, rng=random.Random(42))
    shifts_b = GameGenerator.scramble(b, rng=random.Random(42))

    assert shifts_a == shifts_b
    assert a.home_indices() == b.home_indices()


def test_scramble_shifts_form_a_chain() -> None:
    board = GameGenerator.solved(4)
    shifts = GameGenerator.scramble(board, rng=random.Random(7))

    assert shifts, "100 rounds on a 4×4 board should move something"
    assert shifts[0].target == (3, 3)
    for prev, nxt in zip(shifts, shifts[1:]):
        # The empty cell left behind by one shift is filled by the next.
        assert nxt.target == prev.source
    assert board.empty_position() == shifts[-1].source


def test_scramble_tolerates_noop_taps() -> None:
    # A 2-round scramble with a stub rng that always picks index 3 taps the
    # empty cell every time.
    class _Stuck(random.Random):
        def randrange(self, *args, **kwargs) -> int:  # type: ignore[override]
            return 3

    board = GameGenerator.solved(4)
    assert GameGenerator.scramble(board, rounds=2, rng=_Stuck()) == []
    assert board.is_solved()


def test_zero_rounds_leaves_board_solved() -> None:
    board = GameGenerator.solved(3)
    assert GameGenerator.scramble(board, rounds=0) == []
    assert board.is_solved()


def test_iter_scramble_yields_applied_shifts() -> None:
    board = GameGenerator.solved(4)
    it = GameGenerator.iter_scramble(board, 100, random.Random(1))

    first = next(it)
    assert board.empty_position() == first.source