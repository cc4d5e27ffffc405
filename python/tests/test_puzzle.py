"""Tile and puzzle-state model tests."""

from __future__ import annotations

import pytest

from backend.models.puzzle import PuzzleState
from backend.models.tile import Tile, parse_index, tile_id


# -- tile ids -----------------------------------------------------------------


def test_tile_id_round_trip() -> None:
    assert tile_id(17) == "tile-17"
    assert parse_index("tile-17") == 17
    assert parse_index("tile-0") == 0


@pytest.mark.parametrize("bad", ["tile17", "tile-", "piece-3", "tile--1", "tile-x"])
def test_malformed_ids_raise(bad: str) -> None:
    with pytest.raises(ValueError):
        parse_index(bad)


# -- tile ---------------------------------------------------------------------


def test_tile_queries() -> None:
    t = Tile(id="tile-4", position=4, rotation=0)
    assert t.original_index == 4
    assert t.is_placed and t.is_upright and t.is_correct

    t.rotation = 180
    assert t.is_placed and not t.is_correct

    t.rotation, t.position = 0, 3
    assert t.is_upright and not t.is_placed and not t.is_correct


def test_four_rotations_return_to_start() -> None:
    for start in (0, 90, 180, 270):
        t = Tile(id="tile-0", position=0, rotation=start)
        seen = []
        for _ in range(4):
            t.rotate()
            seen.append(t.rotation)
        assert t.rotation == start
        assert sorted(seen) == [0, 90, 180, 270]


# -- construction and validation ---------------------------------------------


def test_from_layout() -> None:
    state = PuzzleState.from_layout([2, 0, 1], [0, 90, 0])
    assert state.size == 3
    assert state.find("tile-0").position == 2
    assert state.find("tile-1").rotation == 90
    assert state.selected_tile_id is None


@pytest.mark.parametrize(
    "positions,rotations",
    [
        ([0, 0, 1], None),  # duplicate slot
        ([0, 1, 3], None),  # gap
        ([0, 1, 2], [0, 45, 0]),  # bad rotation
        ([0, 1, 2], [0, 360, 0]),
        ([0, 1, 2], [0, 90]),  # length mismatch
        ([], None),
    ],
    ids=["duplicate", "gap", "rot-45", "rot-360", "length", "empty"],
)
def test_invalid_layout_raises(positions: list[int], rotations: list[int] | None) -> None:
    with pytest.raises(ValueError):
        PuzzleState.from_layout(positions, rotations)


def test_duplicate_ids_raise() -> None:
    tiles = [Tile(id="tile-0", position=0), Tile(id="tile-0", position=1)]
    with pytest.raises(ValueError):
        PuzzleState(tiles=tiles)


def test_unknown_selection_raises() -> None:
    with pytest.raises(ValueError):
        PuzzleState.from_layout([0, 1], selected_tile_id="tile-9")


# -- queries ------------------------------------------------------------------


def test_is_solved() -> None:
    assert PuzzleState.from_layout(list(range(50))).is_solved()


def test_single_rotated_tile_is_not_solved() -> None:
    rotations = [0] * 50
    rotations[23] = 90
    state = PuzzleState.from_layout(list(range(50)), rotations)
    assert not state.is_solved()
    assert state.correct_count() == 49


def test_swapped_pair_is_not_solved() -> None:
    positions = list(range(10))
    positions[3], positions[4] = positions[4], positions[3]
    state = PuzzleState.from_layout(positions)
    assert not state.is_solved()
    assert state.correct_count() == 8


def test_tile_at_and_ordered() -> None:
    state = PuzzleState.from_layout([2, 0, 1])
    assert state.tile_at(0).id == "tile-1"
    assert [t.id for t in state.ordered()] == ["tile-1", "tile-2", "tile-0"]
    with pytest.raises(IndexError):
        state.tile_at(3)


def test_find_unknown_returns_none() -> None:
    assert PuzzleState.from_layout([0]).find("tile-7") is None


def test_copy_is_independent() -> None:
    state = PuzzleState.from_layout([1, 0], selected_tile_id="tile-0")
    clone = state.copy()
    assert clone == state

    clone.find("tile-0").rotate()
    clone.selected_tile_id = None
    assert state.find("tile-0").rotation == 0
    assert state.selected_tile_id == "tile-0"
