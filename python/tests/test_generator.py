"""Puzzle generator tests."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.models.tile import ROTATIONS


@pytest.mark.parametrize("size", [1, 2, 5, 50])
def test_generate_shape(size: int) -> None:
    state = GameGenerator.generate(size, random.Random(size))

    assert state.size == size
    assert sorted(t.position for t in state.tiles) == list(range(size))
    assert {t.id for t in state.tiles} == {f"tile-{i}" for i in range(size)}
    assert all(t.rotation in ROTATIONS for t in state.tiles)
    assert state.selected_tile_id is None
    assert not state.is_solved()


def test_default_is_fifty_tiles() -> None:
    assert GameGenerator.generate().size == 50


@pytest.mark.parametrize("size", [0, -3])
def test_bad_tile_count_raises(size: int) -> None:
    with pytest.raises(ValueError):
        GameGenerator.generate(size)


def test_solved_reference() -> None:
    state = GameGenerator.solved(12)
    assert state.is_solved()
    assert [t.position for t in state.tiles] == list(range(12))


def test_seeded_generation_is_reproducible() -> None:
    a = GameGenerator.generate(50, random.Random(99))
    b = GameGenerator.generate(50, random.Random(99))
    assert a == b


def test_scramble_clears_selection() -> None:
    state = GameGenerator.solved(6)
    state.selected_tile_id = "tile-2"
    GameGenerator.scramble(state, random.Random(0))
    assert state.selected_tile_id is None


def test_positions_are_uniform() -> None:
    """tile-0 should land in each of 4 slots about a quarter of the time."""
    rng = random.Random(1234)
    draws = 2400
    counts: Counter[int] = Counter()
    rotations: Counter[int] = Counter()
    for _ in range(draws):
        state = GameGenerator.generate(4, rng)
        tile = state.find("tile-0")
        counts[tile.position] += 1
        rotations[tile.rotation] += 1

    for slot in range(4):
        assert 450 < counts[slot] < 750, counts
    for rot in ROTATIONS:
        assert 450 < rotations[rot] < 750, rotations
