"""Generates scrambled tile puzzles."""

from __future__ import annotations

import logging
import random

from backend.models.puzzle import TILE_COUNT, PuzzleState
from backend.models.tile import ROTATIONS, Tile, tile_id

_LOG = logging.getLogger(__name__)


class GameGenerator:
    """Creates puzzles by shuffling positions and rotations of a solved board."""

    @staticmethod
    def solved(tile_count: int = TILE_COUNT) -> PuzzleState:
        """Return the goal state (every tile home and upright)."""
        if tile_count < 1:
            raise ValueError(f"Tile count must be positive, got {tile_count}.")
        return PuzzleState(
            tiles=[Tile(id=tile_id(i), position=i) for i in range(tile_count)]
        )

    @staticmethod
    def scramble(state: PuzzleState, rng: random.Random | None = None) -> None:
        """Scramble *state* in-place.

        Positions get a uniform random permutation (``random.shuffle`` is a
        Fisher-Yates shuffle); each rotation is drawn independently.
        """
        rng = rng or random.Random()
        positions = list(range(state.size))
        rng.shuffle(positions)
        for tile, pos in zip(state.tiles, positions):
            tile.position = pos
            tile.rotation = rng.choice(ROTATIONS)
        state.selected_tile_id = None

    @staticmethod
    def generate(
        tile_count: int = TILE_COUNT, rng: random.Random | None = None
    ) -> PuzzleState:
        """Return a random puzzle that is not already solved."""
        rng = rng or random.Random()
        state = GameGenerator.solved(tile_count)
        GameGenerator.scramble(state, rng)

        # Ensure the puzzle is not already solved
        while state.is_solved():
            GameGenerator.scramble(state, rng)

        _LOG.info(
            "New puzzle: %d tiles, %d already correct",
            state.size,
            state.correct_count(),
        )
        return state
