"""Core gameplay logic — processes tile clicks and checks the win condition."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamestate import GameState
from backend.models.geometry import (
    LONG_SIDE,
    SHORT_SIDE,
    ViewportGeometry,
    compute_layout,
)
from backend.models.images import ImageCatalog
from backend.models.puzzle import TILE_COUNT, PuzzleState
from backend.models.render import RenderModel, build_render_model

_LOG = logging.getLogger(__name__)

DEFAULT_VIEWPORT = (1280, 800)

# every session lays its tiles out on the fixed 5 x 10 grid
GRID_CAPACITY = LONG_SIDE * SHORT_SIDE

SolvedListener = Callable[["GamePlay"], None]


class GamePlay:
    """Orchestrates a single game session.

    Owns the puzzle, the timer, the viewport geometry and the current picture.
    Frontends feed it clicks and resizes and draw what ``render_model()``
    returns.
    """

    def __init__(
        self,
        tile_count: int = TILE_COUNT,
        images: ImageCatalog | None = None,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
        viewport: tuple[float, float] = DEFAULT_VIEWPORT,
        show_rules: bool = True,
    ) -> None:
        if tile_count != GRID_CAPACITY:
            raise ValueError(
                f"A session needs exactly {GRID_CAPACITY} tiles, got {tile_count}."
            )
        self.tile_count = tile_count
        self.images = images if images is not None else ImageCatalog()
        self._rng = rng or random.Random()
        self._clock = clock
        self.image_index = self.images.pick(None, self._rng)
        self.state = GameState(GameGenerator.generate(tile_count, self._rng), clock)
        self.geometry: ViewportGeometry = compute_layout(*viewport)
        self.show_rules = True
        self._solved_notified = False
        self._listeners: list[SolvedListener] = []
        if not show_rules:
            self.dismiss_rules()

    @classmethod
    def from_state(
        cls,
        puzzle: PuzzleState,
        *,
        clock: Callable[[], float] = time.monotonic,
        show_rules: bool = False,
    ) -> "GamePlay":
        """Create a game session from an existing puzzle (e.g. a test fixture)."""
        if puzzle.size > GRID_CAPACITY:
            raise ValueError(
                f"Puzzle of {puzzle.size} tiles does not fit the {GRID_CAPACITY}-cell grid."
            )
        obj = object.__new__(cls)
        obj.tile_count = puzzle.size
        obj.images = ImageCatalog()
        obj._rng = random.Random()
        obj._clock = clock
        obj.image_index = None
        obj.state = GameState(puzzle, clock)
        obj.geometry = compute_layout(*DEFAULT_VIEWPORT)
        obj.show_rules = True
        obj._solved_notified = False
        obj._listeners = []
        if not show_rules:
            obj.dismiss_rules()
        return obj

    # -- state machine --------------------------------------------------------

    @staticmethod
    def apply_click(state: PuzzleState, tile_id: str) -> PuzzleState:
        """Return the state that follows a click on *tile_id*.

        * nothing selected: select the tile
        * the selected tile again: rotate it 90° clockwise, clear selection
        * another tile: swap the two tiles' positions, clear selection

        Unknown ids return *state* itself; the input is never mutated.
        """
        if state.find(tile_id) is None:
            _LOG.debug("Ignoring click on unknown tile %r", tile_id)
            return state

        nxt = state.copy()
        selected = nxt.selected_tile_id
        if selected is None:
            nxt.selected_tile_id = tile_id
            return nxt

        clicked = nxt.find(tile_id)
        assert clicked is not None
        if selected == tile_id:
            clicked.rotate()
        else:
            other = nxt.find(selected)
            assert other is not None
            other.position, clicked.position = clicked.position, other.position
        nxt.selected_tile_id = None
        return nxt

    def click(self, tile_id: str) -> bool:
        """Apply a click from the player.

        Returns True if the click changed the puzzle (including selection).
        Clicks are ignored while the rules are up or once the puzzle is solved.
        """
        if self.show_rules or self._solved_notified:
            return False

        before = self.state.puzzle
        after = self.apply_click(before, tile_id)
        if after is before:
            return False

        self.state.puzzle = after
        # a bare selection is not a move
        if before.selected_tile_id is not None:
            self.state.increment_moves()
            self._check_win()
        return True

    # -- session --------------------------------------------------------------

    def dismiss_rules(self) -> None:
        """Hide the rules screen and start the clock."""
        self.show_rules = False
        self.state.start()

    def resize(self, width: float, height: float) -> ViewportGeometry:
        self.geometry = compute_layout(width, height)
        _LOG.debug(
            "Viewport %sx%s -> %dx%d grid, tile %.1fpx",
            width,
            height,
            self.geometry.grid_columns,
            self.geometry.grid_rows,
            self.geometry.tile_size,
        )
        return self.geometry

    def on_solved(self, listener: SolvedListener) -> None:
        """Register *listener* to be called once each time a puzzle is solved."""
        self._listeners.append(listener)

    def next_puzzle(self) -> None:
        """Start a fresh puzzle with a different picture, keeping the geometry."""
        self.image_index = self.images.pick(self.image_index, self._rng)
        self.state = GameState(
            GameGenerator.generate(self.tile_count, self._rng), self._clock
        )
        self._solved_notified = False
        if not self.show_rules:
            self.state.start()

    def _check_win(self) -> None:
        if self._solved_notified or not self.state.is_solved:
            return
        self._solved_notified = True
        self.state.pause()
        _LOG.info(
            "Puzzle solved in %d moves, %ds",
            self.state.moves,
            self.state.elapsed_seconds,
        )
        for listener in list(self._listeners):
            listener(self)

    # -- queries --------------------------------------------------------------

    @property
    def puzzle(self) -> PuzzleState:
        return self.state.puzzle

    @property
    def is_won(self) -> bool:
        return self.state.is_solved

    @property
    def elapsed_seconds(self) -> int:
        return self.state.elapsed_seconds

    @property
    def image(self) -> str | None:
        if self.image_index is None:
            return None
        return self.images[self.image_index]

    def render_model(self) -> RenderModel:
        return build_render_model(self.state.puzzle, self.geometry, self.image)
