"""State machine and session tests.

``GamePlay.apply_click`` is the pure transition function; the rest of
``GamePlay`` is the session shell around it (timer, rules, solved signal).
"""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GamePlay
from backend.models.images import ImageCatalog
from backend.models.puzzle import PuzzleState


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# -- helpers ------------------------------------------------------------------


def _clicks(state: PuzzleState, *tile_ids: str) -> PuzzleState:
    for tid in tile_ids:
        state = GamePlay.apply_click(state, tid)
    return state


def _snapshot(state: PuzzleState) -> dict[str, tuple[int, int]]:
    return {t.id: (t.position, t.rotation) for t in state.tiles}


# -- transitions --------------------------------------------------------------


def test_first_click_selects() -> None:
    state = PuzzleState.from_layout([1, 0, 2])
    nxt = GamePlay.apply_click(state, "tile-2")

    assert nxt.selected_tile_id == "tile-2"
    assert _snapshot(nxt) == _snapshot(state)
    # input untouched
    assert state.selected_tile_id is None


def test_click_selected_tile_rotates() -> None:
    state = PuzzleState.from_layout([1, 0, 2], [0, 90, 0])
    nxt = _clicks(state, "tile-1", "tile-1")

    assert nxt.find("tile-1").rotation == 180
    assert nxt.find("tile-1").position == 0
    assert nxt.selected_tile_id is None


def test_click_other_tile_swaps() -> None:
    state = PuzzleState.from_layout([1, 0, 2], [90, 0, 270])
    nxt = _clicks(state, "tile-0", "tile-2")

    assert nxt.find("tile-0").position == 2
    assert nxt.find("tile-2").position == 1
    # rotations travel with the tiles
    assert nxt.find("tile-0").rotation == 90
    assert nxt.find("tile-2").rotation == 270
    assert nxt.find("tile-1").position == 0
    assert nxt.selected_tile_id is None


def test_unknown_tile_is_ignored() -> None:
    state = PuzzleState.from_layout([1, 0], selected_tile_id="tile-0")
    assert GamePlay.apply_click(state, "tile-9") is state
    assert GamePlay.apply_click(state, "nonsense") is state


def test_rotating_four_times_restores() -> None:
    state = PuzzleState.from_layout([0, 1], [270, 0])
    nxt = _clicks(state, *["tile-0"] * 8)
    assert nxt.find("tile-0").rotation == 270


def test_double_swap_restores() -> None:
    state = PuzzleState.from_layout([3, 1, 0, 2])
    nxt = _clicks(state, "tile-0", "tile-3", "tile-0", "tile-3")
    assert _snapshot(nxt) == _snapshot(state)


def test_random_clicks_keep_invariants() -> None:
    rng = random.Random(5)
    state = PuzzleState.from_layout(list(range(50)))
    ids = {t.id for t in state.tiles}
    for _ in range(500):
        state = GamePlay.apply_click(state, rng.choice(sorted(ids)))
        assert {t.id for t in state.tiles} == ids
        assert sorted(t.position for t in state.tiles) == list(range(50))
        assert all(t.rotation in (0, 90, 180, 270) for t in state.tiles)


# -- session: rules, clicks, moves -------------------------------------------


def test_clicks_ignored_while_rules_shown() -> None:
    game = GamePlay.from_state(PuzzleState.from_layout([1, 0]), show_rules=True)
    assert not game.click("tile-0")
    assert game.puzzle.selected_tile_id is None

    game.dismiss_rules()
    assert game.click("tile-0")
    assert game.puzzle.selected_tile_id == "tile-0"


def test_moves_count_swaps_and_rotations_only() -> None:
    game = GamePlay.from_state(PuzzleState.from_layout([1, 0, 2]))
    game.click("tile-2")
    assert game.state.moves == 0
    game.click("tile-2")  # rotate
    assert game.state.moves == 1
    game.click("tile-0")
    game.click("tile-2")  # swap
    assert game.state.moves == 2
    assert not game.click("tile-42")
    assert game.state.moves == 2


# -- session: timer -----------------------------------------------------------


def test_timer_starts_when_rules_dismissed() -> None:
    clock = FakeClock()
    game = GamePlay.from_state(
        PuzzleState.from_layout([1, 0]), clock=clock, show_rules=True
    )
    clock.advance(30)
    assert game.elapsed_seconds == 0

    game.dismiss_rules()
    clock.advance(4.7)
    assert game.elapsed_seconds == 4


def test_timer_freezes_on_solve() -> None:
    clock = FakeClock()
    game = GamePlay.from_state(PuzzleState.from_layout([1, 0]), clock=clock)
    clock.advance(12)
    game.click("tile-0")
    game.click("tile-1")
    assert game.is_won
    clock.advance(100)
    assert game.elapsed_seconds == 12


# -- session: solved notification --------------------------------------------


def test_solved_notification_fires_once() -> None:
    game = GamePlay.from_state(PuzzleState.from_layout([0, 1, 2], [0, 270, 0]))
    fired: list[GamePlay] = []
    game.on_solved(fired.append)

    game.click("tile-1")
    assert not fired
    game.click("tile-1")
    assert fired == [game]

    # further clicks are ignored once solved
    assert not game.click("tile-0")
    assert fired == [game]
    assert game.is_won


def test_selecting_on_solved_puzzle_does_not_notify() -> None:
    game = GamePlay.from_state(GameGenerator.solved(4))
    fired: list[GamePlay] = []
    game.on_solved(fired.append)

    assert game.click("tile-0")
    assert game.puzzle.selected_tile_id == "tile-0"
    assert not fired

    # the puzzle stays playable: the selection can still be turned
    assert game.click("tile-0")
    assert game.puzzle.find("tile-0").rotation == 90
    assert not fired


def test_next_puzzle_resets_session() -> None:
    clock = FakeClock()
    images = ImageCatalog(["a.png", "b.png", "c.png"])
    game = GamePlay(
        images=images, rng=random.Random(3), clock=clock, show_rules=False
    )
    fired: list[GamePlay] = []
    game.on_solved(fired.append)

    # force a solved state through the public API
    game.state.puzzle = PuzzleState.from_layout([1, 0])
    game.click("tile-0")
    game.click("tile-1")
    assert fired and game.is_won

    clock.advance(7)
    before = game.image
    game.next_puzzle()

    assert game.image != before
    assert not game.is_won
    assert game.puzzle.size == 50
    assert game.state.moves == 0
    assert game.elapsed_seconds == 0
    clock.advance(3)
    assert game.elapsed_seconds == 3


def test_notification_fires_again_for_next_puzzle() -> None:
    game = GamePlay(rng=random.Random(8), show_rules=False)
    fired: list[GamePlay] = []
    game.on_solved(fired.append)

    for _ in range(2):
        game.state.puzzle = PuzzleState.from_layout([1, 0])
        game.click("tile-1")
        game.click("tile-0")
        game.next_puzzle()

    assert len(fired) == 2


# -- session: construction, resize, render -----------------------------------


def test_new_session_defaults() -> None:
    images = ImageCatalog(["only.png"])
    game = GamePlay(images=images, rng=random.Random(1))
    assert game.show_rules
    assert game.image == "only.png"
    assert game.puzzle.size == 50
    assert not game.is_won
    assert game.state.moves == 0


def test_session_without_images() -> None:
    game = GamePlay(rng=random.Random(1))
    assert game.image is None
    assert game.render_model().image is None


def test_resize_changes_geometry_not_state() -> None:
    game = GamePlay(rng=random.Random(2), viewport=(1920, 1080))
    before = game.puzzle.copy()
    assert game.geometry.grid_columns == 10

    geo = game.resize(1080, 1920)
    assert geo is game.geometry
    assert (geo.grid_columns, geo.grid_rows) == (5, 10)
    assert game.puzzle == before
    assert game.render_model().tile_size == pytest.approx(185.52)


@pytest.mark.parametrize("count", [1, 49, 51, 60])
def test_session_tile_count_must_fill_grid(count: int) -> None:
    with pytest.raises(ValueError):
        GamePlay(tile_count=count, rng=random.Random(1))


def test_from_state_rejects_puzzle_larger_than_grid() -> None:
    with pytest.raises(ValueError):
        GamePlay.from_state(GameGenerator.solved(51))


@pytest.mark.parametrize("viewport", [(1920, 1080), (1080, 1920)])
def test_render_model_fits_grid(viewport: tuple[int, int]) -> None:
    game = GamePlay(rng=random.Random(5), viewport=viewport)
    model = game.render_model()
    assert len(model.tiles) == model.grid_columns * model.grid_rows
    assert all(t.row < model.grid_rows for t in model.tiles)
    assert all(t.column < model.grid_columns for t in model.tiles)
