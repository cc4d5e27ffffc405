"""Tile puzzle solver."""

from __future__ import annotations

from backend.engine.gameplay.game import GamePlay
from backend.models.puzzle import PuzzleState
from backend.models.tile import ROTATION_STEP


class Solver:
    """Stateless solver — all methods are static.

    Plans are lists of tile ids to click, in order.  Every action takes two
    clicks: a tile then a different tile (swap), or the same tile twice
    (rotate).
    """

    @staticmethod
    def solve(state: PuzzleState) -> list[str]:
        """Return a click sequence that solves *state*, or ``[]`` if solved.

        A pending selection is consumed by the first click: the tile in the
        selected tile's home slot when it is misplaced, the tile itself when
        it is home but turned, otherwise a swap with a tile that is wrong
        anyway.  Undoing that swap costs two clicks, a full turn costs six.
        """
        if state.is_solved():
            return []
        work = state.copy()
        clicks: list[str] = []

        def press(tid: str) -> None:
            nonlocal work
            work = GamePlay.apply_click(work, tid)
            clicks.append(tid)

        if work.selected_tile_id is not None:
            selected = work.find(work.selected_tile_id)
            assert selected is not None
            if not selected.is_placed:
                press(work.tile_at(selected.original_index).id)
            elif not selected.is_upright:
                press(selected.id)
            else:
                press(next(t.id for t in work.ordered() if not t.is_correct))

        # Fill slots in order, swapping in the tile that belongs there.
        for slot in range(work.size):
            occupant = work.tile_at(slot)
            if occupant.original_index == slot:
                continue
            wanted = next(t for t in work.tiles if t.original_index == slot)
            press(occupant.id)
            press(wanted.id)

        for tile in work.ordered():
            steps = ((360 - tile.rotation) % 360) // ROTATION_STEP
            for _ in range(steps):
                press(tile.id)
                press(tile.id)

        return clicks

    @staticmethod
    def hint(state: PuzzleState) -> list[str] | None:
        """Return the clicks of the next action, or ``None`` if solved."""
        clicks = Solver.solve(state)
        if not clicks:
            return None
        if state.selected_tile_id is not None:
            return clicks[:1]
        return clicks[:2]

    @staticmethod
    def moves_needed(state: PuzzleState) -> int:
        """Number of swap/rotate actions in the solver's plan."""
        clicks = len(Solver.solve(state))
        if clicks and state.selected_tile_id is not None:
            return 1 + (clicks - 1) // 2
        return clicks // 2
