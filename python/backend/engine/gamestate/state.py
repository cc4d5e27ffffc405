"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time
from typing import Callable

from backend.models.puzzle import PuzzleState


class GameState:
    """Holds the current puzzle, move counter, and elapsed time.

    The clock does not run until ``start()`` is called (the rules screen is
    still up when a session begins).
    """

    def __init__(
        self,
        puzzle: PuzzleState,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.puzzle = puzzle
        self.moves: int = 0
        self._clock = clock
        self._start_time: float | None = None
        self._elapsed_banked: float = 0.0
        self._running: bool = False

    # -- time tracking --------------------------------------------------------

    @property
    def started(self) -> bool:
        return self._start_time is not None

    @property
    def elapsed_time(self) -> float:
        if self._running:
            assert self._start_time is not None
            return self._elapsed_banked + (self._clock() - self._start_time)
        return self._elapsed_banked

    @property
    def elapsed_seconds(self) -> int:
        return int(self.elapsed_time)

    def start(self) -> None:
        if self._start_time is None:
            self._start_time = self._clock()
            self._running = True

    def pause(self) -> None:
        if self._running:
            assert self._start_time is not None
            self._elapsed_banked += self._clock() - self._start_time
            self._running = False

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    @property
    def is_solved(self) -> bool:
        return self.puzzle.is_solved()
