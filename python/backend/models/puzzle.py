"""Puzzle state: the tiles on the board plus the current selection."""

from __future__ import annotations

from dataclasses import dataclass, field

from backend.models.tile import ROTATIONS, Tile, tile_id

TILE_COUNT = 50  # 5 x 10 grid


@dataclass
class PuzzleState:
    """All tiles of one puzzle and at most one selected tile.

    The order of ``tiles`` carries no meaning: each tile's ``position`` alone
    decides where it is drawn and whether it sits in its home slot.
    """

    tiles: list[Tile]
    selected_tile_id: str | None = None
    _by_id: dict[str, Tile] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._by_id = {t.id: t for t in self.tiles}
        self._validate()

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_layout(
        cls,
        positions: list[int],
        rotations: list[int] | None = None,
        selected_tile_id: str | None = None,
    ) -> PuzzleState:
        """Create a state where tile ``tile-i`` sits at ``positions[i]``.

        Example::

            PuzzleState.from_layout([1, 0, 2], [0, 90, 0])
        """
        if rotations is None:
            rotations = [0] * len(positions)
        if len(rotations) != len(positions):
            raise ValueError(
                f"Got {len(positions)} positions but {len(rotations)} rotations."
            )
        tiles = [
            Tile(id=tile_id(i), position=p, rotation=r)
            for i, (p, r) in enumerate(zip(positions, rotations))
        ]
        return cls(tiles=tiles, selected_tile_id=selected_tile_id)

    def _validate(self) -> None:
        n = len(self.tiles)
        if n == 0:
            raise ValueError("A puzzle needs at least one tile.")
        if len(self._by_id) != n:
            raise ValueError("Tile ids must be unique.")
        if sorted(t.original_index for t in self.tiles) != list(range(n)):
            raise ValueError(f"Tile ids must cover tile-0 .. tile-{n - 1}.")
        if sorted(t.position for t in self.tiles) != list(range(n)):
            raise ValueError(
                f"Tile positions must be a permutation of 0..{n - 1}."
            )
        for t in self.tiles:
            if t.rotation not in ROTATIONS:
                raise ValueError(
                    f"{t.id} has rotation {t.rotation}, expected one of {ROTATIONS}."
                )
        if self.selected_tile_id is not None and self.selected_tile_id not in self._by_id:
            raise ValueError(f"Selected tile {self.selected_tile_id!r} is not on the board.")

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self.tiles)

    def find(self, tid: str) -> Tile | None:
        return self._by_id.get(tid)

    def tile_at(self, position: int) -> Tile:
        for t in self.tiles:
            if t.position == position:
                return t
        raise IndexError(f"No tile at position {position}.")

    def ordered(self) -> list[Tile]:
        """Tiles sorted by the slot they occupy."""
        return sorted(self.tiles, key=lambda t: t.position)

    def is_solved(self) -> bool:
        """Check if every tile is in its home slot and upright."""
        return all(t.is_correct for t in self.tiles)

    def correct_count(self) -> int:
        return sum(1 for t in self.tiles if t.is_correct)

    def copy(self) -> PuzzleState:
        return PuzzleState(
            tiles=[t.copy() for t in self.tiles],
            selected_tile_id=self.selected_tile_id,
        )
