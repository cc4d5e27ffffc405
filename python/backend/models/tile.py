"""Tile model for the tile swap puzzle."""

from __future__ import annotations

from dataclasses import dataclass

ROTATIONS: tuple[int, ...] = (0, 90, 180, 270)
ROTATION_STEP = 90

_ID_PREFIX = "tile-"


def tile_id(index: int) -> str:
    """Return the stable identity for the tile cut from slot *index*."""
    return f"{_ID_PREFIX}{index}"


def parse_index(tid: str) -> int:
    """Return the original slot index embedded in a tile id.

    Example::

        parse_index("tile-17")  # -> 17
    """
    prefix, sep, raw = tid.partition("-")
    if not sep or prefix + sep != _ID_PREFIX or not raw.isdigit():
        raise ValueError(f"Malformed tile id {tid!r}, expected 'tile-<index>'.")
    return int(raw)


@dataclass
class Tile:
    """One piece of the picture.

    ``position`` is the slot the tile currently occupies, ``rotation`` its
    clockwise rotation in degrees.
    """

    id: str
    position: int
    rotation: int = 0

    @property
    def original_index(self) -> int:
        return parse_index(self.id)

    # -- queries --------------------------------------------------------------

    @property
    def is_placed(self) -> bool:
        return self.position == self.original_index

    @property
    def is_upright(self) -> bool:
        return self.rotation == 0

    @property
    def is_correct(self) -> bool:
        return self.is_placed and self.is_upright

    # -- mutation -------------------------------------------------------------

    def rotate(self) -> None:
        """Turn the tile a quarter clockwise."""
        self.rotation = (self.rotation + ROTATION_STEP) % 360

    def copy(self) -> Tile:
        return Tile(id=self.id, position=self.position, rotation=self.rotation)
