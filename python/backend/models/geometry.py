"""Responsive board layout.

The board is always 5 x 10 tiles; it lies on its side (10 columns, 5 rows)
when the viewport is wider than it is tall.  Everything here is a pure
function of the viewport size.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

LONG_SIDE = 10
SHORT_SIDE = 5
PADDING_RATIO = 0.03
HEADER_RESERVE = 160  # px kept free above the board in landscape for title/controls


def _clamp(value: float) -> float:
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


@dataclass(frozen=True)
class ViewportGeometry:
    width: float
    height: float
    padding: float
    is_landscape: bool
    tile_size: float
    grid_columns: int
    grid_rows: int

    # -- derived --------------------------------------------------------------

    @property
    def board_width(self) -> float:
        return self.tile_size * self.grid_columns

    @property
    def board_height(self) -> float:
        return self.tile_size * self.grid_rows

    @property
    def grid_template(self) -> tuple[str, str]:
        """Column and row templates in CSS grid notation."""
        return (
            f"repeat({self.grid_columns}, {self.tile_size}px)",
            f"repeat({self.grid_rows}, {self.tile_size}px)",
        )

    @property
    def background_size(self) -> tuple[float, float]:
        return self.board_width, self.board_height

    def cell_of(self, position: int) -> tuple[int, int]:
        """Return the (column, row) a board slot maps to."""
        return position % self.grid_columns, position // self.grid_columns

    def background_offset(self, index: int) -> tuple[float, float]:
        """Offset of the picture so that slice *index* shows through a tile."""
        col, row = self.cell_of(index)
        return -col * self.tile_size, -row * self.tile_size


def compute_layout(width: float, height: float) -> ViewportGeometry:
    """Fit the 50-tile board into a *width* x *height* viewport."""
    width = _clamp(width)
    height = _clamp(height)
    padding = min(width, height) * PADDING_RATIO
    is_landscape = width > height

    if is_landscape:
        cols, rows = LONG_SIDE, SHORT_SIDE
        available_h = height - padding * 2 - HEADER_RESERVE
        available_w = width - padding * 2
    else:
        cols, rows = SHORT_SIDE, LONG_SIDE
        available_w = width - padding * 2
        available_h = height - padding * 2

    tile_size = _clamp(min(available_h / rows, available_w / cols))

    return ViewportGeometry(
        width=width,
        height=height,
        padding=padding,
        is_landscape=is_landscape,
        tile_size=tile_size,
        grid_columns=cols,
        grid_rows=rows,
    )
