"""Plain data handed to frontends for drawing one frame of the board."""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.geometry import ViewportGeometry
from backend.models.puzzle import PuzzleState


@dataclass(frozen=True)
class RenderTile:
    id: str
    index: int  # original slot, i.e. the picture slice this tile carries
    position: int
    column: int
    row: int
    rotation: int
    is_selected: bool
    is_correct: bool
    background_x: float
    background_y: float


@dataclass(frozen=True)
class RenderModel:
    tiles: tuple[RenderTile, ...]
    tile_size: float
    grid_columns: int
    grid_rows: int
    background_width: float
    background_height: float
    image: str | None
    selected_tile_id: str | None
    solved: bool


def build_render_model(
    state: PuzzleState, geometry: ViewportGeometry, image: str | None = None
) -> RenderModel:
    """Project *state* onto *geometry*, tiles ordered by board slot."""
    tiles: list[RenderTile] = []
    for t in state.ordered():
        col, row = geometry.cell_of(t.position)
        bx, by = geometry.background_offset(t.original_index)
        tiles.append(
            RenderTile(
                id=t.id,
                index=t.original_index,
                position=t.position,
                column=col,
                row=row,
                rotation=t.rotation,
                is_selected=t.id == state.selected_tile_id,
                is_correct=t.is_correct,
                background_x=bx,
                background_y=by,
            )
        )
    bw, bh = geometry.background_size
    return RenderModel(
        tiles=tuple(tiles),
        tile_size=geometry.tile_size,
        grid_columns=geometry.grid_columns,
        grid_rows=geometry.grid_rows,
        background_width=bw,
        background_height=bh,
        image=image,
        selected_tile_id=state.selected_tile_id,
        solved=state.is_solved(),
    )
