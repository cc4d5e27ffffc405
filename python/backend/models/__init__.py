from backend.models.geometry import ViewportGeometry, compute_layout
from backend.models.images import ImageCatalog
from backend.models.puzzle import TILE_COUNT, PuzzleState
from backend.models.render import RenderModel, RenderTile, build_render_model
from backend.models.tile import Tile, parse_index, tile_id

__all__ = [
    "ImageCatalog",
    "PuzzleState",
    "RenderModel",
    "RenderTile",
    "TILE_COUNT",
    "Tile",
    "ViewportGeometry",
    "build_render_model",
    "compute_layout",
    "parse_index",
    "tile_id",
]
