"""Pygame GUI frontend — fully self-contained.

Resizable window with the rules screen, the board, and the congratulations
screen.  No terminal interaction required.
"""

from __future__ import annotations

import enum
import logging
import random
import time
from pathlib import Path

import pygame

from backend.engine.gameplay import GamePlay
from backend.engine.gamesolver import Solver
from backend.models.geometry import HEADER_RESERVE
from backend.models.images import ImageCatalog
from backend.models.render import RenderModel, RenderTile
from frontend import texts

_LOG = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
MIN_W, MIN_H = 320, 320
TILE_GAP = 1
DIALOG_W = 460


# ---------------------------------------------------------------------------
# Screen enum
# ---------------------------------------------------------------------------
class _Screen(enum.Enum):
    RULES = "rules"
    PLAYING = "playing"
    SOLVED = "solved"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_BLUE,
        hover: tuple = COL_LAVENDER,
        fg: tuple = COL_BASE,
        radius: int = 8,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.radius = radius
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=self.radius)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


# ---------------------------------------------------------------------------
# Picture slicing
# ---------------------------------------------------------------------------
class _SliceCache:
    """Cuts the current picture into per-tile surfaces for one tile size."""

    def __init__(self) -> None:
        self._source: str | None = None
        self._full: pygame.Surface | None = None
        self._key: tuple[str, int, int, int] | None = None
        self._slices: dict[tuple[int, int], pygame.Surface] = {}
        self._scaled: pygame.Surface | None = None

    def load(self, source: str | None) -> None:
        if source == self._source:
            return
        self._source = source
        self._full = None
        self._key = None
        self._slices = {}
        if source is None:
            return
        try:
            self._full = pygame.image.load(source).convert()
        except (pygame.error, FileNotFoundError) as exc:
            _LOG.warning("Could not load %s (%s), using numbered tiles", source, exc)

    @property
    def available(self) -> bool:
        return self._full is not None

    def get(self, model: RenderModel, tile: RenderTile, tile_px: int) -> pygame.Surface:
        assert self._full is not None and self._source is not None
        key = (self._source, tile_px, model.grid_columns, model.grid_rows)
        if key != self._key:
            self._key = key
            self._slices = {}
            self._scaled = pygame.transform.smoothscale(
                self._full,
                (tile_px * model.grid_columns, tile_px * model.grid_rows),
            )
        surf = self._slices.get((tile.index, tile.rotation))
        if surf is None:
            col, row = tile.index % model.grid_columns, tile.index // model.grid_columns
            piece = self._scaled.subsurface(
                pygame.Rect(col * tile_px, row * tile_px, tile_px, tile_px)
            ).copy()
            # pygame rotates counter-clockwise, tile rotation is clockwise
            surf = pygame.transform.rotate(piece, -tile.rotation)
            self._slices[(tile.index, tile.rotation)] = surf
        return surf


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(
        self,
        images: ImageCatalog,
        *,
        seed: int | None = None,
        width: int = 1280,
        height: int = 800,
    ) -> None:
        pygame.init()
        self._surf = pygame.display.set_mode(
            (max(MIN_W, width), max(MIN_H, height)), pygame.RESIZABLE
        )
        pygame.display.set_caption(texts.TITLE)
        self._clock = pygame.time.Clock()

        # Fonts
        self._f_big = pygame.font.SysFont("Helvetica", 36, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 17, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)
        self._f_tiles: dict[int, pygame.font.Font] = {}

        rng = random.Random(seed) if seed is not None else None
        self._game = GamePlay(
            images=images, rng=rng, viewport=self._surf.get_size()
        )
        self._game.on_solved(self._on_solved)
        self._slices = _SliceCache()
        self._slices.load(self._game.image)
        self._screen = _Screen.RULES
        self._status_msg = ""
        self._build_dialog_btn()

    # ── helpers ─────────────────────────────────────────────────────────────

    def _cx(self, w: int) -> int:
        return (self._surf.get_width() - w) // 2

    def _blit_center(self, rendered: pygame.Surface, y: int) -> None:
        self._surf.blit(rendered, (self._cx(rendered.get_width()), y))

    def _board_origin(self, model: RenderModel) -> tuple[int, int]:
        """Top-left pixel of the board, centred below the header in landscape."""
        w, h = self._surf.get_size()
        board_w = int(model.tile_size) * model.grid_columns
        board_h = int(model.tile_size) * model.grid_rows
        if self._game.geometry.is_landscape:
            top = HEADER_RESERVE // 2
            return (w - board_w) // 2, top + (h - top - board_h) // 2
        return (w - board_w) // 2, (h - board_h) // 2

    def _tile_font(self, size: int) -> pygame.font.Font:
        font = self._f_tiles.get(size)
        if font is None:
            font = pygame.font.SysFont("Helvetica", size, bold=True)
            self._f_tiles[size] = font
        return font

    def _tile_rect(self, tile: RenderTile, tpx: int, ox: int, oy: int) -> pygame.Rect:
        return pygame.Rect(ox + tile.column * tpx, oy + tile.row * tpx, tpx, tpx)

    def _build_dialog_btn(self) -> None:
        bw = 220
        h = self._surf.get_height()
        self._dialog_btn = _Btn(
            (self._cx(bw), h // 2 + 110, bw, 48),
            texts.RULES_DISMISS if self._screen == _Screen.RULES else texts.NEXT_PUZZLE,
            self._f_btn,
        )

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        model = game.render_model()
        tpx = int(model.tile_size)
        if tpx <= 0:
            return
        ox, oy = self._board_origin(model)

        if game.geometry.is_landscape:
            self._blit_center(
                self._f_big.render(texts.TITLE, True, COL_TEXT),
                max(8, oy - 96),
            )

        # stats
        stats = (
            f"Time: {texts.format_time(game.elapsed_seconds)}    "
            f"Moves: {game.state.moves}    "
            f"Correct: {game.puzzle.correct_count()}/{game.puzzle.size}"
        )
        self._blit_center(
            self._f_body.render(stats, True, COL_PINK), max(4, oy - 48)
        )

        # board bg
        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(ox - 8, oy - 8, tpx * model.grid_columns + 16, tpx * model.grid_rows + 16),
            border_radius=10,
        )

        f_tile = self._tile_font(max(10, tpx // 3))
        for tile in model.tiles:
            rect = self._tile_rect(tile, tpx, ox, oy)
            inner = rect.inflate(-TILE_GAP * 2, -TILE_GAP * 2)
            if self._slices.available:
                self._surf.blit(self._slices.get(model, tile, tpx), rect.topleft)
            else:
                col = COL_GREEN if tile.is_correct else COL_BLUE
                pygame.draw.rect(self._surf, col, inner, border_radius=4)
                num = tile.index + 1
                lbl = pygame.transform.rotate(
                    f_tile.render(str(num), True, COL_BASE), -tile.rotation
                )
                self._surf.blit(
                    lbl,
                    (
                        rect.centerx - lbl.get_width() // 2,
                        rect.centery - lbl.get_height() // 2,
                    ),
                )
            if tile.is_selected:
                pygame.draw.rect(self._surf, COL_BLUE, rect.inflate(4, 4), width=4)
            else:
                pygame.draw.rect(self._surf, COL_SURFACE1, rect, width=TILE_GAP)

        # status message / footer
        footer_y = oy + tpx * model.grid_rows + 14
        if self._status_msg:
            self._blit_center(
                self._f_small.render(self._status_msg, True, COL_YELLOW), footer_y
            )
            footer_y += 18
        self._blit_center(
            self._f_small.render(
                "Click  select / swap / rotate     H  hint     V  solve"
                "     N  new puzzle     Esc  quit",
                True,
                COL_OVERLAY0,
            ),
            footer_y,
        )

    def _draw_dialog(self, title: str, lines: list[str]) -> None:
        w, h = self._surf.get_size()
        shade = pygame.Surface((w, h), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 128))
        self._surf.blit(shade, (0, 0))

        dw = min(DIALOG_W, w - 20)
        box = pygame.Rect(self._cx(dw), h // 2 - 170, dw, 350)
        pygame.draw.rect(self._surf, COL_SURFACE0, box, border_radius=12)

        self._blit_center(self._f_title.render(title, True, COL_TEXT), box.y + 20)
        y = box.y + 64
        for line in lines:
            self._blit_center(self._f_small.render(line, True, COL_SUBTEXT), y)
            y += 26
        self._dialog_btn.draw(self._surf)

    def _draw(self) -> None:
        self._draw_board()
        if self._screen == _Screen.RULES:
            self._draw_dialog(texts.RULES_TITLE, list(texts.RULES))
        elif self._screen == _Screen.SOLVED:
            self._draw_dialog(
                texts.CONGRATS_TITLE,
                [
                    texts.CONGRATS_BODY,
                    f"Time: {texts.format_time(self._game.elapsed_seconds)}",
                    f"Moves: {self._game.state.moves}",
                ],
            )

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_dialog(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._dialog_btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._dialog_btn.hit(ev.pos):
                self._close_dialog()
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_RETURN, pygame.K_SPACE):
                self._close_dialog()
            elif ev.key == pygame.K_ESCAPE:
                return False
        return True

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        game = self._game
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            model = game.render_model()
            tpx = int(model.tile_size)
            ox, oy = self._board_origin(model)
            for tile in model.tiles:
                if self._tile_rect(tile, tpx, ox, oy).collidepoint(ev.pos):
                    game.click(tile.id)
                    self._status_msg = ""
                    break
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_h:
                self._do_hint()
            elif ev.key == pygame.K_v:
                self._do_solve()
            elif ev.key == pygame.K_n:
                self._new_puzzle()
            elif ev.key == pygame.K_ESCAPE:
                return False
        return True

    def _close_dialog(self) -> None:
        if self._screen == _Screen.RULES:
            self._game.dismiss_rules()
        else:
            self._new_puzzle()
        self._screen = _Screen.PLAYING

    # ── solver actions ──────────────────────────────────────────────────────

    def _do_hint(self) -> None:
        clicks = Solver.hint(self._game.puzzle)
        if clicks is None:
            self._status_msg = "Already solved!"
            return
        for tid in clicks:
            self._game.click(tid)
        self._status_msg = f"Hint: {' -> '.join(clicks)}"

    def _do_solve(self) -> None:
        clicks = Solver.solve(self._game.puzzle)
        if not clicks:
            self._status_msg = "Already solved!"
            return

        # Animate clicks
        for i, tid in enumerate(clicks):
            self._game.click(tid)
            self._status_msg = f"Solving… {i + 1}/{len(clicks)}"
            self._draw_board()
            pygame.display.flip()
            pygame.event.pump()  # keep OS happy
            time.sleep(0.02)

        self._status_msg = f"Solved in {len(clicks)} clicks!"

    # ── game state ──────────────────────────────────────────────────────────

    def _new_puzzle(self) -> None:
        self._game.next_puzzle()
        self._slices.load(self._game.image)
        self._status_msg = ""

    def _on_solved(self, game: GamePlay) -> None:
        self._screen = _Screen.SOLVED
        self._build_dialog_btn()

    def _on_resize(self, width: int, height: int) -> None:
        self._surf = pygame.display.get_surface()
        self._game.resize(width, height)
        self._build_dialog_btn()

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                if ev.type == pygame.VIDEORESIZE:
                    self._on_resize(ev.w, ev.h)
                    continue
                if self._screen == _Screen.PLAYING:
                    handler = self._ev_game
                else:
                    handler = self._ev_dialog
                if not handler(ev):
                    running = False
                    break

            self._draw()
            pygame.display.flip()
            self._clock.tick(30)

        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    images_dir: Path = Path("assets/images"),
    seed: int | None = None,
    width: int = 1280,
    height: int = 800,
) -> None:
    """Launch the Pygame GUI (opens on the rules screen)."""
    app = PygameApp(
        ImageCatalog.from_directory(images_dir), seed=seed, width=width, height=height
    )
    app.run_loop()
