"""PyQt6 GUI frontend — fully self-contained.

Rules page, a painted board that follows the window size, and a
congratulations page.  No terminal interaction required.
"""

from __future__ import annotations

import logging
import random
import sys
from pathlib import Path
from typing import Callable

from PyQt6.QtCore import QRectF, Qt, QTimer
from PyQt6.QtGui import (
    QColor,
    QFont,
    QKeyEvent,
    QMouseEvent,
    QPainter,
    QPaintEvent,
    QPen,
    QPixmap,
    QResizeEvent,
    QTextOption,
)
from PyQt6.QtWidgets import (
    QApplication,
    QLabel,
    QMainWindow,
    QPushButton,
    QSpacerItem,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from backend.engine.gameplay import GamePlay
from backend.engine.gamesolver import Solver
from backend.models.images import ImageCatalog
from backend.models.render import RenderModel, RenderTile
from frontend import texts

_LOG = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin Mocha CSS colours
# ---------------------------------------------------------------------------
_BASE = "#1e1e2e"
_MANTLE = "#181825"
_SURFACE0 = "#313244"
_SURFACE1 = "#45475a"
_OVERLAY0 = "#6c7086"
_TEXT = "#cdd6f4"
_SUBTEXT = "#a6adc8"
_BLUE = "#89b4fa"
_GREEN = "#a6e3a1"
_PINK = "#f5c2e7"
_YELLOW = "#f9e2af"
_LAVENDER = "#b4befe"

_GLOBAL_CSS = f"""
    QMainWindow, QWidget#page {{ background: {_BASE}; }}
    QLabel {{ color: {_TEXT}; }}
"""


def _styled_btn(
    text: str,
    *,
    bg: str = _BLUE,
    hover: str = _LAVENDER,
    fg: str = _BASE,
    font_size: int = 15,
    min_w: int = 240,
    min_h: int = 48,
    radius: int = 8,
) -> QPushButton:
    btn = QPushButton(text)
    btn.setFont(QFont("Helvetica", font_size, QFont.Weight.Bold))
    btn.setMinimumHeight(min_h)
    btn.setMinimumWidth(min_w)
    btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    btn.setStyleSheet(
        f"QPushButton {{ background:{bg}; color:{fg};"
        f" border:none; border-radius:{radius}px; padding:6px 18px; }}"
        f" QPushButton:hover {{ background:{hover}; }}"
    )
    return btn


def _label(text: str, size: int, colour: str = _TEXT, bold: bool = False) -> QLabel:
    lbl = QLabel(text)
    lbl.setFont(QFont("Helvetica", size, QFont.Weight.Bold if bold else QFont.Weight.Normal))
    lbl.setStyleSheet(f"color:{colour};")
    lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
    lbl.setWordWrap(True)
    return lbl


# ═══════════════════════════════════════════════════════════════════════════
# Pages
# ═══════════════════════════════════════════════════════════════════════════


class _DialogPage(QWidget):
    """Centred title, body lines and a single action button."""

    def __init__(self, title: str, lines: list[str], action: str) -> None:
        super().__init__()
        self.setObjectName("page")

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(10)
        root.setContentsMargins(30, 30, 30, 30)

        root.addWidget(_label(title, 28, bold=True))
        root.addSpacerItem(QSpacerItem(0, 16))

        self._lines: list[QLabel] = []
        for line in lines:
            lbl = _label(line, 14, _SUBTEXT)
            root.addWidget(lbl)
            self._lines.append(lbl)

        root.addSpacerItem(QSpacerItem(0, 20))
        self.action_btn = _styled_btn(action)
        root.addWidget(self.action_btn, alignment=Qt.AlignmentFlag.AlignCenter)

    def set_lines(self, lines: list[str]) -> None:
        for lbl, text in zip(self._lines, lines):
            lbl.setText(text)


class _BoardWidget(QWidget):
    """Paints the tiles from the session's render model and turns clicks into
    tile clicks."""

    def __init__(self, game: GamePlay) -> None:
        super().__init__()
        self.game = game
        self._source: str | None = None
        self._picture: QPixmap | None = None
        self.after_click: Callable[[], None] | None = None
        self.setMinimumSize(100, 100)

    def load_picture(self) -> None:
        source = self.game.image
        if source == self._source:
            return
        self._source = source
        self._picture = None
        if source is not None:
            pix = QPixmap(source)
            if pix.isNull():
                _LOG.warning("Could not load %s, using numbered tiles", source)
            else:
                self._picture = pix

    def _origin(self, model: RenderModel) -> tuple[float, float]:
        bw = model.tile_size * model.grid_columns
        bh = model.tile_size * model.grid_rows
        return (self.width() - bw) / 2, (self.height() - bh) / 2

    def _tile_rect(self, model: RenderModel, tile: RenderTile) -> QRectF:
        ox, oy = self._origin(model)
        ts = model.tile_size
        return QRectF(ox + tile.column * ts, oy + tile.row * ts, ts, ts)

    # -- Qt events --

    def paintEvent(self, event: QPaintEvent | None) -> None:  # noqa: N802
        model = self.game.render_model()
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.fillRect(self.rect(), QColor(_MANTLE))
        if model.tile_size <= 0:
            painter.end()
            return

        scaled: QPixmap | None = None
        if self._picture is not None:
            scaled = self._picture.scaled(
                int(model.background_width),
                int(model.background_height),
                Qt.AspectRatioMode.IgnoreAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )

        font = QFont("Helvetica", max(8, int(model.tile_size // 4)), QFont.Weight.Bold)
        painter.setFont(font)
        for tile in model.tiles:
            rect = self._tile_rect(model, tile)
            painter.save()
            painter.translate(rect.center())
            painter.rotate(tile.rotation)
            local = QRectF(-rect.width() / 2, -rect.height() / 2, rect.width(), rect.height())
            if scaled is not None:
                ts = int(model.tile_size)
                piece = scaled.copy(
                    int(-tile.background_x), int(-tile.background_y), ts, ts
                )
                painter.drawPixmap(local.toRect(), piece)
            else:
                painter.fillRect(
                    local.adjusted(1, 1, -1, -1),
                    QColor(_GREEN if tile.is_correct else _BLUE),
                )
                painter.setPen(QColor(_BASE))
                painter.drawText(
                    local, str(tile.index + 1), QTextOption(Qt.AlignmentFlag.AlignCenter)
                )
            painter.restore()

            if tile.is_selected:
                painter.setPen(QPen(QColor(_BLUE), 4))
            else:
                painter.setPen(QPen(QColor(_SURFACE1), 1))
            painter.drawRect(rect)
        painter.end()

    def mousePressEvent(self, event: QMouseEvent | None) -> None:  # noqa: N802
        if event is None or event.button() != Qt.MouseButton.LeftButton:
            return
        model = self.game.render_model()
        pos = event.position()
        for tile in model.tiles:
            if self._tile_rect(model, tile).contains(pos):
                self.game.click(tile.id)
                if self.after_click is not None:
                    self.after_click()
                self.update()
                return


class _GamePage(QWidget):
    """The board with live stats and a footer of shortcuts."""

    def __init__(self, game: GamePlay) -> None:
        super().__init__()
        self.setObjectName("page")
        self.game = game

        root = QVBoxLayout(self)
        root.setSpacing(6)
        root.setContentsMargins(8, 8, 8, 8)

        self._title = _label(texts.TITLE, 26, bold=True)
        root.addWidget(self._title)

        self._stats = _label("", 13, _PINK)
        root.addWidget(self._stats)

        self.board = _BoardWidget(game)
        self.board.after_click = self.sync
        root.addWidget(self.board, stretch=1)

        self._status = _label("", 11, _YELLOW)
        root.addWidget(self._status)

        root.addWidget(
            _label(
                "Click  select / swap / rotate     H  hint     V  solve"
                "     N  new puzzle     Esc  quit",
                11,
                _OVERLAY0,
            )
        )

        # one-second display timer
        self._timer = QTimer(self)
        self._timer.timeout.connect(self.sync)
        self._timer.start(1000)

    def sync(self) -> None:
        g = self.game
        self._title.setVisible(g.geometry.is_landscape)
        self._stats.setText(
            f"Time: {texts.format_time(g.elapsed_seconds)}    "
            f"Moves: {g.state.moves}    "
            f"Correct: {g.puzzle.correct_count()}/{g.puzzle.size}"
        )
        self.board.update()

    def set_status(self, msg: str) -> None:
        self._status.setText(msg)


# ═══════════════════════════════════════════════════════════════════════════
# Main window
# ═══════════════════════════════════════════════════════════════════════════

_IDX_RULES = 0
_IDX_GAME = 1
_IDX_SOLVED = 2


class _MainWindow(QMainWindow):
    def __init__(
        self,
        images: ImageCatalog,
        *,
        seed: int | None = None,
        width: int = 1280,
        height: int = 800,
    ) -> None:
        super().__init__()
        self.setWindowTitle(texts.TITLE)
        self.setStyleSheet(_GLOBAL_CSS)
        self.setMinimumSize(360, 360)

        rng = random.Random(seed) if seed is not None else None
        self.game = GamePlay(images=images, rng=rng, viewport=(width, height))
        self.game.on_solved(self._on_solved)

        self._stack = QStackedWidget()
        self.setCentralWidget(self._stack)

        self._rules = _DialogPage(texts.RULES_TITLE, list(texts.RULES), texts.RULES_DISMISS)
        self._rules.action_btn.clicked.connect(self._dismiss_rules)
        self._stack.addWidget(self._rules)  # 0

        self._game_page = _GamePage(self.game)
        self._game_page.board.load_picture()
        self._stack.addWidget(self._game_page)  # 1

        self._solved = _DialogPage(
            texts.CONGRATS_TITLE, [texts.CONGRATS_BODY, "", ""], texts.NEXT_PUZZLE
        )
        self._solved.action_btn.clicked.connect(self._next_puzzle)
        self._stack.addWidget(self._solved)  # 2

        self._stack.setCurrentIndex(_IDX_RULES)
        self.resize(width, height)

    # -- navigation ---

    def _dismiss_rules(self) -> None:
        self.game.dismiss_rules()
        self._game_page.sync()
        self._stack.setCurrentIndex(_IDX_GAME)

    def _next_puzzle(self) -> None:
        self.game.next_puzzle()
        self._game_page.board.load_picture()
        self._game_page.set_status("")
        self._game_page.sync()
        self._stack.setCurrentIndex(_IDX_GAME)

    def _on_solved(self, game: GamePlay) -> None:
        self._solved.set_lines(
            [
                texts.CONGRATS_BODY,
                f"Time: {texts.format_time(game.elapsed_seconds)}",
                f"Moves: {game.state.moves}",
            ]
        )
        self._stack.setCurrentIndex(_IDX_SOLVED)

    # -- solver actions ---

    def _do_hint(self) -> None:
        clicks = Solver.hint(self.game.puzzle)
        if clicks is None:
            self._game_page.set_status("Already solved!")
            return
        for tid in clicks:
            self.game.click(tid)
        self._game_page.set_status(f"Hint: {' -> '.join(clicks)}")
        self._game_page.sync()

    def _do_solve(self) -> None:
        clicks = Solver.solve(self.game.puzzle)
        if not clicks:
            self._game_page.set_status("Already solved!")
            return
        for tid in clicks:
            self.game.click(tid)
        self._game_page.sync()

    # -- Qt events ---

    def resizeEvent(self, event: QResizeEvent | None) -> None:  # noqa: N802
        super().resizeEvent(event)
        self.game.resize(self.width(), self.height())
        self._game_page.sync()

    def keyPressEvent(self, event: QKeyEvent | None) -> None:  # noqa: N802
        if event is None:
            return
        key = event.key()
        idx = self._stack.currentIndex()

        if key == Qt.Key.Key_Escape:
            self.close()
        elif idx == _IDX_RULES and key in (Qt.Key.Key_Return, Qt.Key.Key_Space):
            self._dismiss_rules()
        elif idx == _IDX_SOLVED and key in (Qt.Key.Key_Return, Qt.Key.Key_Space):
            self._next_puzzle()
        elif idx == _IDX_GAME:
            if key == Qt.Key.Key_H:
                self._do_hint()
            elif key == Qt.Key.Key_V:
                self._do_solve()
            elif key == Qt.Key.Key_N:
                self._next_puzzle()
        else:
            super().keyPressEvent(event)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    images_dir: Path = Path("assets/images"),
    seed: int | None = None,
    width: int = 1280,
    height: int = 800,
) -> None:
    """Launch the PyQt6 GUI (opens on the rules page)."""
    qapp = QApplication.instance() or QApplication(sys.argv)
    window = _MainWindow(
        ImageCatalog.from_directory(images_dir), seed=seed, width=width, height=height
    )
    window.show()
    qapp.exec()
