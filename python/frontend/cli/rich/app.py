"""Rich terminal frontend — coloured tile grid driven by a keyboard cursor.

Tiles show the number of the picture slice they carry and an arrow for their
rotation.  Move the cursor with the arrows / WASD and press Space or Enter to
click the tile under it.
"""

from __future__ import annotations

import random
import sys
import time

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.engine.gamesolver import Solver
from backend.models.render import RenderModel
from frontend import texts
from frontend.cli.input_handler import read_action

console = Console()

# a terminal cell is roughly twice as tall as it is wide
_CELL_ASPECT = 2

_ARROWS = {0: "↑", 90: "→", 180: "↓", 270: "←"}

_CURSOR_STEPS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


# -- helpers ------------------------------------------------------------------


def _viewport() -> tuple[int, int]:
    w, h = console.size
    return w, h * _CELL_ASPECT


class _Cursor:
    """Board cell under the keyboard cursor, kept inside the grid."""

    def __init__(self) -> None:
        self.col = 0
        self.row = 0

    def move(self, key: str, model: RenderModel) -> None:
        dc, dr = _CURSOR_STEPS[key]
        self.col = (self.col + dc) % model.grid_columns
        self.row = (self.row + dr) % model.grid_rows

    def clamp(self, model: RenderModel) -> None:
        self.col = min(self.col, model.grid_columns - 1)
        self.row = min(self.row, model.grid_rows - 1)

    def position(self, model: RenderModel) -> int:
        return self.row * model.grid_columns + self.col


# -- board rendering ----------------------------------------------------------


def _render_board(model: RenderModel, cursor: _Cursor) -> Table:
    """Return a Rich Table representing the tile grid."""
    width = len(str(len(model.tiles)))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(model.grid_columns):
        table.add_column(width=width + 2, justify="center")

    cells = [["" for _ in range(model.grid_columns)] for _ in range(model.grid_rows)]
    for tile in model.tiles:
        label = f"{tile.index + 1:>{width}}{_ARROWS[tile.rotation]}"
        if tile.is_correct:
            style = "bold green"
        elif tile.position == tile.index:
            style = "bold yellow"
        else:
            style = "bold white"
        if tile.is_selected:
            style += " on blue"
        if tile.column == cursor.col and tile.row == cursor.row:
            style += " reverse"
        cells[tile.row][tile.column] = f"[{style}]{label}[/]"

    for row in cells:
        table.add_row(*row)
    return table


def _stats_text(game: GamePlay) -> Text:
    stats = Text()
    stats.append("  Time: ", style="dim")
    stats.append(texts.format_time(game.elapsed_seconds), style="bold yellow")
    stats.append("    Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Correct: ", style="dim")
    stats.append(
        f"{game.puzzle.correct_count()}/{game.puzzle.size}", style="bold yellow"
    )
    return stats


# -- screens ------------------------------------------------------------------


def _draw_rules() -> None:
    console.clear()
    body = Group(
        *(Text(line) for line in texts.RULES),
        Text(""),
        Align.center(Text(f"Press any key — {texts.RULES_DISMISS}", style="dim")),
    )
    panel = Panel(
        body,
        title=f"[bold]{texts.RULES_TITLE}[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


def _draw_game(game: GamePlay, cursor: _Cursor, status: str = "") -> None:
    console.clear()
    model = game.render_model()

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("Space", style="bold cyan")
    controls.append("  click   ", style="dim")
    controls.append("H", style="bold cyan")
    controls.append("  hint   ", style="dim")
    controls.append("V", style="bold cyan")
    controls.append("  solve   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  new   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")

    title = texts.TITLE if game.geometry.is_landscape else ""
    panel = Panel(
        Align.center(_render_board(model, cursor)),
        title=f"[bold cyan]{title}[/bold cyan]" if title else None,
        border_style="bright_blue",
        padding=(0, 1),
    )

    console.print(Align.center(panel))
    # Save cursor position right before the stats line so _update_time()
    # can later restore to this exact spot and overwrite only this line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(_stats_text(game)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats line using the saved cursor position.

    Uses raw ANSI codes (bypassing Rich) so only the single stats
    line is repainted — no flicker from a full redraw.
    """
    _DIM = "\033[2m"
    _YB = "\033[33;1m"
    _RS = "\033[0m"

    elapsed = texts.format_time(game.elapsed_seconds)
    correct = f"{game.puzzle.correct_count()}/{game.puzzle.size}"
    stats_raw = (
        f"{_DIM}Time: {_RS}{_YB}{elapsed}{_RS}"
        f"    {_DIM}Moves: {_RS}{_YB}{game.state.moves}{_RS}"
        f"    {_DIM}Correct: {_RS}{_YB}{correct}{_RS}"
    )

    # Centre the visible text to match what Rich would produce.
    visible_len = len(
        f"  Time: {elapsed}    Moves: {game.state.moves}    Correct: {correct}"
    )
    pad = max(0, (console.width - visible_len) // 2 + 2)

    sys.stdout.write(f"\033[u\033[K{' ' * pad}{stats_raw}")
    sys.stdout.flush()


def _draw_win(game: GamePlay, cursor: _Cursor) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append(texts.CONGRATS_TITLE, style="bold green")
    congrats.append(f"  {texts.CONGRATS_BODY}  ", style="green")
    congrats.append("★\n", style="bold yellow")

    group = Group(
        Align.center(_render_board(game.render_model(), cursor)),
        Align.center(congrats),
        Align.center(_stats_text(game)),
    )
    panel = Panel(
        group,
        title=f"[bold green]{texts.TITLE}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(
        Align.center(
            Text(f"\n  Enter  {texts.NEXT_PUZZLE}     Q  quit\n", style="dim")
        )
    )


# -- solver helpers -----------------------------------------------------------


def _apply_hint(game: GamePlay) -> str:
    clicks = Solver.hint(game.puzzle)
    if clicks is None:
        return "[green]Already solved![/green]"
    for tid in clicks:
        game.click(tid)
    return f"[cyan]Hint:[/cyan] clicked [bold]{' -> '.join(clicks)}[/bold]"


def _auto_solve(game: GamePlay, cursor: _Cursor) -> str:
    clicks = Solver.solve(game.puzzle)
    if not clicks:
        return "[green]Already solved![/green]"

    for i, tid in enumerate(clicks):
        game.click(tid)
        _draw_game(game, cursor, f"[bold cyan]Solving… click {i + 1}/{len(clicks)}[/bold cyan]")
        time.sleep(0.02)

    return f"[bold green]Solved in {len(clicks)} clicks![/bold green]"


# -- game loop ----------------------------------------------------------------


def _play(game: GamePlay) -> None:
    cursor = _Cursor()
    viewport = _viewport()
    status = ""

    while True:
        while not game.is_won:
            model = game.render_model()
            cursor.clamp(model)
            _draw_game(game, cursor, status)
            status = ""

            # Wait for input with a short timeout so the clock keeps ticking.
            while True:
                key = read_action(0.5)
                if key is not None:
                    break
                if _viewport() != viewport:
                    break
                _update_time(game)

            if _viewport() != viewport:
                viewport = _viewport()
                game.resize(*viewport)
                continue

            if key in _CURSOR_STEPS:
                cursor.move(key, model)
            elif key == "select":
                tile = game.puzzle.tile_at(cursor.position(model))
                game.click(tile.id)
            elif key == "hint":
                status = _apply_hint(game)
            elif key == "solve":
                status = _auto_solve(game, cursor)
            elif key == "next":
                game.next_puzzle()
            elif key == "quit":
                return

        # -- win ---------------------------------------------------------------
        _draw_win(game, cursor)
        while True:
            key = read_action()
            if key == "select":
                game.next_puzzle()
                break
            if key == "quit":
                return


# -- public entry point -------------------------------------------------------


def run(seed: int | None = None) -> None:
    """Launch the Rich CLI (opens on the rules screen)."""
    rng = random.Random(seed) if seed is not None else None
    game = GamePlay(rng=rng, viewport=_viewport())

    _draw_rules()
    if read_action() == "quit":
        return
    game.dismiss_rules()

    _play(game)
    console.clear()
    console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
