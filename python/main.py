#!/usr/bin/env python3
"""Tile Swap Puzzle.

Usage::

    python main.py                  # interactive menu
    python main.py -f pygame        # Pygame GUI
    python main.py -f rich --seed 7 # Rich terminal, reproducible puzzle
    python main.py -f pyqt --images ~/Pictures/puzzles
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
ASSETS_DIR = PROJECT_ROOT / "assets"
IMAGES_DIR = ASSETS_DIR / "images"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

_LOG = logging.getLogger("tile_puzzle")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"
    pyqt = "pyqt"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
    Frontend.pyqt: "frontend.gui.pyqt.app",
}

_GUI = {Frontend.pygame, Frontend.pyqt}


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _launch(
    frontend: Frontend,
    images: Path,
    seed: Optional[int],
    width: int,
    height: int,
) -> None:
    _LOG.info("Launching %s frontend", frontend.value)
    mod = importlib.import_module(_RUNNERS[frontend])
    if frontend in _GUI:
        mod.run(images_dir=images, seed=seed, width=width, height=height)
    else:
        mod.run(seed=seed)


def _menu_loop(images: Path, seed: Optional[int], width: int, height: int) -> None:
    choices = {"1": Frontend.pygame, "2": Frontend.pyqt, "3": Frontend.rich}
    while True:
        print()
        print("  ====================================")
        print("          P U Z Z L E   T A G         ")
        print("  ====================================")
        print()
        print("  1.  Play  (Pygame GUI)")
        print("  2.  Play  (PyQt GUI)")
        print("  3.  Play  (Rich Terminal)")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return
        if choice in choices:
            _launch(choices[choice], images, seed, width, height)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        envvar="TILE_PUZZLE_FRONTEND",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    images: Path = typer.Option(
        IMAGES_DIR, "-i", "--images",
        envvar="TILE_PUZZLE_IMAGES",
        file_okay=False,
        help="Directory of puzzle pictures (png/jpg).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        envvar="TILE_PUZZLE_SEED",
        help="Seed the shuffle for a reproducible puzzle.",
    ),
    width: int = typer.Option(
        1280, "--width", min=320,
        help="Initial window width (GUI frontends).",
    ),
    height: int = typer.Option(
        800, "--height", min=320,
        help="Initial window height (GUI frontends).",
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level",
        envvar="TILE_PUZZLE_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Tile Swap Puzzle."""
    _configure_logging(log_level)

    if frontend is None:
        _menu_loop(images, seed, width, height)
        return

    _launch(frontend, images, seed, width, height)


if __name__ == "__main__":
    app()
