"""Keyboard reader for the Rich frontend.

Puts the terminal in raw mode for one keypress and turns it into a board
action: a cursor step, a click on the tile under the cursor, or one of the
session commands.
"""

from __future__ import annotations

import os
import sys
import time

# action -> the keys bound to it
_BINDINGS: dict[str, str] = {
    "up": "wW",
    "down": "sS",
    "left": "aA",
    "right": "dD",
    "select": " \r\n",
    "hint": "hH",
    "solve": "vV",
    "next": "nN",
    "quit": "qQ\x03",
}

_ACTIONS: dict[str, str] = {
    key: action for action, keys in _BINDINGS.items() for key in keys
}

# last byte of "ESC [ x" on Unix; byte after the 0x00 / 0xe0 prefix on Windows
_UNIX_ARROWS = {"A": "up", "B": "down", "C": "right", "D": "left"}
_WINDOWS_ARROWS = {"H": "up", "P": "down", "M": "right", "K": "left"}

_ESCAPE_WAIT = 0.1  # seconds to wait for the rest of an escape sequence
_POLL = 0.02


def action_for(ch: str) -> str:
    """Map one typed character to its action, ``""`` if it has none."""
    return _ACTIONS.get(ch, "")


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()

    def pending(wait: float | None) -> bool:
        return bool(select.select([fd], [], [], wait)[0])

    def read() -> str:
        # unbuffered, so select() still sees the tail of an escape sequence
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        if not pending(timeout):
            return None
        ch = read()
        if ch != "\x1b":
            return action_for(ch)
        if not pending(_ESCAPE_WAIT) or read() != "[":
            return "quit"  # bare Escape
        if not pending(_ESCAPE_WAIT):
            return ""
        return _UNIX_ARROWS.get(read(), "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    deadline = None if timeout is None else time.monotonic() + timeout
    while not msvcrt.kbhit():
        if deadline is not None and time.monotonic() >= deadline:
            return None
        time.sleep(_POLL)
    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return _WINDOWS_ARROWS.get(msvcrt.getwch(), "")
    if ch == "\x1b":
        return "quit"
    return action_for(ch)


_read = _read_windows if os.name == "nt" else _read_unix


def read_action(timeout: float | None = None) -> str | None:
    """Wait for a keypress and return its action.

    Actions are ``up``, ``down``, ``left``, ``right``, ``select``, ``hint``,
    ``solve``, ``next`` and ``quit`` (also Escape); unbound keys give ``""``.
    With a *timeout* in seconds, returns ``None`` when nothing was pressed.
    """
    return _read(timeout)
