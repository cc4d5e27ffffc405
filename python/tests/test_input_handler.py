"""Key binding tests for the terminal frontend's keyboard reader."""

from __future__ import annotations

import pytest

from frontend.cli.input_handler import action_for


@pytest.mark.parametrize(
    "ch, action",
    [
        ("w", "up"),
        ("S", "down"),
        ("a", "left"),
        ("D", "right"),
        (" ", "select"),
        ("\r", "select"),
        ("h", "hint"),
        ("V", "solve"),
        ("n", "next"),
        ("q", "quit"),
        ("\x03", "quit"),
    ],
)
def test_bound_keys(ch: str, action: str) -> None:
    assert action_for(ch) == action


@pytest.mark.parametrize("ch", ["x", "7", "\t", ""])
def test_unbound_keys_have_no_action(ch: str) -> None:
    assert action_for(ch) == ""
