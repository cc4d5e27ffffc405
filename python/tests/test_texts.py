"""Shared frontend text helpers."""

from __future__ import annotations

import pytest

from frontend.texts import RULES, format_time


@pytest.mark.parametrize(
    "seconds,expected",
    [(0, "0:00"), (9, "0:09"), (60, "1:00"), (61.9, "1:01"), (754, "12:34")],
)
def test_format_time(seconds: float, expected: str) -> None:
    assert format_time(seconds) == expected


def test_rules_are_numbered() -> None:
    assert [line.split(".")[0] for line in RULES] == ["1", "2", "3", "4", "5"]
