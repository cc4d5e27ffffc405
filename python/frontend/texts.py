"""User-facing strings shared by every frontend."""

from __future__ import annotations

TITLE = "Puzzle Tag"

RULES_TITLE = "How to play"
RULES: tuple[str, ...] = (
    "1. Restore the picture by putting every piece in place and turning it upright.",
    "2. Click a piece to select it.",
    "3. Click the selected piece again to turn it 90° clockwise.",
    "4. Click another piece to swap the two.",
    "5. Keep going until the picture is complete.",
)
RULES_DISMISS = "Got it!"

CONGRATS_TITLE = "Congratulations!"
CONGRATS_BODY = "You put the puzzle together!"
NEXT_PUZZLE = "Next puzzle"


def format_time(seconds: float) -> str:
    """Format elapsed seconds as ``m:ss``."""
    m, s = divmod(int(seconds), 60)
    return f"{m}:{s:02d}"
