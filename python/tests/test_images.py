"""Image catalogue tests."""

from __future__ import annotations

import random
from pathlib import Path

from backend.models.images import ImageCatalog


def test_empty_catalog_picks_nothing() -> None:
    catalog = ImageCatalog()
    assert len(catalog) == 0
    assert catalog.pick() is None
    assert catalog.pick(current=0) is None


def test_single_image_may_repeat() -> None:
    catalog = ImageCatalog(["only.png"])
    assert catalog.pick() == 0
    assert catalog.pick(current=0) == 0


def test_pick_never_repeats_current() -> None:
    catalog = ImageCatalog(["a.png", "b.png", "c.png"])
    rng = random.Random(0)
    current = catalog.pick(rng=rng)
    seen = {current}
    for _ in range(200):
        nxt = catalog.pick(current, rng)
        assert nxt != current
        seen.add(nxt)
        current = nxt
    assert seen == {0, 1, 2}


def test_from_directory(tmp_path: Path) -> None:
    for name in ("b.jpg", "a.png", "c.JPEG", "notes.txt"):
        (tmp_path / name).write_bytes(b"")
    (tmp_path / "sub.png").mkdir()

    catalog = ImageCatalog.from_directory(tmp_path)
    assert [Path(s).name for s in catalog.sources] == ["a.png", "b.jpg", "c.JPEG"]
    assert catalog[0] == str(tmp_path / "a.png")


def test_from_missing_directory(tmp_path: Path) -> None:
    catalog = ImageCatalog.from_directory(tmp_path / "nope")
    assert len(catalog) == 0
