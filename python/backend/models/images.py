"""Catalogue of puzzle pictures.

Images are opaque to the game: a source is just a path or URL handed to the
frontend, which is responsible for loading it.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

_LOG = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg")


class ImageCatalog:
    """An ordered list of image sources with no-repeat random picking."""

    def __init__(self, sources: list[str] | None = None) -> None:
        self.sources: list[str] = list(sources or [])

    @classmethod
    def from_directory(cls, directory: Path) -> ImageCatalog:
        if not directory.is_dir():
            _LOG.warning("Image directory %s does not exist", directory)
            return cls()
        paths = sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in IMAGE_SUFFIXES
        )
        if not paths:
            _LOG.warning("No images found in %s", directory)
        return cls([str(p) for p in paths])

    def __len__(self) -> int:
        return len(self.sources)

    def __getitem__(self, index: int) -> str:
        return self.sources[index]

    def pick(
        self, current: int | None = None, rng: random.Random | None = None
    ) -> int | None:
        """Return a random index, never *current* when there is a choice."""
        if not self.sources:
            return None
        rng = rng or random.Random()
        choices = [i for i in range(len(self.sources)) if i != current]
        if not choices:
            return 0
        return rng.choice(choices)
