from __future__ import annotations
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from partsrle.sources import PixelSource

CLEAR = (0, 0, 0, 0)
RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
GREEN = (0, 255, 0, 255)


def make_rgba(w: int, h: int, pixels=None) -> np.ndarray:
    """pixels: {(x, y): (r, g, b, a)}; everything else transparent."""
    a = np.zeros((h, w, 4), dtype=np.uint8)
    for (x, y), px in (pixels or {}).items():
        a[y, x] = px
    return a


def make_source(w: int, h: int, pixels=None) -> PixelSource:
    return PixelSource(make_rgba(w, h, pixels))


def save_png(path: Path, w: int, h: int, pixels=None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(make_rgba(w, h, pixels), mode="RGBA").save(path)
    return path


@pytest.fixture
def parts_dir(tmp_path: Path) -> Path:
    root = tmp_path / "images"
    save_png(root / "1-bodies" / "body-a.png", 4, 4, {(1, 1): RED, (2, 1): RED, (1, 2): BLUE})
    save_png(root / "1-bodies" / "body-b.png", 4, 4, {(0, 3): GREEN})
    save_png(root / "2-heads" / "head-a.png", 3, 3, {(1, 0): BLUE, (1, 1): RED})
    return root


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    import os
    for k in list(os.environ):
        if k.startswith("PARTSRLE_"):
            monkeypatch.delenv(k, raising=False)
