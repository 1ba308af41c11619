from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image

from .errors import DecodeError

RGBA = Tuple[int, int, int, int]


@dataclass
class PixelSource:
    """
    Imagen ya decodificada: array uint8 [H,W,4] (RGBA).
    Vale cualquier decoder que rellene este array.
    """
    rgba: np.ndarray

    def __post_init__(self):
        a = np.asarray(self.rgba, dtype=np.uint8)
        if a.ndim != 3 or a.shape[2] != 4:
            raise ValueError(f"Expected an [H,W,4] RGBA array, got shape {a.shape}")
        self.rgba = a

    @property
    def width(self) -> int:
        return self.rgba.shape[1]

    @property
    def height(self) -> int:
        return self.rgba.shape[0]

    @property
    def alpha(self) -> np.ndarray:
        return self.rgba[..., 3]

    def rgba_at(self, x: int, y: int) -> RGBA:
        r, g, b, a = self.rgba[y, x]
        return int(r), int(g), int(b), int(a)

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelSource":
        return cls(np.array(img.convert("RGBA"), dtype=np.uint8))


def read_png_image(path: str | Path) -> PixelSource:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")
    # UnidentifiedImageError y los ficheros truncados llegan como OSError
    try:
        with Image.open(path) as img:
            return PixelSource.from_image(img)
    except (OSError, SyntaxError, ValueError) as e:
        raise DecodeError(path, str(e)) from e
