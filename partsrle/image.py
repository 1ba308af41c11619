from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np

from .bounds import calc_bounds
from .errors import CapacityExceeded
from .models import Bounds
from .palette import PaletteRegistry
from .rle import RLERun, encode
from .sources import PixelSource
from .utils import hex_bytes, to_padded_hex

logger = logging.getLogger(__name__)

PREFIX = "0x"


@dataclass
class EncodedImage:
    data: str
    bounds: Bounds
    runs: List[RLERun] = field(default_factory=list)


def index_stream(source: PixelSource, bounds: Bounds, palette: PaletteRegistry) -> np.ndarray:
    """
    Palette indexes of the pixels inside bounds, row-major.

    Colors are registered in first-seen order, transparent pixels included,
    but a pixel with alpha 0 always gets index 0.
    """
    crop = source.rgba[bounds.top:bounds.bottom + 1, bounds.left:bounds.right]
    flat = crop.reshape(-1, 4).astype(np.uint32)
    if flat.shape[0] == 0:
        return np.zeros(0, dtype=np.int64)

    packed = (flat[:, 0] << 16) | (flat[:, 1] << 8) | flat[:, 2]
    uniq, first, inverse = np.unique(packed, return_index=True, return_inverse=True)

    order = np.argsort(first, kind="stable")
    colors = [to_padded_hex(int(uniq[i]), 6) for i in order]
    new = sum(1 for c in colors if c not in palette)
    if len(palette) + new > palette.max_size:
        raise CapacityExceeded("palette index", len(palette) + new - 1, palette.max_size - 1)

    lookup = np.zeros(uniq.size, dtype=np.int64)
    for i, color in zip(order, colors):
        lookup[i] = palette.index_of(color)

    indexes = lookup[inverse.ravel()]
    indexes[flat[:, 3] == 0] = 0
    return indexes


def encode_image(source: PixelSource, palette: PaletteRegistry) -> EncodedImage:
    bounds = calc_bounds(source.alpha)
    header = hex_bytes(bounds.header_fields(), "bounds")
    indexes = index_stream(source, bounds, palette)
    runs, body = encode(indexes)
    logger.debug(
        f"bounds top={bounds.top} right={bounds.right} bottom={bounds.bottom} "
        f"left={bounds.left}, {indexes.size} px -> {len(runs)} runs"
    )
    return EncodedImage(data=f"{PREFIX}{header}{body}", bounds=bounds, runs=runs)
