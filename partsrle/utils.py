from __future__ import annotations
import re
from pathlib import Path
from typing import Iterable

from .errors import CapacityExceeded

_CATEGORY_PREFIX = re.compile(r"^\d+-")


def to_padded_hex(value: int, pad: int = 2) -> str:
    return format(value, "x").zfill(pad)


def byte_hex(value: int, what: str = "value") -> str:
    """Hex de un solo byte; falla si no cabe en 00..ff"""
    if value < 0 or value > 255:
        raise CapacityExceeded(what, value)
    return to_padded_hex(value)


def hex_bytes(values: Iterable[int], what: str = "value") -> str:
    return "".join(byte_hex(v, what) for v in values)


def category_from_folder(folder: str) -> str:
    """'1-bodies' -> 'bodies'"""
    return _CATEGORY_PREFIX.sub("", folder)


def image_name(filename: str) -> str:
    # quita la extensión .png (solo esa)
    return re.sub(r"\.png$", "", filename)


def ensure_dir(p: str | Path) -> None:
    Path(p).mkdir(parents=True, exist_ok=True)
