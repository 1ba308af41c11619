from __future__ import annotations
import threading
from typing import Iterable, List, Optional

from .errors import CapacityExceeded

TRANSPARENT = ""


class PaletteRegistry:
    """
    Session-wide color table shared by every encoded image.

    Index 0 is always the transparent slot. Other colors get the next index
    the first time they are seen and keep it for the life of the registry.
    """
    def __init__(self, colors: Optional[Iterable[str]] = None, max_size: int = 256):
        self.max_size = max_size
        self._colors = {TRANSPARENT: 0}
        self._lock = threading.Lock()
        for color in colors or ():
            self.index_of(color)

    def index_of(self, color: str) -> int:
        idx = self._colors.get(color)
        if idx is not None:
            return idx
        with self._lock:
            idx = self._colors.get(color)
            if idx is None:
                idx = len(self._colors)
                if idx >= self.max_size:
                    raise CapacityExceeded("palette index", idx, self.max_size - 1)
                self._colors[color] = idx
            return idx

    @property
    def colors(self) -> List[str]:
        with self._lock:
            return list(self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def __contains__(self, color: str) -> bool:
        return color in self._colors

    def __repr__(self) -> str:
        return f"PaletteRegistry({len(self)} colors)"
