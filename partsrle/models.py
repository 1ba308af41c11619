from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Dict, List

HexColor = str  # "rrggbb" en minúsculas, "" = transparente


class Bounds(BaseModel):
    """Trimmed rectangle: top/bottom/left inclusive, right exclusive."""
    top: int = Field(ge=0)
    bottom: int = Field(ge=0)
    left: int = Field(ge=0)
    right: int = Field(ge=0)

    @property
    def width(self) -> int:
        return max(0, self.right - self.left)

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    def header_fields(self) -> List[int]:
        # orden fijo del formato: 0, top, right, bottom, left
        return [0, self.top, self.right, self.bottom, self.left]


class ImageEntry(BaseModel):
    filename: str
    data: str


class EncodedDocument(BaseModel):
    bgcolors: List[HexColor] = Field(default_factory=list)
    palette: List[HexColor] = Field(default_factory=lambda: [""])
    images: Dict[str, List[ImageEntry]] = Field(default_factory=dict)
