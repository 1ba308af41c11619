from __future__ import annotations
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .image import encode_image
from .models import EncodedDocument, ImageEntry
from .palette import PaletteRegistry
from .sources import PixelSource
from .storage import write_json

logger = logging.getLogger(__name__)

ROOT = "root"


class CollectionEncoder:
    """
    Encodes many images against one shared palette and keeps them
    grouped by category (the part folder they came from).
    """
    def __init__(self, colors: Optional[Iterable[str]] = None, palette: Optional[PaletteRegistry] = None):
        self.palette = palette if palette is not None else PaletteRegistry(colors)
        self._images: Dict[str, str] = {}
        self._folders: Dict[str, List[str]] = {}
        self._lock = threading.Lock()

    def encode_image(self, name: str, source: PixelSource, category: Optional[str] = None) -> str:
        # un solo escritor: la asignación de índices de paleta no puede intercalarse
        with self._lock:
            encoded = encode_image(source, self.palette)

            if name in self._images:
                logger.debug(f"Re-encoding {name}, previous data replaced")
                for folder, names in self._folders.items():
                    if folder != category and name in names:
                        names.remove(name)
            self._images[name] = encoded.data

            if category:
                names = self._folders.setdefault(category, [])
                if name not in names:
                    names.append(name)

        return encoded.data

    @property
    def images(self) -> List[Dict[str, str]]:
        return self.format(flatten=True).get(ROOT, [])

    @property
    def data(self) -> Dict[str, Any]:
        return {"palette": self.palette.colors, "images": self.format()}

    def format(self, flatten: bool = False) -> Dict[str, List[Dict[str, str]]]:
        with self._lock:
            images = dict(self._images)
            folders = [(f, list(names)) for f, names in self._folders.items() if names]

        data: Dict[str, List[Dict[str, str]]] = {}
        if not flatten and folders:
            for folder, filenames in folders:
                data[folder] = [{"filename": fn, "data": images.pop(fn)} for fn in filenames]

        if images:
            data[ROOT] = [{"filename": fn, "data": d} for fn, d in images.items()]
        return data

    def document(self, bgcolors: Optional[List[str]] = None, flatten: bool = False) -> EncodedDocument:
        images = {
            k: [ImageEntry(**e) for e in entries]
            for k, entries in self.format(flatten=flatten).items()
        }
        return EncodedDocument(bgcolors=bgcolors or [], palette=self.palette.colors, images=images)

    def write_to_file(self, output_file: str | Path = "encoded-images.json",
                      bgcolors: Optional[List[str]] = None, flatten: bool = False) -> Path:
        doc = self.document(bgcolors=bgcolors, flatten=flatten)
        return write_json(output_file, doc.model_dump())

    def __len__(self) -> int:
        return len(self._images)
