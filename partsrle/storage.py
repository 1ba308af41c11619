from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from .models import EncodedDocument
from .utils import ensure_dir

logger = logging.getLogger(__name__)


def write_json(path: str | Path, obj: Dict[str, Any]) -> Path:
    """
    Escribe el JSON de una vez: primero a .tmp y luego replace,
    así nunca queda un fichero a medias.
    """
    path = Path(path)
    ensure_dir(path.parent)
    tmp = path.with_suffix(".tmp")
    try:
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(obj, f, ensure_ascii=False, indent=2)
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
    logger.info(f"Wrote {path}")
    return path


def read_document(path: str | Path) -> EncodedDocument:
    with Path(path).open("r", encoding="utf-8") as f:
        return EncodedDocument.model_validate(json.load(f))


def read_palette(path: str | Path) -> List[str]:
    """Palette of a previously written document, transparent slot included."""
    palette = read_document(path).palette
    logger.info(f"Loaded {len(palette)} palette entries from {path}")
    return palette
