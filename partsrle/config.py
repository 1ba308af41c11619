from __future__ import annotations
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "PARTSRLE_"

DEFAULT_FOLDERS = ["1-bodies", "2-accessories", "3-heads", "4-glasses"]
DEFAULT_BGCOLORS = ["d5d7e1", "e1d7d5"]


class EncoderSettings(BaseModel):
    images_dir: Path = Path("images/v0")
    output: Path = Path("src/image-data.json")
    folders: List[str] = Field(default_factory=lambda: list(DEFAULT_FOLDERS))
    bgcolors: List[str] = Field(default_factory=lambda: list(DEFAULT_BGCOLORS))
    seed_palette: Optional[Path] = None
    log_dir: Optional[Path] = None
    log_level: str = "INFO"
    workers: int = Field(default=1, ge=1)
    max_palette_size: int = Field(default=256, ge=1, le=256)
    skip_invalid: bool = False

    @field_validator("bgcolors")
    @classmethod
    def _check_colors(cls, v: List[str]) -> List[str]:
        out = []
        for c in v:
            c = c.strip().lower().lstrip("#")
            if len(c) != 6 or any(ch not in "0123456789abcdef" for ch in c):
                raise ValueError(f"Invalid hex color: {c!r}")
            out.append(c)
        return out


def _split(value: str) -> List[str]:
    return [p.strip() for p in value.split(",") if p.strip()]


def load_settings(env_file: Optional[Path] = None, **overrides) -> EncoderSettings:
    """
    Carga la configuración desde .env / variables PARTSRLE_*.
    Los overrides (p.ej. flags del CLI) que no sean None ganan siempre.
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()

    values = {}
    for name in EncoderSettings.model_fields:
        raw = os.environ.get(ENV_PREFIX + name.upper())
        if raw is None:
            continue
        if name in ("folders", "bgcolors"):
            values[name] = _split(raw)
        elif name == "skip_invalid":
            values[name] = raw.strip().lower() in ("1", "true", "yes", "on")
        else:
            values[name] = raw

    values.update({k: v for k, v in overrides.items() if v is not None})
    return EncoderSettings.model_validate(values)
