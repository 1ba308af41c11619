from .bounds import calc_bounds
from .collection import CollectionEncoder
from .errors import CapacityExceeded, DecodeError, PartsRLEError
from .image import encode_image
from .models import Bounds
from .palette import PaletteRegistry
from .rle import RLERun, encode, expand, parse_runs
from .sources import PixelSource, read_png_image

__all__ = [
    "Bounds", "CapacityExceeded", "CollectionEncoder", "DecodeError", "PaletteRegistry",
    "PartsRLEError", "PixelSource", "RLERun", "calc_bounds", "encode", "encode_image",
    "expand", "parse_runs", "read_png_image",
]
