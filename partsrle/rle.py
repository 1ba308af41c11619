from __future__ import annotations
from typing import List, NamedTuple, Sequence, Tuple

import numpy as np

from .errors import CapacityExceeded
from .utils import byte_hex

MAX_RUN = 255


class RLERun(NamedTuple):
    count: int
    value: int


def find_runs(data: Sequence[int]) -> List[RLERun]:
    """
    Split an index stream into (count, value) runs of at most MAX_RUN.
    An empty stream has no runs.
    """
    a = np.asarray(data, dtype=np.int64).ravel()
    if a.size == 0:
        return []

    # inicio de cada tramo de valores iguales
    starts = np.concatenate(([0], np.flatnonzero(a[1:] != a[:-1]) + 1))
    lengths = np.diff(np.append(starts, a.size))

    runs: List[RLERun] = []
    for start, length in zip(starts.tolist(), lengths.tolist()):
        value = int(a[start])
        if value < 0 or value > 255:
            raise CapacityExceeded("run value", value)
        while length > MAX_RUN:
            runs.append(RLERun(MAX_RUN, value))
            length -= MAX_RUN
        runs.append(RLERun(length, value))
    return runs


def runs_to_hex(runs: Sequence[Tuple[int, int]]) -> str:
    return "".join(byte_hex(c, "run count") + byte_hex(v, "run value") for c, v in runs)


def encode(data: Sequence[int]) -> Tuple[List[RLERun], str]:
    runs = find_runs(data)
    return runs, runs_to_hex(runs)


def parse_runs(encoded: str) -> List[RLERun]:
    """Inverse of runs_to_hex (header already stripped)."""
    if len(encoded) % 4:
        raise ValueError(f"RLE data must be whole (count, value) pairs, got {len(encoded)} hex digits")
    try:
        raw = bytes.fromhex(encoded)
    except ValueError as e:
        raise ValueError(f"Invalid RLE hex data: {e}") from e
    return [RLERun(raw[i], raw[i + 1]) for i in range(0, len(raw), 2)]


def expand(runs: Sequence[Tuple[int, int]]) -> List[int]:
    out: List[int] = []
    for count, value in runs:
        out.extend([value] * count)
    return out
