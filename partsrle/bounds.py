from __future__ import annotations
import numpy as np

from .models import Bounds


def calc_bounds(alpha: np.ndarray) -> Bounds:
    """
    Minimal rectangle holding every pixel with alpha != 0.

    alpha: uint8 [H,W]. Rows clamp at 0 (bottom > 0, top < bottom) while
    columns run down to -1 (right >= 0, left < right), so a fully transparent
    image gives top == bottom == 0 and an empty column span (left == right).
    Encoded output depends on this exact behaviour.
    """
    alpha = np.asarray(alpha)
    h, w = alpha.shape
    opaque = alpha != 0
    row_empty = ~opaque.any(axis=1)
    col_empty = ~opaque.any(axis=0)

    bottom = h - 1
    while bottom > 0 and row_empty[bottom]:
        bottom -= 1

    top = 0
    while top < bottom and row_empty[top]:
        top += 1

    right = w - 1
    while right >= 0 and col_empty[right]:
        right -= 1

    left = 0
    while left < right and col_empty[left]:
        left += 1

    return Bounds(top=top, bottom=bottom, left=left, right=right + 1)
