"""
Pixelate Effect
===============
Blocky 8-bit look: nearest-neighbour downsample into a small scratch buffer,
then nearest-neighbour upsample back to full size.
"""

import math
from dataclasses import dataclass

import cv2
import numpy as np

from config import PIXEL_DIVISOR, PIXEL_MIN_CELLS
from filters.base_filter import BaseFilter, FilterKind


@dataclass(frozen=True)
class PixelateFilter(BaseFilter):
    """Mirrored low-resolution pixel-art look"""

    kind = FilterKind.PIXELATE


def pixel_grid_size(width: int, height: int):
    """
    Scratch buffer size (w, h) for a frame of *width* x *height*.
    Each axis is max(PIXEL_MIN_CELLS, round(side / PIXEL_DIVISOR)), rounding
    halves up.
    """
    def cells(side):
        return max(PIXEL_MIN_CELLS, int(math.floor(side / PIXEL_DIVISOR + 0.5)))

    return cells(width), cells(height)


def pixelate_into(target: np.ndarray, mirrored: np.ndarray, scratch: np.ndarray) -> None:
    """
    Downsample *mirrored* into *scratch*, then upsample *scratch* into
    *target*. Both steps use nearest-neighbour sampling, no smoothing.
    """
    h, w = target.shape[:2]
    small_h, small_w = scratch.shape[:2]

    scratch[...] = cv2.resize(mirrored, (small_w, small_h), interpolation=cv2.INTER_NEAREST)
    np.copyto(target, cv2.resize(scratch, (w, h), interpolation=cv2.INTER_NEAREST))
