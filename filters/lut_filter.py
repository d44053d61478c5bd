"""
LUT Color Grade Effect
======================
Film-style grades baked from a procedural look into a 3D LUT, blended over
the original frame by a strength coefficient.
"""

from dataclasses import dataclass
from typing import Callable

import numpy as np

from config import LUT_SIZE
from filters.base_filter import BaseFilter, FilterKind
from filters.lut_engine import LookupTable3D, sample_lut


@dataclass(frozen=True)
class LutFilter(BaseFilter):
    """Mirror plus a LUT grade"""

    kind = FilterKind.LUT_GRADE

    look: Callable = None
    strength: float = 1.0  # 0.0 = original, 1.0 = full grade
    size: int = LUT_SIZE

    def __post_init__(self):
        super().__post_init__()
        if self.look is None:
            raise ValueError(f"LutFilter {self.key!r} needs a look function")
        if not 0.0 <= self.strength <= 1.0:
            raise ValueError(f"LutFilter {self.key!r}: strength must be in [0, 1]")
        if self.size < 2:
            raise ValueError(f"LutFilter {self.key!r}: size must be >= 2")


def apply_lut_grade(frame: np.ndarray, table: LookupTable3D, strength: float) -> None:
    """
    Grade the RGB channels of *frame* in place. Alpha is left untouched.

    output = clamp01(mix(original, lut(original), strength))
    """
    rgb = frame[..., :3].astype(np.float32) * np.float32(1.0 / 255.0)
    graded = sample_lut(table, rgb)
    mixed = np.clip(rgb + (graded - rgb) * np.float32(strength), 0.0, 1.0)
    frame[..., :3] = np.rint(mixed * 255.0).astype(np.uint8)
