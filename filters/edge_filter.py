"""
Edge Sketch Effect
==================
Sobel gradient magnitude over Rec. 709 luma, with frame-skipping so the
expensive pass only runs every (skip_interval + 1) frames.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np

from config import EDGE_MAGNITUDE_SCALE, EDGE_SKIP_FRAMES
from filters.base_filter import BaseFilter, FilterKind
from filters.color_math import LUMA_B, LUMA_G, LUMA_R


@dataclass(frozen=True)
class EdgeFilter(BaseFilter):
    """Mirrored greyscale Sobel edge map"""

    kind = FilterKind.EDGE_DETECT


@dataclass
class EdgeCache:
    """Most recent edge frame plus the throttling counter."""

    last_frame: Optional[np.ndarray] = None
    frame_counter: int = 0
    skip_interval: int = EDGE_SKIP_FRAMES
    last_update_ts: float = 0.0

    def should_compute(self) -> bool:
        """Advance the counter and report whether this frame recomputes."""
        self.frame_counter += 1
        return self.frame_counter % (self.skip_interval + 1) == 0 or self.last_frame is None

    def clear(self) -> None:
        self.last_frame = None


def sobel_edge(frame: np.ndarray, scale: float = EDGE_MAGNITUDE_SCALE) -> np.ndarray:
    """
    Sobel edge magnitude of an RGB(A) uint8 frame.

    Args:
        frame: (H, W, 3|4) uint8, RGB channel order
        scale: Multiplier applied to the gradient magnitude

    Returns:
        New frame of the same shape. Interior pixels are grey with opaque
        alpha; the 1-pixel border is zeroed (transparent black).
    """
    h, w = frame.shape[:2]
    out = np.zeros_like(frame)
    if h < 3 or w < 3:
        return out

    rgb = frame[..., :3].astype(np.float32)
    gray = LUMA_R * rgb[..., 0] + LUMA_G * rgb[..., 1] + LUMA_B * rgb[..., 2]

    gx = cv2.Sobel(gray, cv2.CV_32F, 1, 0, ksize=3)
    gy = cv2.Sobel(gray, cv2.CV_32F, 0, 1, ksize=3)
    mag = cv2.magnitude(gx, gy) * np.float32(scale)
    value = np.rint(np.clip(mag[1:-1, 1:-1], 0, 255)).astype(np.uint8)

    interior = out[1:-1, 1:-1]
    interior[..., 0] = value
    interior[..., 1] = value
    interior[..., 2] = value
    if frame.shape[2] == 4:
        interior[..., 3] = 255

    return out
