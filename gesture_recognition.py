"""
Gesture Recognition Module
===========================
Turns raw two-hand landmarks into the clap trigger signal:
palm centres -> per-hand smoothing -> normalized distance -> ClapDetector
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from clap_detector import ClapDetector
from config import PALM_LANDMARKS, PALM_SMOOTHING_ALPHA


@dataclass
class Hand:
    """One tracked hand."""

    label: str               # "Left" or "Right"
    landmarks: np.ndarray    # (21, 2|3) normalized x, y[, z]


def palm_center(landmarks):
    """
    Palm anchor: mean of the wrist and MCP joints.
    Returns: (x, y) in normalized coordinates
    """
    pts = np.asarray(landmarks, dtype=np.float64)[list(PALM_LANDMARKS), :2]
    x, y = pts.mean(axis=0)
    return float(x), float(y)


def split_hands(hands):
    """
    Pick the left and right hand landmarks out of a detection result.
    Returns: (left, right), either of which may be None
    """
    left = right = None
    for hand in hands or ():
        label = (hand.label or "").lower()
        if label == "left":
            left = hand.landmarks
        elif label == "right":
            right = hand.landmarks
    return left, right


def normalized_hand_distance(a, b, width, height):
    """
    Pixel distance between two normalized points, divided by the smaller
    frame dimension. Zero-sized frames are treated as 1 x 1.
    """
    width = width or 1
    height = height or 1
    dx = (a[0] - b[0]) * width
    dy = (a[1] - b[1]) * height
    return math.sqrt(dx * dx + dy * dy) / min(width, height)


class PointSmoother:
    """
    Exponential moving average for a noisy 2D point.

    Usage:
        smoother = PointSmoother(alpha=0.4)
        x, y = smoother.push(raw_x, raw_y)
    """

    def __init__(self, alpha: float = PALM_SMOOTHING_ALPHA):
        if not 0.0 < alpha <= 1.0:
            raise ValueError(f"alpha must be in (0, 1], got {alpha}")
        self.alpha = alpha
        self._point: Optional[tuple] = None

    def push(self, x: float, y: float) -> tuple:
        """Blend (x, y) into the state and return the smoothed point."""
        if self._point is None:
            self._point = (x, y)
        else:
            px, py = self._point
            a = self.alpha
            self._point = (px * (1 - a) + x * a, py * (1 - a) + y * a)
        return self._point

    @property
    def current(self) -> Optional[tuple]:
        return self._point

    def reset(self):
        """Forget the state (tracking lost)."""
        self._point = None


class ClapTracker:
    """Feeds two-hand detections into a ClapDetector."""

    def __init__(self, detector: Optional[ClapDetector] = None, alpha: float = PALM_SMOOTHING_ALPHA):
        self.detector = detector or ClapDetector()
        self.left = PointSmoother(alpha)
        self.right = PointSmoother(alpha)
        self.last_distance: Optional[float] = None

    def process(self, hands, frame_w: int, frame_h: int, now: float) -> bool:
        """
        Handle one landmark result.

        Args:
            hands: Iterable of Hand from the tracker (may be empty)
            frame_w, frame_h: Source frame size in pixels
            now: Monotonic timestamp in milliseconds

        Returns:
            True when a clap fired (advance to the next filter)
        """
        left, right = split_hands(hands)
        if left is None or right is None:
            self.left.reset()
            self.right.reset()
            self.last_distance = None
            return self.detector.update(0.0, False, now)

        ls = self.left.push(*palm_center(left))
        rs = self.right.push(*palm_center(right))
        self.last_distance = normalized_hand_distance(ls, rs, frame_w, frame_h)
        return self.detector.update(self.last_distance, True, now)
