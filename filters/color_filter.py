"""
Direct Color Operations
=======================
Per-pixel tone/saturation/hue adjustments described by a CSS-style filter
string, e.g. ``"contrast(1.15) saturate(1.2) hue-rotate(330deg)"``.

Functions are applied left to right and the result is clamped to [0, 1]
after each step. The matrices are the ones from the W3C Filter Effects
shorthand definitions, applied directly to sRGB values.
"""

import math
import re
from dataclasses import dataclass, field

import numpy as np

from filters.base_filter import BaseFilter, FilterKind


_FUNCTION_RE = re.compile(r"([a-z-]+)\(\s*([^()]*?)\s*\)")
_ANGLE_UNITS = {
    "deg": 1.0,
    "grad": 360.0 / 400.0,
    "rad": 180.0 / math.pi,
    "turn": 360.0,
}


# ============================================================================
# PRIMITIVES
# ============================================================================

def _parse_amount(raw: str) -> float:
    raw = raw.strip()
    if raw.endswith("%"):
        return float(raw[:-1]) / 100.0
    return float(raw)


def _parse_angle(raw: str) -> float:
    """Angle in degrees. A bare number is taken as degrees."""
    raw = raw.strip()
    for unit in sorted(_ANGLE_UNITS, key=len, reverse=True):
        if raw.endswith(unit):
            return float(raw[: -len(unit)]) * _ANGLE_UNITS[unit]
    return float(raw)


def _matrix_op(matrix):
    m = np.asarray(matrix, dtype=np.float32).T

    def op(rgb):
        return np.clip(rgb @ m, 0.0, 1.0)

    return op


def _brightness(amount):
    def op(rgb):
        return np.clip(rgb * np.float32(amount), 0.0, 1.0)
    return op


def _contrast(amount):
    def op(rgb):
        return np.clip((rgb - 0.5) * np.float32(amount) + 0.5, 0.0, 1.0)
    return op


def _invert(amount):
    amount = min(amount, 1.0)

    def op(rgb):
        return np.clip(rgb * (1.0 - 2.0 * amount) + amount, 0.0, 1.0)
    return op


def _saturate(s):
    return _matrix_op([
        [0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s],
    ])


def _grayscale(amount):
    a = 1.0 - min(amount, 1.0)
    return _matrix_op([
        [0.2126 + 0.7874 * a, 0.7152 - 0.7152 * a, 0.0722 - 0.0722 * a],
        [0.2126 - 0.2126 * a, 0.7152 + 0.2848 * a, 0.0722 - 0.0722 * a],
        [0.2126 - 0.2126 * a, 0.7152 - 0.7152 * a, 0.0722 + 0.9278 * a],
    ])


def _sepia(amount):
    a = 1.0 - min(amount, 1.0)
    return _matrix_op([
        [0.393 + 0.607 * a, 0.769 - 0.769 * a, 0.189 - 0.189 * a],
        [0.349 - 0.349 * a, 0.686 + 0.314 * a, 0.168 - 0.168 * a],
        [0.272 - 0.272 * a, 0.534 - 0.534 * a, 0.131 + 0.869 * a],
    ])


def _hue_rotate(degrees):
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    return _matrix_op([
        [0.213 + c * 0.787 - s * 0.213, 0.715 - c * 0.715 - s * 0.715, 0.072 - c * 0.072 + s * 0.928],
        [0.213 - c * 0.213 + s * 0.143, 0.715 + c * 0.285 + s * 0.140, 0.072 - c * 0.072 - s * 0.283],
        [0.213 - c * 0.213 - s * 0.787, 0.715 - c * 0.715 + s * 0.715, 0.072 + c * 0.928 + s * 0.072],
    ])


_OPERATIONS = {
    "brightness": (_parse_amount, _brightness),
    "contrast": (_parse_amount, _contrast),
    "saturate": (_parse_amount, _saturate),
    "grayscale": (_parse_amount, _grayscale),
    "sepia": (_parse_amount, _sepia),
    "invert": (_parse_amount, _invert),
    "hue-rotate": (_parse_angle, _hue_rotate),
}


def parse_filter_string(value: str):
    """
    Compile a CSS-style filter string into a list of ``(name, amount, op)``.
    ``"none"`` and the empty string compile to no operations.

    Raises ValueError on unknown functions, bad arguments or stray text.
    """
    value = (value or "").strip()
    if value in ("", "none"):
        return []

    ops = []
    pos = 0
    for match in _FUNCTION_RE.finditer(value):
        if value[pos:match.start()].strip():
            raise ValueError(f"Unexpected text in filter string: {value!r}")
        pos = match.end()

        name, raw = match.group(1), match.group(2)
        if name not in _OPERATIONS:
            raise ValueError(f"Unknown filter function {name!r} in {value!r}")
        parse, build = _OPERATIONS[name]
        try:
            amount = parse(raw)
        except ValueError:
            raise ValueError(f"Bad argument {raw!r} for {name}() in {value!r}") from None
        ops.append((name, amount, build(amount)))

    if value[pos:].strip():
        raise ValueError(f"Unexpected text in filter string: {value!r}")
    return ops


# ============================================================================
# DESCRIPTOR
# ============================================================================

@dataclass(frozen=True)
class ColorOpFilter(BaseFilter):
    """Mirror plus a fixed chain of per-pixel colour operations"""

    kind = FilterKind.DIRECT_COLOR_OP

    value: str = "none"
    _ops: list = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "_ops", parse_filter_string(self.value))

    @property
    def is_identity(self) -> bool:
        return not self._ops

    @property
    def operations(self):
        """Parsed ``(name, amount)`` pairs, in application order."""
        return [(name, amount) for name, amount, _ in self._ops]

    def transform(self, rgb: np.ndarray) -> np.ndarray:
        """
        Apply the operation chain.

        Args:
            rgb: (..., 3) float32 array of normalized RGB

        Returns:
            New (..., 3) float32 array in [0, 1]
        """
        out = rgb
        for _, _, op in self._ops:
            out = op(out)
        return out
