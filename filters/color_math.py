"""
Color Math
==========
Scalar/array helpers shared by the look library and the LUT engine.

Every function accepts plain floats or numpy arrays of matching shape and
broadcasts like numpy does, so the same look can be evaluated for a single
colour or a whole LUT lattice in one call.
"""

import numpy as np


# Rec. 709 luma coefficients
LUMA_R = 0.2126
LUMA_G = 0.7152
LUMA_B = 0.0722


def clamp(value, lo, hi):
    """Clamp *value* to the range [lo, hi]."""
    return np.minimum(np.maximum(value, lo), hi)


def clamp01(value):
    return clamp(value, 0.0, 1.0)


def lerp(a, b, t):
    """Linear interpolation from *a* to *b* by factor *t*."""
    return a + (b - a) * t


def luma(r, g, b):
    """Perceptual brightness of a normalized RGB triple."""
    return LUMA_R * r + LUMA_G * g + LUMA_B * b


def s_curve(x, contrast):
    """
    Linear contrast around mid-grey.
    contrast: 0.0 = unchanged, > 0 steeper, < 0 flatter
    """
    return clamp01((x - 0.5) * (1.0 + contrast) + 0.5)


def rgb_to_hsl(r, g, b):
    """
    Convert normalized RGB to HSL.
    Returns (h, s, l) with every component in [0, 1]. Achromatic colours
    get h = s = 0.
    """
    r = np.asarray(r, dtype=np.float64)
    g = np.asarray(g, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    mx = np.maximum(np.maximum(r, g), b)
    mn = np.minimum(np.minimum(r, g), b)
    l = (mx + mn) / 2.0
    d = mx - mn
    chromatic = d > 1e-12

    with np.errstate(divide="ignore", invalid="ignore"):
        denom = 1.0 - np.abs(2.0 * l - 1.0)
        s = np.where(chromatic & (denom > 1e-12), d / denom, 0.0)

        safe_d = np.where(chromatic, d, 1.0)
        h_r = np.mod((g - b) / safe_d, 6.0)
        h_g = (b - r) / safe_d + 2.0
        h_b = (r - g) / safe_d + 4.0

    h = np.where(mx == r, h_r, np.where(mx == g, h_g, h_b)) / 6.0
    h = np.where(chromatic, h, 0.0)

    return _unwrap(h), _unwrap(clamp01(s)), _unwrap(l)


def hsl_to_rgb(h, s, l):
    """Convert HSL (all components in [0, 1]) back to normalized RGB."""
    h = np.asarray(h, dtype=np.float64)
    s = np.asarray(s, dtype=np.float64)
    l = np.asarray(l, dtype=np.float64)

    c = (1.0 - np.abs(2.0 * l - 1.0)) * s
    hp = np.mod(h, 1.0) * 6.0
    x = c * (1.0 - np.abs(np.mod(hp, 2.0) - 1.0))
    m = l - c / 2.0
    zero = np.zeros_like(c)

    sector = np.floor(hp).astype(np.int64) % 6
    r = _pick(sector, (c, x, zero, zero, x, c))
    g = _pick(sector, (x, c, c, x, zero, zero))
    b = _pick(sector, (zero, zero, x, c, c, x))

    return _unwrap(r + m), _unwrap(g + m), _unwrap(b + m)


def _pick(sector, choices):
    out = choices[5]
    for i in range(4, -1, -1):
        out = np.where(sector == i, choices[i], out)
    return out


def _unwrap(arr):
    # 0-d arrays come back as numpy scalars so scalar callers get scalars
    return arr[()] if isinstance(arr, np.ndarray) and arr.ndim == 0 else arr
