"""
3D LUT Engine
=============
Bakes a procedural look function into a cubic colour lookup table and
samples it with trilinear interpolation.

Evaluating a hand-tuned look per pixel is far too slow for 1080p video, so
the look is evaluated once on an N x N x N lattice and every frame only pays
for eight gathers and seven lerps per pixel.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from config import LUT_SIZE


Look = Callable[..., tuple]


@dataclass(frozen=True)
class LookupTable3D:
    """Immutable cube of normalized RGB outputs, indexed ``data[r, g, b]``."""

    size: int
    data: np.ndarray  # (size, size, size, 3) float32, read-only

    def flat(self) -> np.ndarray:
        """Flattened view with entry (i, j, k) at ``((i*N + j)*N + k)*3``."""
        return self.data.reshape(-1)


def build_lut(look: Look, size: int = LUT_SIZE) -> LookupTable3D:
    """
    Evaluate *look* on every lattice point (i, j, k) / (size - 1).

    Outputs are sanitised (NaN -> 0) and clamped to [0, 1] before they are
    stored, so a misbehaving look cannot poison the cache.
    """
    if size < 2:
        raise ValueError(f"LUT size must be >= 2, got {size}")

    axis = np.arange(size, dtype=np.float64) / (size - 1)
    r, g, b = np.meshgrid(axis, axis, axis, indexing="ij")

    out_r, out_g, out_b = look(r, g, b)
    data = np.stack(
        [np.broadcast_to(c, r.shape) for c in (out_r, out_g, out_b)], axis=-1
    )
    data = np.clip(np.nan_to_num(data, nan=0.0, posinf=1.0, neginf=0.0), 0.0, 1.0)
    data = data.astype(np.float32)
    data.setflags(write=False)

    return LookupTable3D(size=size, data=data)


def sample_lut(table: LookupTable3D, rgb) -> np.ndarray:
    """
    Trilinear lookup of *rgb* (a triple or any (..., 3) array in [0, 1]).

    Lerps along R, then G, then B. Indices are clamped to the lattice, so
    out-of-range queries land on the nearest face of the cube.
    """
    rgb = np.asarray(rgb, dtype=np.float32)
    n = table.size
    lattice = table.data
    scaled = rgb * np.float32(n - 1)

    lo = np.clip(np.floor(scaled), 0, n - 1).astype(np.intp)
    hi = np.minimum(lo + 1, n - 1)
    frac = np.clip(scaled - lo, 0.0, 1.0)[..., None]

    r0, g0, b0 = lo[..., 0], lo[..., 1], lo[..., 2]
    r1, g1, b1 = hi[..., 0], hi[..., 1], hi[..., 2]
    fr, fg, fb = frac[..., 0, :], frac[..., 1, :], frac[..., 2, :]

    # Along R
    c00 = _lerp(lattice[r0, g0, b0], lattice[r1, g0, b0], fr)
    c10 = _lerp(lattice[r0, g1, b0], lattice[r1, g1, b0], fr)
    c01 = _lerp(lattice[r0, g0, b1], lattice[r1, g0, b1], fr)
    c11 = _lerp(lattice[r0, g1, b1], lattice[r1, g1, b1], fr)
    # Along G
    c0 = _lerp(c00, c10, fg)
    c1 = _lerp(c01, c11, fg)
    # Along B
    return _lerp(c0, c1, fb)


def _lerp(a, b, t):
    return a + (b - a) * t
