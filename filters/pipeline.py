"""
Filter Pipeline
===============
Turns each captured frame into the mirrored, stylized frame for display.

The pipeline owns every piece of state that survives between frames: the
pixelation scratch buffer, the edge-detection cache and the per-key LUT
cache. Frames are RGB(A) uint8 arrays, channels-last.
"""

from __future__ import annotations

import logging
import time

import cv2
import numpy as np

from config import EDGE_SKIP_FRAMES
from filters import FILTER_LIST
from filters.base_filter import FilterKind
from filters.edge_filter import EdgeCache, sobel_edge
from filters.lut_engine import build_lut
from filters.lut_filter import apply_lut_grade
from filters.pixelate_filter import pixel_grid_size, pixelate_into

logger = logging.getLogger(__name__)


class FilterPipeline:
    """Per-frame filter dispatcher with cached intermediate state"""

    def __init__(self, filter_list=FILTER_LIST, edge_skip: int = EDGE_SKIP_FRAMES):
        self.filters_by_key = {f.key: f for f in filter_list}
        self.w = 0
        self.h = 0

        self.pixel_buffer = np.zeros((0, 0, 4), dtype=np.uint8)
        self.edge_cache = EdgeCache(skip_interval=edge_skip)
        self.lut_cache = {}

        self._warned_keys = set()

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def resize(self, w: int, h: int) -> None:
        """Track the output size and reallocate the pixelation buffer."""
        if self.w == w and self.h == h:
            return
        self.w, self.h = w, h

        small_w, small_h = pixel_grid_size(w, h)
        channels = self.pixel_buffer.shape[2]
        self.pixel_buffer = np.zeros((small_h, small_w, channels), dtype=np.uint8)
        self.edge_cache.clear()
        logger.debug("[PIPE] resized to %dx%d (pixel grid %dx%d)", w, h, small_w, small_h)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def apply(self, target: np.ndarray, source: np.ndarray, filter_key: str) -> None:
        """
        Render *source* through the filter *filter_key* into *target*.

        Args:
            target: (h, w, C) uint8 buffer, written in place
            source: (H, W, C) uint8 frame; resized to (w, h) if needed
            filter_key: Key of a filter in this pipeline's list
        """
        w, h = self.w, self.h
        if not w or not h:
            return

        meta = self.filters_by_key.get(filter_key)
        if meta is None:
            # "pixelate" and "edge" render even when the list has no descriptor
            if filter_key == "pixelate":
                self.render_pixelate(target, source)
                return
            if filter_key == "edge":
                self.render_edge(target, source)
                return
            if filter_key not in self._warned_keys:
                self._warned_keys.add(filter_key)
                logger.warning("[PIPE] unknown filter %r, falling back to mirror", filter_key)
            self.draw_mirrored(target, source)
            return

        if meta.kind is FilterKind.DIRECT_COLOR_OP:
            self.render_color_op(target, source, meta)
        elif meta.kind is FilterKind.PIXELATE:
            self.render_pixelate(target, source)
        elif meta.kind is FilterKind.EDGE_DETECT:
            self.render_edge(target, source)
        elif meta.kind is FilterKind.LUT_GRADE:
            self.render_lut(target, source, meta)
        else:
            self.draw_mirrored(target, source)

    # ------------------------------------------------------------------
    # Renderers
    # ------------------------------------------------------------------

    def draw_mirrored(self, target: np.ndarray, source: np.ndarray) -> None:
        """Selfie mirror: target column x = source column (w - 1 - x)."""
        np.copyto(target, self._mirror(source))

    def render_color_op(self, target, source, meta) -> None:
        mirrored = self._mirror(source)
        if meta.is_identity:
            np.copyto(target, mirrored)
            return

        rgb = mirrored[..., :3].astype(np.float32) * np.float32(1.0 / 255.0)
        out = meta.transform(rgb)
        target[..., :3] = np.rint(out * 255.0).astype(np.uint8)
        if target.shape[2] == 4:
            target[..., 3] = mirrored[..., 3]

    def render_pixelate(self, target, source) -> None:
        channels = target.shape[2]
        if self.pixel_buffer.shape[2] != channels or self.pixel_buffer.size == 0:
            small_w, small_h = pixel_grid_size(self.w, self.h)
            self.pixel_buffer = np.zeros((small_h, small_w, channels), dtype=np.uint8)

        pixelate_into(target, self._mirror(source), self.pixel_buffer)

    def render_edge(self, target, source) -> None:
        self.draw_mirrored(target, source)

        ec = self.edge_cache
        if ec.last_frame is not None and ec.last_frame.shape != target.shape:
            ec.clear()

        if ec.should_compute():
            ec.last_frame = sobel_edge(target)
            ec.last_update_ts = time.monotonic()

        np.copyto(target, ec.last_frame)

    def render_lut(self, target, source, meta) -> None:
        self.draw_mirrored(target, source)
        apply_lut_grade(target, self.lut_for(meta), meta.strength)

    # ------------------------------------------------------------------
    # Caches
    # ------------------------------------------------------------------

    def lut_for(self, meta):
        """Return the LUT for *meta*, building it on first use only."""
        table = self.lut_cache.get(meta.key)
        if table is None:
            start = time.perf_counter()
            table = build_lut(meta.look, meta.size)
            self.lut_cache[meta.key] = table
            logger.info(
                "[LUT] built %s (%d^3) in %.1f ms",
                meta.key, meta.size, (time.perf_counter() - start) * 1000.0,
            )
        return table

    def _mirror(self, source: np.ndarray) -> np.ndarray:
        if source.shape[:2] != (self.h, self.w):
            source = cv2.resize(source, (self.w, self.h), interpolation=cv2.INTER_LINEAR)
        return cv2.flip(source, 1)
