"""
UI Rendering Module
===================
All display-side drawing: cover-fit, hand skeleton, filter list and HUD.
Everything here draws on BGR frames for cv2.imshow.
"""

import time

import cv2
import numpy as np

from config import HAND_CONNECTIONS, HUD_TIMEOUT_S


def compute_cover_rect(src_w, src_h, dst_w, dst_h):
    """
    Scale (src_w, src_h) to cover (dst_w, dst_h), centred.
    Returns: (x, y, w, h); x/y are negative when the source overflows
    """
    if not src_w or not src_h:
        return 0, 0, 0, 0
    scale = max(dst_w / src_w, dst_h / src_h)
    w = int(round(src_w * scale))
    h = int(round(src_h * scale))
    x = int(round((dst_w - w) / 2))
    y = int(round((dst_h - h) / 2))
    return x, y, w, h


def compose_display(frame, dst_w, dst_h, rect, smooth=True):
    """
    Draw *frame* into a new (dst_h, dst_w) canvas at *rect*, cropping any
    overflow. smooth=False keeps hard pixel edges (pixelate filter).
    """
    x, y, w, h = rect
    canvas = np.zeros((dst_h, dst_w, frame.shape[2]), dtype=frame.dtype)
    if not w or not h:
        return canvas

    interpolation = cv2.INTER_LINEAR if smooth else cv2.INTER_NEAREST
    scaled = cv2.resize(frame, (w, h), interpolation=interpolation)

    # Intersection of the scaled frame with the canvas
    cx0, cy0 = max(x, 0), max(y, 0)
    cx1, cy1 = min(x + w, dst_w), min(y + h, dst_h)
    if cx1 <= cx0 or cy1 <= cy0:
        return canvas
    canvas[cy0:cy1, cx0:cx1] = scaled[cy0 - y:cy1 - y, cx0 - x:cx1 - x]
    return canvas


def draw_hand_landmarks(frame, hands, rect):
    """Draw skeleton lines and joints for every hand, mapped through *rect*."""
    x0, y0, rw, rh = rect
    if not hands or not rw or not rh:
        return frame

    lw = max(2, int(round(min(rw, rh) / 350)))
    radius = max(2, int(round(lw * 1.25)))
    color = (230, 230, 230)

    for hand in hands:
        lm = hand.landmarks
        pts = [(int(x0 + p[0] * rw), int(y0 + p[1] * rh)) for p in lm]

        for a, b in HAND_CONNECTIONS:
            if a < len(pts) and b < len(pts):
                cv2.line(frame, pts[a], pts[b], color, lw, cv2.LINE_AA)
        for pt in pts:
            cv2.circle(frame, pt, radius, color, -1, cv2.LINE_AA)

    return frame


def draw_filter_list(frame, filters, active_index):
    """Left-edge list of filter names with the active one highlighted."""
    h, w = frame.shape[:2]
    row_h = 24
    panel_w = 260
    top = max(10, (h - row_h * len(filters)) // 2)

    overlay = frame.copy()
    cv2.rectangle(overlay, (0, top - 10), (panel_w, top + row_h * len(filters) + 4), (0, 0, 0), -1)
    cv2.addWeighted(overlay, 0.35, frame, 0.65, 0, frame)

    for i, f in enumerate(filters):
        y = top + row_h * i + 16
        if i == active_index:
            cv2.rectangle(frame, (4, y - 16), (panel_w - 4, y + 6), (255, 255, 255), 1)
            color = (255, 255, 255)
        else:
            color = (170, 170, 170)
        cv2.putText(frame, f.name, (12, y), cv2.FONT_HERSHEY_SIMPLEX, 0.5, color, 1, cv2.LINE_AA)

    return frame


def draw_ui(frame, label, fps, hud_visible, hands_detected):
    """
    Draw the HUD overlay
    Shows: filter label (while visible), hand count, FPS, controls hint
    """
    h, w = frame.shape[:2]

    if hud_visible and label:
        overlay = frame.copy()
        cv2.rectangle(overlay, (0, h - 90), (w, h - 40), (0, 0, 0), -1)
        cv2.addWeighted(overlay, 0.4, frame, 0.6, 0, frame)
        (tw, _), _ = cv2.getTextSize(label, cv2.FONT_HERSHEY_DUPLEX, 0.8, 2)
        cv2.putText(frame, label, ((w - tw) // 2, h - 56),
                    cv2.FONT_HERSHEY_DUPLEX, 0.8, (255, 255, 255), 2, cv2.LINE_AA)

    hand_color = (100, 255, 100) if hands_detected == 2 else (80, 80, 80)
    cv2.putText(frame, f"[HANDS] {hands_detected}/2", (w - 150, 60),
                cv2.FONT_HERSHEY_SIMPLEX, 0.5, hand_color, 2)

    cv2.putText(frame, f"FPS: {fps:.1f}", (w - 120, 30),
                cv2.FONT_HERSHEY_SIMPLEX, 0.6, (100, 255, 255), 2)

    cv2.putText(frame, "Controls: [Space/N] Next | [B] Prev | [1-9] Pick | [Q] Quit",
                (20, h - 15), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (150, 150, 150), 1)

    return frame


class HudLabel:
    """Label text that hides itself a fixed time after the last show()."""

    def __init__(self, timeout_s=HUD_TIMEOUT_S, clock=time.monotonic):
        self.timeout_s = timeout_s
        self._clock = clock
        self.text = ""
        self._shown_at = None

    def show(self, text):
        self.text = text
        self._shown_at = self._clock()

    @property
    def visible(self):
        if self._shown_at is None:
            return False
        return self._clock() - self._shown_at < self.timeout_s
