"""
Hand Tracker
============
MediaPipe HandLandmarker wrapper (Tasks API, mediapipe >= 0.10).

Feed it the already-mirrored RGB frame so that landmarks line up with the
mirrored output, like a selfie camera.
"""

from __future__ import annotations

import logging
import os
import time

import mediapipe as mp
import numpy as np

from config import (
    HAND_MODEL_PATH,
    MAX_NUM_HANDS,
    MIN_DETECTION_CONFIDENCE,
    MIN_PRESENCE_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
)
from gesture_recognition import Hand

logger = logging.getLogger(__name__)

BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
RunningMode = mp.tasks.vision.RunningMode


class HandTracker:
    """Thin wrapper around MediaPipe HandLandmarker for up to two hands."""

    def __init__(self, model_path: str = HAND_MODEL_PATH):
        if not os.path.exists(model_path):
            raise FileNotFoundError(
                f"MediaPipe hand model not found at {model_path} "
                "(set CLAPCAM_HAND_MODEL to point at hand_landmarker.task)"
            )

        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=model_path),
            running_mode=RunningMode.VIDEO,
            num_hands=MAX_NUM_HANDS,
            min_hand_detection_confidence=MIN_DETECTION_CONFIDENCE,
            min_hand_presence_confidence=MIN_PRESENCE_CONFIDENCE,
            min_tracking_confidence=MIN_TRACKING_CONFIDENCE,
        )
        self._landmarker = HandLandmarker.create_from_options(options)
        self._last_ts_ms = 0
        logger.info("[HANDS] landmarker ready (%s)", os.path.basename(model_path))

    def detect(self, rgb_frame: np.ndarray) -> list:
        """
        Run detection on an RGB uint8 frame.
        Returns: list of Hand (possibly empty)
        """
        rgb = np.ascontiguousarray(rgb_frame[..., :3])
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)

        # VIDEO mode requires strictly increasing timestamps
        ts_ms = max(int(time.monotonic() * 1000), self._last_ts_ms + 1)
        self._last_ts_ms = ts_ms
        result = self._landmarker.detect_for_video(image, ts_ms)

        hands = []
        for i, landmarks in enumerate(result.hand_landmarks or []):
            label = ""
            if i < len(result.handedness) and result.handedness[i]:
                label = result.handedness[i][0].category_name
            points = np.array([(lm.x, lm.y, lm.z) for lm in landmarks], dtype=np.float64)
            hands.append(Hand(label=label, landmarks=points))
        return hands

    def close(self):
        """Release MediaPipe resources."""
        self._landmarker.close()
