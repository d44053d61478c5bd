"""
Configuration
=============
All tunable thresholds, sizes and timings live here so they can be adjusted
in one place without touching the filter or gesture logic.
"""

import os


# ============================================================================
# CAMERA
# ============================================================================

# Integer device index, or a URL / device path via CLAPCAM_CAMERA_SRC.
CAMERA_INDEX = 0
CAMERA_SRC = os.environ.get("CLAPCAM_CAMERA_SRC")
CAMERA_WIDTH = 1920
CAMERA_HEIGHT = 1080

# Display canvas the offscreen frame is cover-fitted into.
DISPLAY_WIDTH = 1280
DISPLAY_HEIGHT = 720
WINDOW_NAME = "ClapCam"


# ============================================================================
# HAND TRACKING
# ============================================================================

HAND_MODEL_PATH = os.environ.get(
    "CLAPCAM_HAND_MODEL",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets", "hand_landmarker.task"),
)
MAX_NUM_HANDS = 2
MIN_DETECTION_CONFIDENCE = 0.6
MIN_PRESENCE_CONFIDENCE = 0.5
MIN_TRACKING_CONFIDENCE = 0.5

# Minimum gap between two landmark requests (~30 Hz).
LANDMARK_INTERVAL_MS = 33

# Wrist + MCP joints, a stable palm anchor.
PALM_LANDMARKS = (0, 1, 5, 9, 13, 17)

HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),
    (5, 6), (6, 7), (7, 8),
    (9, 10), (10, 11), (11, 12),
    (13, 14), (14, 15), (15, 16),
    (17, 18), (18, 19), (19, 20),
    (0, 5), (5, 9), (9, 13), (13, 17),
]


# ============================================================================
# CLAP GESTURE
# ============================================================================

# Relative to min(frame width, frame height).
CLAP_THRESHOLD_REL = 0.16
CLAP_MIN_DURATION_MS = 90
CLAP_COOLDOWN_MS = 650
# Exit threshold = CLAP_THRESHOLD_REL * CLAP_HYSTERESIS_FACTOR
CLAP_HYSTERESIS_FACTOR = 1.35

# Palm-centre EMA factor (1.0 = no smoothing).
PALM_SMOOTHING_ALPHA = 0.4


# ============================================================================
# FILTER PIPELINE
# ============================================================================

# Pixelation scratch buffer: max(PIXEL_MIN_CELLS, round(side / PIXEL_DIVISOR))
PIXEL_DIVISOR = 24
PIXEL_MIN_CELLS = 32

# Edge detection recomputes every (EDGE_SKIP_FRAMES + 1) frames.
EDGE_SKIP_FRAMES = 1
EDGE_MAGNITUDE_SCALE = 0.25

LUT_SIZE = 17


# ============================================================================
# HUD
# ============================================================================

HUD_TIMEOUT_S = 2.8
LABEL_SUFFIX = " • Clap to change • Space = next"


# ============================================================================
# LOGGING
# ============================================================================

LOG_LEVEL = os.environ.get("CLAPCAM_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
