"""
ClapCam - Webcam Filters with Clap Switching
============================================
Main application file - orchestrates all modules

1. Camera frames run through the mirrored filter pipeline
2. Hand landmarks are tracked off the render loop, one request at a time
3. Bring both palms together (clap) -> next filter
4. Keyboard: [Space/N] next, [B] previous, [1-9] pick, [Q] quit
"""

import logging
import sys
import time
from collections import deque

import cv2
import numpy as np

from config import (
    CAMERA_HEIGHT,
    CAMERA_INDEX,
    CAMERA_SRC,
    CAMERA_WIDTH,
    DISPLAY_HEIGHT,
    DISPLAY_WIDTH,
    LOG_FORMAT,
    LOG_LEVEL,
    WINDOW_NAME,
)
from filters import FILTER_LIST, FilterKind
from filters.filter_cycle import FilterCycle
from filters.pipeline import FilterPipeline
from gesture_recognition import ClapTracker
from hand_tracker import HandTracker
from landmark_worker import LandmarkWorker
from ui_renderer import (
    HudLabel,
    compose_display,
    compute_cover_rect,
    draw_filter_list,
    draw_hand_landmarks,
    draw_ui,
)

logger = logging.getLogger("clapcam")

KEY_ESC = 27


def open_camera():
    """Open the configured camera source (device index or URL)."""
    camera_src = CAMERA_INDEX
    if CAMERA_SRC is not None:
        try:
            camera_src = int(CAMERA_SRC)
        except ValueError:
            camera_src = CAMERA_SRC

    cap = cv2.VideoCapture(camera_src)
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAMERA_WIDTH)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAMERA_HEIGHT)
    return cap


def handle_key(key, cycle):
    """Apply a keyboard command. Returns False when the app should quit."""
    if key in (ord('q'), ord('Q'), KEY_ESC):
        return False
    if key in (ord(' '), ord('n'), ord('N')):
        cycle.next()
    elif key in (ord('b'), ord('B'), ord('p'), ord('P')):
        cycle.previous()
    elif ord('1') <= key <= ord('9') and key - ord('1') < len(cycle):
        cycle.select(key - ord('1'))
    return True


def print_banner():
    print("\n" + "=" * 70)
    print("  CLAPCAM - Webcam Filters with Clap Switching")
    print("=" * 70)
    print("\nAVAILABLE FILTERS:")
    for i, f in enumerate(FILTER_LIST):
        print(f"  {i + 1:2d}. {f.name}")
    print("\nGESTURE:")
    print("  • Bring both palms together briefly (clap) -> next filter")
    print("\nKEYBOARD CONTROLS:")
    print("  [Space/N] Next filter   [B] Previous filter")
    print("  [1-9] Jump to filter    [Q/Esc] Quit")
    print("=" * 70 + "\n")


def main():
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    print_banner()

    cap = open_camera()
    if not cap.isOpened():
        logger.error("[ERROR] Could not open camera source %r", CAMERA_SRC or CAMERA_INDEX)
        return 1

    try:
        tracker = HandTracker()
    except FileNotFoundError as e:
        logger.error("[ERROR] %s", e)
        cap.release()
        return 1

    worker = LandmarkWorker(tracker.detect)
    pipeline = FilterPipeline()
    cycle = FilterCycle(FILTER_LIST)
    clap = ClapTracker()
    hud = HudLabel()
    hud.show(cycle.label())

    offscreen = None
    cover_rect = (0, 0, 0, 0)
    last_hands = []
    fps_queue = deque(maxlen=30)
    last_frame_time = time.monotonic()

    cv2.namedWindow(WINDOW_NAME, cv2.WINDOW_NORMAL)
    cv2.resizeWindow(WINDOW_NAME, DISPLAY_WIDTH, DISPLAY_HEIGHT)

    try:
        while True:
            ret, frame = cap.read()
            if not ret:
                logger.error("[ERROR] Failed to capture frame")
                break

            now = time.monotonic()
            fps_queue.append(1.0 / max(now - last_frame_time, 1e-6))
            last_frame_time = now
            now_ms = now * 1000.0

            h, w = frame.shape[:2]
            source = cv2.cvtColor(frame, cv2.COLOR_BGR2RGBA)

            # Keep the offscreen buffer sized to the camera frame
            if offscreen is None or offscreen.shape[:2] != (h, w):
                offscreen = np.zeros((h, w, 4), dtype=np.uint8)
                pipeline.resize(w, h)
                cover_rect = compute_cover_rect(w, h, DISPLAY_WIDTH, DISPLAY_HEIGHT)
                logger.info("[CAM] frame size %dx%d", w, h)

            current = cycle.current
            pipeline.apply(offscreen, source, current.key)

            bgr = cv2.cvtColor(offscreen, cv2.COLOR_RGBA2BGR)
            output = compose_display(bgr, DISPLAY_WIDTH, DISPLAY_HEIGHT, cover_rect,
                                     smooth=current.kind is not FilterKind.PIXELATE)

            # Landmarks: collect a finished result, then ask for the next one
            hands = worker.poll()
            if hands is not None:
                last_hands = hands
                if clap.process(hands, w, h, now_ms):
                    cycle.next()
                    logger.info("[CLAP] -> %s", cycle.current.name)
            if not worker.busy:
                # Mirrored, like a selfie camera, so landmarks match the output
                worker.submit(cv2.flip(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB), 1), now_ms)

            if cycle.current is not current:
                hud.show(cycle.label())

            draw_hand_landmarks(output, last_hands, cover_rect)
            draw_filter_list(output, cycle.filters, cycle.index)
            avg_fps = sum(fps_queue) / len(fps_queue)
            draw_ui(output, hud.text, avg_fps, hud.visible, len(last_hands))

            cv2.imshow(WINDOW_NAME, output)

            key = cv2.waitKey(1) & 0xFF
            index_before = cycle.index
            if not handle_key(key, cycle):
                print("\n[EXIT] Shutting down...")
                break
            if cycle.index != index_before:
                hud.show(cycle.label())
    finally:
        worker.close(wait=True)
        cap.release()
        cv2.destroyAllWindows()
        tracker.close()
        print("[EXIT] Cleanup complete. Goodbye!\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
