import unittest

import numpy as np

from gesture_recognition import Hand
from ui_renderer import (
    HudLabel,
    compose_display,
    compute_cover_rect,
    draw_filter_list,
    draw_hand_landmarks,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestCoverRect(unittest.TestCase):

    def test_same_aspect(self):
        self.assertEqual(compute_cover_rect(1920, 1080, 1280, 720), (0, 0, 1280, 720))

    def test_taller_source_overflows_vertically(self):
        self.assertEqual(compute_cover_rect(640, 480, 1280, 720), (0, -120, 1280, 960))

    def test_wider_source_overflows_horizontally(self):
        x, y, w, h = compute_cover_rect(2000, 500, 1000, 500)
        self.assertEqual((x, y, w, h), (-500, 0, 2000, 500))

    def test_zero_source(self):
        self.assertEqual(compute_cover_rect(0, 480, 1280, 720), (0, 0, 0, 0))


class TestComposeDisplay(unittest.TestCase):

    def test_fills_canvas(self):
        frame = np.full((480, 640, 3), 9, dtype=np.uint8)
        rect = compute_cover_rect(640, 480, 1280, 720)
        out = compose_display(frame, 1280, 720, rect)
        self.assertEqual(out.shape, (720, 1280, 3))
        np.testing.assert_array_equal(out, 9)

    def test_crops_centre(self):
        frame = np.zeros((4, 2, 3), dtype=np.uint8)
        frame[1:3] = 200
        out = compose_display(frame, 2, 2, (0, -1, 2, 4), smooth=False)
        np.testing.assert_array_equal(out, 200)

    def test_empty_rect(self):
        out = compose_display(np.ones((4, 4, 3), dtype=np.uint8), 8, 6, (0, 0, 0, 0))
        self.assertEqual(out.shape, (6, 8, 3))
        np.testing.assert_array_equal(out, 0)


class TestOverlays(unittest.TestCase):

    def test_hand_skeleton_is_drawn(self):
        canvas = np.zeros((100, 100, 3), dtype=np.uint8)
        landmarks = np.column_stack([np.linspace(0.2, 0.8, 21), np.full(21, 0.5), np.zeros(21)])
        draw_hand_landmarks(canvas, [Hand("Left", landmarks)], (0, 0, 100, 100))
        self.assertGreater(int(canvas.max()), 0)

    def test_no_hands_leaves_frame(self):
        canvas = np.zeros((10, 10, 3), dtype=np.uint8)
        draw_hand_landmarks(canvas, [], (0, 0, 10, 10))
        np.testing.assert_array_equal(canvas, 0)

    def test_filter_list_draws(self):
        canvas = np.zeros((600, 400, 3), dtype=np.uint8)

        class F:
            name = "Normal"

        draw_filter_list(canvas, [F(), F()], 1)
        self.assertGreater(int(canvas.max()), 0)


class TestHudLabel(unittest.TestCase):

    def test_hidden_until_shown(self):
        hud = HudLabel(timeout_s=2.8, clock=FakeClock())
        self.assertFalse(hud.visible)

    def test_times_out(self):
        clock = FakeClock()
        hud = HudLabel(timeout_s=2.8, clock=clock)
        hud.show("Normal")
        self.assertTrue(hud.visible)
        clock.now = 2.7
        self.assertTrue(hud.visible)
        clock.now = 2.8
        self.assertFalse(hud.visible)

    def test_show_restarts_timer(self):
        clock = FakeClock()
        hud = HudLabel(timeout_s=2.8, clock=clock)
        hud.show("A")
        clock.now = 2.0
        hud.show("B")
        clock.now = 4.0
        self.assertTrue(hud.visible)
        self.assertEqual(hud.text, "B")


if __name__ == "__main__":
    unittest.main()
