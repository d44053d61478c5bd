import unittest
from unittest import mock

import numpy as np

from filters import FILTER_LIST, ColorOpFilter, LutFilter
from filters.edge_filter import sobel_edge
from filters.looks import LOOKS
from filters.lut_engine import build_lut, sample_lut
from filters.pixelate_filter import pixel_grid_size
from filters.pipeline import FilterPipeline


def random_frame(h, w, channels=4, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(h, w, channels), dtype=np.uint8)


def run_starts(lines):
    """Indices where a sequence of rows (or columns) changes value."""
    return [0] + [i for i in range(1, len(lines)) if lines[i] != lines[i - 1]]


class TestMirrorAndDispatch(unittest.TestCase):

    def setUp(self):
        self.pipeline = FilterPipeline()
        self.pipeline.resize(8, 6)

    def test_normal_is_pure_mirror(self):
        source = random_frame(6, 8)
        target = np.zeros_like(source)
        self.pipeline.apply(target, source, "normal")
        np.testing.assert_array_equal(target, source[:, ::-1])

    def test_zero_size_is_a_no_op(self):
        pipeline = FilterPipeline()
        source = random_frame(6, 8)
        target = np.full_like(source, 9)
        pipeline.apply(target, source, "normal")
        np.testing.assert_array_equal(target, 9)

    def test_unknown_key_mirrors_and_warns_once(self):
        source = random_frame(6, 8)
        target = np.zeros_like(source)
        with self.assertLogs("filters.pipeline", level="WARNING") as cm:
            self.pipeline.apply(target, source, "no_such_filter")
            self.pipeline.apply(target, source, "no_such_filter")
        self.assertEqual(len(cm.output), 1)
        np.testing.assert_array_equal(target, source[:, ::-1])

    def test_source_is_resized_to_output(self):
        source = np.full((12, 16, 4), 77, dtype=np.uint8)
        target = np.zeros((6, 8, 4), dtype=np.uint8)
        self.pipeline.apply(target, source, "normal")
        np.testing.assert_array_equal(target, 77)

    def test_color_op_keeps_alpha(self):
        source = random_frame(6, 8)
        target = np.zeros_like(source)
        self.pipeline.apply(target, source, "film_noir")
        np.testing.assert_array_equal(target[..., 3], source[:, ::-1, 3])
        # Greyscale first, so every pixel stays neutral
        self.assertTrue(np.all(np.abs(target[..., 0].astype(int) - target[..., 2]) <= 1))

    def test_every_builtin_filter_renders(self):
        source = random_frame(6, 8)
        for f in FILTER_LIST:
            with self.subTest(filter=f.key):
                target = np.zeros_like(source)
                self.pipeline.apply(target, source, f.key)
                self.assertEqual(target.dtype, np.uint8)

    def test_pixelate_and_edge_keys_work_without_descriptors(self):
        source = random_frame(150, 200, seed=9)
        full = FilterPipeline()
        full.resize(200, 150)
        bare = FilterPipeline([ColorOpFilter("normal", "Normal")])
        bare.resize(200, 150)

        for key in ("pixelate", "edge"):
            with self.subTest(key=key):
                expected = np.zeros_like(source)
                full.apply(expected, source, key)
                target = np.zeros_like(source)
                with mock.patch("filters.pipeline.logger") as log:
                    bare.apply(target, source, key)
                log.warning.assert_not_called()
                np.testing.assert_array_equal(target, expected)
                self.assertFalse(np.array_equal(target, source[:, ::-1]))


class TestPixelate(unittest.TestCase):

    def test_buffer_size(self):
        pipeline = FilterPipeline()
        pipeline.resize(1920, 1080)
        self.assertEqual(pipeline.pixel_buffer.shape[:2], (45, 80))
        pipeline.resize(320, 240)
        self.assertEqual(pipeline.pixel_buffer.shape[:2], (32, 32))

    def test_one_block_per_scratch_cell(self):
        for w, h in ((768, 768), (1000, 700)):
            with self.subTest(size=(w, h)):
                pipeline = FilterPipeline()
                pipeline.resize(w, h)
                source = random_frame(h, w, seed=5)
                target = np.zeros_like(source)
                pipeline.apply(target, source, "pixelate")
                small_w, small_h = pixel_grid_size(w, h)

                rows = [target[y].tobytes() for y in range(h)]
                cols = [target[:, x].tobytes() for x in range(w)]
                row_starts = run_starts(rows)
                col_starts = run_starts(cols)

                # Each cell is one contiguous run of identical rows / columns
                self.assertEqual(len(set(rows)), small_h)
                self.assertEqual(len(row_starts), small_h)
                self.assertEqual(len(set(cols)), small_w)
                self.assertEqual(len(col_starts), small_w)

                # ...so every block is uniform and holds its scratch cell's value
                np.testing.assert_array_equal(
                    target[np.ix_(row_starts, col_starts)], pipeline.pixel_buffer
                )

    def test_three_channel_target(self):
        pipeline = FilterPipeline()
        pipeline.resize(64, 64)
        source = random_frame(64, 64, channels=3)
        target = np.zeros_like(source)
        pipeline.apply(target, source, "pixelate")
        self.assertEqual(pipeline.pixel_buffer.shape, (32, 32, 3))


class TestEdgeThrottle(unittest.TestCase):

    def test_recompute_schedule(self):
        pipeline = FilterPipeline(edge_skip=1)
        pipeline.resize(8, 8)
        source = random_frame(8, 8)
        target = np.zeros_like(source)

        calls = []
        with mock.patch("filters.pipeline.sobel_edge", wraps=sobel_edge) as spy:
            for _ in range(4):
                pipeline.apply(target, source, "edge")
                calls.append(spy.call_count)
        self.assertEqual(calls, [1, 2, 2, 3])

    def test_reused_frame_is_the_cached_one(self):
        pipeline = FilterPipeline(edge_skip=1)
        pipeline.resize(8, 8)
        first = random_frame(8, 8, seed=1)
        target = np.zeros_like(first)
        pipeline.apply(target, first, "edge")
        pipeline.apply(target, first, "edge")
        expected = target.copy()

        pipeline.apply(target, random_frame(8, 8, seed=2), "edge")
        np.testing.assert_array_equal(target, expected)

    def test_resize_clears_cache(self):
        pipeline = FilterPipeline()
        pipeline.resize(8, 8)
        source = random_frame(8, 8)
        pipeline.apply(np.zeros_like(source), source, "edge")
        self.assertIsNotNone(pipeline.edge_cache.last_frame)
        pipeline.resize(16, 8)
        self.assertIsNone(pipeline.edge_cache.last_frame)


class TestLutGrade(unittest.TestCase):

    def test_lut_built_once_per_key(self):
        pipeline = FilterPipeline()
        pipeline.resize(8, 6)
        source = random_frame(6, 8)
        target = np.zeros_like(source)
        with mock.patch("filters.pipeline.build_lut", wraps=build_lut) as spy:
            for _ in range(3):
                pipeline.apply(target, source, "lut_teal_orange")
        self.assertEqual(spy.call_count, 1)
        self.assertIn("lut_teal_orange", pipeline.lut_cache)

    def test_alpha_passthrough(self):
        pipeline = FilterPipeline()
        pipeline.resize(8, 6)
        source = random_frame(6, 8, seed=4)
        target = np.zeros_like(source)
        pipeline.apply(target, source, "lut_warm_film")
        np.testing.assert_array_equal(target[..., 3], source[:, ::-1, 3])

    def test_strength_blends_original_and_grade(self):
        source = random_frame(6, 8, seed=6)
        mirrored = source[:, ::-1, :3].astype(np.float32) / np.float32(255.0)
        for strength in (0.0, 0.5, 1.0):
            with self.subTest(strength=strength):
                grade = LutFilter("grade", "Grade", look=LOOKS["teal_orange"], strength=strength)
                pipeline = FilterPipeline([grade])
                pipeline.resize(8, 6)
                target = np.zeros_like(source)
                pipeline.apply(target, source, "grade")

                graded = sample_lut(pipeline.lut_cache["grade"], mirrored)
                mixed = np.clip(mirrored + (graded - mirrored) * strength, 0.0, 1.0)
                expected = np.rint(mixed * 255.0).astype(int)
                diff = np.abs(target[..., :3].astype(int) - expected)
                self.assertLessEqual(int(diff.max()), 1)
                np.testing.assert_array_equal(target[..., 3], source[:, ::-1, 3])
                if strength == 0.0:
                    np.testing.assert_array_equal(target, source[:, ::-1])

    def test_full_strength_differs_from_half(self):
        source = random_frame(6, 8, seed=8)
        outputs = []
        for strength in (0.5, 1.0):
            pipeline = FilterPipeline([LutFilter("g", "G", look=LOOKS["mono_silver"], strength=strength)])
            pipeline.resize(8, 6)
            target = np.zeros_like(source)
            pipeline.apply(target, source, "g")
            outputs.append(target)
        self.assertFalse(np.array_equal(outputs[0], outputs[1]))


if __name__ == "__main__":
    unittest.main()
