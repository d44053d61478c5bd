import unittest

from clap_detector import ClapDetector, ClapPhase

NEAR = 0.05
MID = 0.20   # between the trigger threshold and the exit threshold
FAR = 0.30


class TestClapDetector(unittest.TestCase):

    def setUp(self):
        self.d = ClapDetector(threshold_rel=0.16, min_duration_ms=90,
                              cooldown_ms=650, hysteresis_factor=1.35)

    def test_defaults(self):
        d = ClapDetector()
        self.assertAlmostEqual(d.hysteresis_up, 0.16 * 1.35)
        self.assertIs(d.phase, ClapPhase.IDLE)

    def test_fires_once_after_dwell(self):
        fired = [self.d.update(NEAR, True, t) for t in (0, 50, 100, 150)]
        self.assertEqual(fired, [False, False, True, False])
        self.assertTrue(self.d.in_zone)
        self.assertEqual(self.d.cooldown_until, 750)

    def test_dwell_tracks_start_time(self):
        self.d.update(NEAR, True, 10)
        self.assertIs(self.d.phase, ClapPhase.DWELLING)
        self.assertEqual(self.d.below_since, 10)

    def test_cooldown_freezes_state(self):
        for t in (0, 50, 100):
            self.d.update(NEAR, True, t)
        self.d.update(FAR, True, 400)
        self.assertIs(self.d.phase, ClapPhase.IN_ZONE)

    def test_hysteresis_exit(self):
        for t in (0, 100):
            self.d.update(NEAR, True, t)
        # Past the cooldown: still inside the exit threshold, no re-arm
        self.assertFalse(self.d.update(MID, True, 800))
        self.assertFalse(self.d.update(NEAR, True, 850))
        self.assertFalse(self.d.update(NEAR, True, 1000))
        self.assertTrue(self.d.in_zone)

        self.d.update(FAR, True, 1050)
        self.assertIs(self.d.phase, ClapPhase.IDLE)
        self.assertFalse(self.d.update(NEAR, True, 1100))
        self.assertTrue(self.d.update(NEAR, True, 1190))

    def test_parting_early_cancels_dwell(self):
        self.d.update(NEAR, True, 0)
        self.d.update(MID, True, 50)
        self.assertIs(self.d.phase, ClapPhase.IDLE)
        self.assertIsNone(self.d.below_since)

        self.assertFalse(self.d.update(NEAR, True, 60))
        self.assertFalse(self.d.update(NEAR, True, 140))
        self.assertTrue(self.d.update(NEAR, True, 150))

    def test_missing_hand_resets(self):
        self.d.update(NEAR, True, 0)
        self.assertFalse(self.d.update(0.0, False, 50))
        self.assertIs(self.d.phase, ClapPhase.IDLE)
        self.assertFalse(self.d.update(NEAR, True, 100))
        self.assertEqual(self.d.below_since, 100)

    def test_missing_hand_leaves_zone(self):
        for t in (0, 100):
            self.d.update(NEAR, True, t)
        self.d.update(0.0, False, 200)
        self.assertFalse(self.d.in_zone)
        # Cooldown still holds
        self.assertFalse(self.d.update(NEAR, True, 300))
        self.assertFalse(self.d.update(NEAR, True, 700))

    def test_reset(self):
        for t in (0, 100):
            self.d.update(NEAR, True, t)
        self.d.reset()
        self.assertIs(self.d.phase, ClapPhase.IDLE)
        self.assertEqual(self.d.cooldown_until, 0.0)
        self.d.update(NEAR, True, 200)
        self.assertTrue(self.d.update(NEAR, True, 290))

    def test_repr(self):
        self.assertIn("IDLE", repr(self.d))


if __name__ == "__main__":
    unittest.main()
