"""Tests for the display smoother."""

import unittest

from tourguide.filters import DisplaySmoother


class TestDisplaySmoother(unittest.TestCase):

    def test_single_tick(self):
        d = DisplaySmoother(alpha=0.18)
        d.set_target(100.0)
        self.assertAlmostEqual(d.tick(), 18.0)

    def test_tick_across_north(self):
        d = DisplaySmoother(initial_deg=350.0)
        d.set_target(10.0)
        self.assertAlmostEqual(d.tick(), 353.6)

    def test_converges(self):
        d = DisplaySmoother()
        d.set_target(270.0)
        for _ in range(200):
            d.tick()
        self.assertAlmostEqual(d.angle, 270.0, places=6)

    def test_advance_runs_whole_ticks(self):
        d = DisplaySmoother(tick_s=0.05)
        self.assertEqual(d.advance(0.1), 2)
        self.assertEqual(d.advance(0.03), 0)
        self.assertEqual(d.advance(0.03), 1)

    def test_angle_stays_in_range(self):
        d = DisplaySmoother(initial_deg=1.0)
        d.set_target(359.0)
        for _ in range(50):
            a = d.tick()
            self.assertGreaterEqual(a, 0.0)
            self.assertLess(a, 360.0)

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            DisplaySmoother(alpha=1.5)
        with self.assertRaises(ValueError):
            DisplaySmoother(tick_s=0.0)
        with self.assertRaises(ValueError):
            DisplaySmoother().advance(-1.0)


if __name__ == "__main__":
    unittest.main()
