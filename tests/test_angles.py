"""Tests for compass angle arithmetic."""

import unittest

import numpy as np

from tourguide.util.angles import (
    normalize_angle,
    normalize_longitude,
    shortest_arc,
    angular_distance,
    circular_mean,
    pitch_roll_from_accel,
    normalized_z,
)
from tourguide.sensors import SimulatedAccelerometer


class TestNormalization(unittest.TestCase):

    def test_wraps_into_half_open_range(self):
        self.assertEqual(normalize_angle(-10.0), 350.0)
        self.assertEqual(normalize_angle(720.0), 0.0)
        self.assertEqual(normalize_angle(360.0), 0.0)
        self.assertAlmostEqual(normalize_angle(725.5), 5.5)

    def test_tiny_negative_does_not_return_360(self):
        """-1e-17 % 360 is 360.0 in floating point; it must come back as 0."""
        self.assertEqual(normalize_angle(-1e-17), 0.0)

    def test_range_over_grid(self):
        for a in np.linspace(-1000.0, 1000.0, 4001):
            n = normalize_angle(a)
            self.assertGreaterEqual(n, 0.0)
            self.assertLess(n, 360.0)

    def test_longitude_range(self):
        self.assertEqual(normalize_longitude(180.0), 180.0)
        self.assertEqual(normalize_longitude(-180.0), 180.0)
        self.assertAlmostEqual(normalize_longitude(190.0), -170.0)
        self.assertAlmostEqual(normalize_longitude(-190.0), 170.0)
        for lon in np.linspace(-720.0, 720.0, 1441):
            n = normalize_longitude(lon)
            self.assertGreater(n, -180.0)
            self.assertLessEqual(n, 180.0)


class TestShortestArc(unittest.TestCase):

    def test_crossing_north(self):
        """From 350 to 10 is +20, not -340."""
        self.assertAlmostEqual(shortest_arc(10.0, 350.0), 20.0)
        self.assertAlmostEqual(shortest_arc(350.0, 10.0), -20.0)

    def test_plain_difference(self):
        self.assertAlmostEqual(shortest_arc(100.0, 40.0), 60.0)
        self.assertAlmostEqual(shortest_arc(40.0, 100.0), -60.0)

    def test_result_range(self):
        rng = np.random.default_rng(0)
        for a, b in rng.uniform(-720, 720, size=(500, 2)):
            d = shortest_arc(a, b)
            self.assertGreaterEqual(d, -180.0)
            self.assertLess(d, 180.0)

    def test_angular_distance_is_symmetric(self):
        self.assertAlmostEqual(angular_distance(359.0, 1.0), 2.0)
        self.assertAlmostEqual(angular_distance(1.0, 359.0), 2.0)


class TestCircularMean(unittest.TestCase):

    def test_mean_across_north(self):
        """Arithmetic mean of 350 and 10 is 180; the circular mean is 0."""
        self.assertLess(angular_distance(circular_mean([350.0, 10.0]), 0.0), 1e-9)

    def test_matches_arithmetic_mean_on_bounded_arc(self):
        angles = [40.0, 50.0, 60.0, 70.0]
        self.assertAlmostEqual(circular_mean(angles), 55.0, places=9)

    def test_empty_is_zero(self):
        self.assertEqual(circular_mean([]), 0.0)

    def test_opposite_angles_cancel_to_zero(self):
        self.assertEqual(circular_mean([0.0, 180.0]), 0.0)


class TestAccelerometerAngles(unittest.TestCase):

    def test_flat_phone(self):
        pitch, roll = pitch_roll_from_accel(0.0, 0.0, 9.81)
        self.assertAlmostEqual(pitch, 0.0)
        self.assertAlmostEqual(roll, 0.0)

    def test_zero_vector_is_level(self):
        self.assertEqual(pitch_roll_from_accel(0.0, 0.0, 0.0), (0.0, 0.0))
        self.assertEqual(normalized_z(0.0, 0.0, 0.0), 0.0)

    def test_round_trip_with_simulated_gravity(self):
        g = SimulatedAccelerometer.gravity_vector(20.0, -15.0)
        pitch, roll = pitch_roll_from_accel(*g)
        self.assertAlmostEqual(pitch, 20.0, places=9)
        self.assertAlmostEqual(roll, -15.0, places=9)

    def test_normalized_z(self):
        self.assertAlmostEqual(normalized_z(0.0, 0.0, -9.81), -1.0)
        self.assertAlmostEqual(normalized_z(3.0, 0.0, 4.0), 0.8)


if __name__ == "__main__":
    unittest.main()
