"""Tests for the spherical destination-point and distance helpers."""

import unittest

import numpy as np

from tourguide.config import EARTH_RADIUS_M
from tourguide.geo import destination_point, haversine_distance

ONE_DEGREE_M = EARTH_RADIUS_M * np.pi / 180.0


class TestDestinationPoint(unittest.TestCase):

    def test_east_along_equator(self):
        lat, lon = destination_point(0.0, 0.0, 90.0, ONE_DEGREE_M)
        self.assertAlmostEqual(lat, 0.0, places=9)
        self.assertAlmostEqual(lon, 1.0, places=9)

    def test_east_along_equator_metric(self):
        lat, lon = destination_point(0.0, 0.0, 90.0, 111320.0)
        self.assertAlmostEqual(lat, 0.0, places=6)
        self.assertAlmostEqual(lon, 1.0, places=2)

    def test_north(self):
        lat, lon = destination_point(10.0, 20.0, 0.0, ONE_DEGREE_M)
        self.assertAlmostEqual(lat, 11.0, places=9)
        self.assertAlmostEqual(lon, 20.0, places=9)

    def test_zero_distance_returns_start(self):
        lat, lon = destination_point(48.2, 16.37, 123.0, 0.0)
        self.assertAlmostEqual(lat, 48.2, places=9)
        self.assertAlmostEqual(lon, 16.37, places=9)

    def test_short_hop_matches_distance(self):
        start = (52.5200, 13.4050)
        for distance in (1.0, 8.0, 64.0):
            lat, lon = destination_point(*start, 37.0, distance)
            self.assertAlmostEqual(haversine_distance(*start, lat, lon), distance, places=4)

    def test_antimeridian_wrap(self):
        lat, lon = destination_point(0.0, 179.5, 90.0, ONE_DEGREE_M)
        self.assertAlmostEqual(lon, -179.5, places=9)
        lat, lon = destination_point(0.0, -179.5, 270.0, ONE_DEGREE_M)
        self.assertAlmostEqual(lon, 179.5, places=9)

    def test_output_ranges(self):
        rng = np.random.default_rng(7)
        for _ in range(200):
            lat, lon = destination_point(
                rng.uniform(-89.0, 89.0), rng.uniform(-180.0, 180.0),
                rng.uniform(0.0, 360.0), rng.uniform(0.0, 5_000_000.0)
            )
            self.assertTrue(-90.0 <= lat <= 90.0)
            self.assertTrue(-180.0 < lon <= 180.0)


class TestHaversine(unittest.TestCase):

    def test_same_point(self):
        self.assertEqual(haversine_distance(1.0, 2.0, 1.0, 2.0), 0.0)

    def test_one_degree_of_longitude_on_equator(self):
        self.assertAlmostEqual(haversine_distance(0.0, 0.0, 0.0, 1.0), ONE_DEGREE_M, places=6)

    def test_symmetric(self):
        a = haversine_distance(40.0, -74.0, 51.5, -0.1)
        b = haversine_distance(51.5, -0.1, 40.0, -74.0)
        self.assertAlmostEqual(a, b, places=6)


if __name__ == "__main__":
    unittest.main()
