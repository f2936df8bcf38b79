import numpy as np
from typing import Tuple

from ..config import EARTH_RADIUS_M
from ..util.angles import normalize_longitude

"""SPHERICAL-EARTH GEODESIC HELPERS"""

def destination_point(
    lat_deg: float,
    lon_deg: float,
    bearing_deg: float,
    distance_m: float,
    radius_m: float = EARTH_RADIUS_M
) -> Tuple[float, float]:
    """
    Point reached by travelling ``distance_m`` from (lat, lon) along ``bearing_deg``
    on a sphere (direct geodesic problem, forward azimuth formula).

    Returns:
        (lat_deg, lon_deg) with longitude wrapped into (-180, 180].
    """
    delta = distance_m / radius_m
    theta = np.radians(bearing_deg)
    phi1 = np.radians(lat_deg)
    lam1 = np.radians(lon_deg)

    phi2 = np.arcsin(
        np.sin(phi1) * np.cos(delta) +
        np.cos(phi1) * np.sin(delta) * np.cos(theta)
    )
    lam2 = lam1 + np.arctan2(
        np.sin(theta) * np.sin(delta) * np.cos(phi1),
        np.cos(delta) - np.sin(phi1) * np.sin(phi2)
    )
    return float(np.degrees(phi2)), normalize_longitude(np.degrees(lam2))

def haversine_distance(
    lat1_deg: float,
    lon1_deg: float,
    lat2_deg: float,
    lon2_deg: float,
    radius_m: float = EARTH_RADIUS_M
) -> float:
    """Great-circle distance between two points in metres."""
    phi1, phi2 = np.radians(lat1_deg), np.radians(lat2_deg)
    d_phi = phi2 - phi1
    d_lam = np.radians(lon2_deg - lon1_deg)
    a = np.sin(d_phi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(d_lam / 2) ** 2
    return float(radius_m * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a)))
