import numpy as np
from typing import Iterable, Tuple

"""HELPER FUNCTIONS FOR COMPASS ANGLES (DEGREES)"""

def normalize_angle(angle_deg: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    wrapped = float(angle_deg) % 360.0
    # tiny negative inputs round up to exactly 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return wrapped

def normalize_longitude(lon_deg: float) -> float:
    """Wrap a longitude in degrees into (-180, 180]."""
    wrapped = ((float(lon_deg) + 180.0) % 360.0) - 180.0
    if wrapped <= -180.0:
        wrapped += 360.0
    return wrapped

def shortest_arc(target_deg: float, reference_deg: float) -> float:
    """
    Signed shortest-arc difference from ``reference_deg`` to ``target_deg``.
    Result lies in [-180, 180); positive means clockwise.

    Example: shortest_arc(10, 350) == 20, not -340.
    """
    return ((target_deg - reference_deg + 540.0) % 360.0) - 180.0

def angular_distance(a_deg: float, b_deg: float) -> float:
    """Unsigned shortest-arc distance between two headings, in [0, 180]."""
    return abs(shortest_arc(a_deg, b_deg))

def circular_mean(angles_deg: Iterable[float]) -> float:
    """
    Mean direction of a set of headings using sine/cosine components.
    Returns 0.0 for an empty set or when the components cancel out.
    """
    angles = np.radians(np.asarray(list(angles_deg), dtype=float))
    if angles.size == 0:
        return 0.0
    s = np.mean(np.sin(angles))
    c = np.mean(np.cos(angles))
    if np.hypot(s, c) < 1e-12:
        return 0.0
    return normalize_angle(np.degrees(np.arctan2(s, c)))

""" ACCELEROMETER TILT """

def pitch_roll_from_accel(ax: float, ay: float, az: float) -> Tuple[float, float]:
    """
    Pitch and roll (degrees) of the device from a gravity-dominated accelerometer sample.
    An all-zero vector yields (0, 0).
    """
    pitch = np.arctan2(-ax, np.sqrt(ay**2 + az**2))
    roll = np.arctan2(ay, az)
    return float(np.degrees(pitch)), float(np.degrees(roll))

def normalized_z(ax: float, ay: float, az: float) -> float:
    """Z component of the unit gravity vector; 0.0 for an all-zero sample."""
    norm = np.linalg.norm([ax, ay, az])
    if norm == 0.0:
        return 0.0
    return float(az / norm)
