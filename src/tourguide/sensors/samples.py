# -*- coding: utf-8 -*-
"""
Filename: samples.py
Description: Plain value types exchanged between the sensor collaborators and the core.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HeadingSample:
    """Fused compass heading in degrees, [0, 360)."""
    angle_deg: float
    timestamp: Optional[float] = None


@dataclass(frozen=True)
class AccelSample:
    """Accelerometer reading in device-local axes."""
    x: float
    y: float
    z: float
    timestamp: Optional[float] = None


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class PositionFix:
    """A single fix from the location provider."""
    latitude: float
    longitude: float
    accuracy_m: float
    timestamp: Optional[float] = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)
