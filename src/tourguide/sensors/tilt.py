# -*- coding: utf-8 -*-
"""
Filename: tilt.py
Description: Level-vs-tilted classification of raw accelerometer samples.

Two tests are used depending on how the phone is expected to be held:

    LEVEL   : calibration, phone lies flat. Tilted when |pitch| or |roll| exceeds
              the limit (30 deg by default).
    UPRIGHT : steady state, phone held up facing outward. Tilted when the
              normalized z component |z|/|g| exceeds the ratio (0.5 by default),
              i.e. the screen points too far up or down.

An all-zero sample is classified "not tilted" in both modes.
"""

import logging
from enum import Enum
from typing import Optional, Tuple

from ..config import TILT_LIMIT_DEG, TILT_Z_RATIO
from ..state import SensorState
from ..util.angles import pitch_roll_from_accel, normalized_z

log = logging.getLogger(__name__)


class TiltMode(Enum):
    LEVEL = "LEVEL"
    UPRIGHT = "UPRIGHT"


class TiltDetector:
    """
    Classifies each accelerometer sample and writes the result into the shared
    ``SensorState.tilted`` flag. Latest sample wins; nothing is queued.
    """
    def __init__(
        self,
        state: Optional[SensorState] = None,
        mode: TiltMode = TiltMode.LEVEL,
        limit_deg: float = TILT_LIMIT_DEG,
        z_ratio: float = TILT_Z_RATIO,
    ):
        if not 0.0 < limit_deg <= 90.0:
            raise ValueError(f"limit_deg must be in (0, 90], got {limit_deg}")
        if not 0.0 < z_ratio <= 1.0:
            raise ValueError(f"z_ratio must be in (0, 1], got {z_ratio}")
        self.state = state if state is not None else SensorState()
        self.mode = mode
        self.limit_deg = limit_deg
        self.z_ratio = z_ratio
        self.pitch_deg = 0.0
        self.roll_deg = 0.0
        self.last_sample: Optional[Tuple[float, float, float]] = None

    @property
    def is_tilted(self) -> bool:
        return self.state.tilted

    def set_mode(self, mode: TiltMode) -> bool:
        """Switch test and re-classify the latest sample (not tilted if none yet)."""
        self.mode = mode
        tilted = False if self.last_sample is None else self.classify(*self.last_sample)
        self.state.tilted = tilted
        return tilted

    def classify(self, x: float, y: float, z: float, mode: Optional[TiltMode] = None) -> bool:
        """Pure classification of one sample; does not touch the shared state."""
        mode = self.mode if mode is None else mode
        if mode == TiltMode.LEVEL:
            pitch, roll = pitch_roll_from_accel(x, y, z)
            return abs(pitch) > self.limit_deg or abs(roll) > self.limit_deg
        return abs(normalized_z(x, y, z)) > self.z_ratio

    def update(self, x: float, y: float, z: float) -> bool:
        """Classify a sample and publish the result. Returns the new tilt flag."""
        self.last_sample = (x, y, z)
        self.pitch_deg, self.roll_deg = pitch_roll_from_accel(x, y, z)
        tilted = self.classify(x, y, z)
        if tilted != self.state.tilted:
            log.debug("[TILT] %s -> %s (%s, pitch=%.1f roll=%.1f)",
                      self.state.tilted, tilted, self.mode.value, self.pitch_deg, self.roll_deg)
        self.state.tilted = tilted
        return tilted
