# -*- coding: utf-8 -*-
"""
Filename: heading_filter.py
Description: Steady-state heading estimator.

First-order exponential filter on the circle:

    diff   = shortest_arc(sample, prev)          in [-180, 180)
    prev   = wrap(prev + k * diff)               if |diff| <= glitch threshold

Working on the shortest-arc difference keeps 359 -> 1 a 2 deg step instead of
a 358 deg swing. Jumps beyond the glitch threshold are sensor-fusion artefacts
and are dropped.
"""

import logging
from typing import Optional

from ..config import HEADING_SMOOTHING, GLITCH_THRESHOLD_DEG
from ..state import Phase, SensorState
from ..util.angles import normalize_angle, shortest_arc

log = logging.getLogger(__name__)


class HeadingFilter:
    """
    Produces the stabilized heading once calibration has completed.

    Samples are ignored while the phone is tilted or a calibration session is
    running. The first accepted sample seeds the estimate directly.
    """
    def __init__(
        self,
        state: Optional[SensorState] = None,
        smoothing: float = HEADING_SMOOTHING,
        glitch_threshold_deg: float = GLITCH_THRESHOLD_DEG,
    ):
        if not 0.0 < smoothing <= 1.0:
            raise ValueError(f"smoothing must be in (0, 1], got {smoothing}")
        if not 0.0 < glitch_threshold_deg <= 180.0:
            raise ValueError(f"glitch_threshold_deg must be in (0, 180], got {glitch_threshold_deg}")
        self.state = state if state is not None else SensorState()
        self.smoothing = smoothing
        self.glitch_threshold_deg = glitch_threshold_deg
        self.stable_heading: Optional[float] = None
        self.glitch_count = 0

    def update(self, angle_deg: float) -> bool:
        """Offer one raw heading sample. Returns True if it moved the estimate."""
        if self.state.phase != Phase.STEADY_STATE or not self.state.calibrated_once:
            return False
        if self.state.tilted:
            return False

        angle = normalize_angle(angle_deg)
        if self.stable_heading is None:
            self.stable_heading = angle
            return True

        diff = shortest_arc(angle, self.stable_heading)
        if abs(diff) > self.glitch_threshold_deg:
            self.glitch_count += 1
            log.debug("[HDG] glitch: %.1f -> %.1f (%.1f deg) dropped", self.stable_heading, angle, diff)
            return False

        self.stable_heading = normalize_angle(self.stable_heading + diff * self.smoothing)
        return True

    @property
    def heading(self) -> Optional[float]:
        """Stabilized heading minus the calibration offset, in [0, 360)."""
        if self.stable_heading is None:
            return None
        return normalize_angle(self.stable_heading - self.state.calibration_offset)

    def reset(self):
        self.stable_heading = None
        self.glitch_count = 0
