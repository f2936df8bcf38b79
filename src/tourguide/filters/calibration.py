# -*- coding: utf-8 -*-
"""
Filename: calibration.py
Description: Compass calibration session.

-------------------------------------------------------------------------------
STATE MACHINE
-------------------------------------------------------------------------------
    IDLE / STEADY_STATE --calibrate()--> COLLECTING --+-- N samples --> COMPLETING --> STEADY_STATE
                                                      +-- timeout ---->
                                                      +-- finish_calibration() ->

COLLECTING:
    - tilted samples are dropped
    - a sample is kept only if it is more than the movement threshold away from
      the last kept sample
COMPLETING:
    - offset = circular mean of the kept samples (0 if none)

calibrate() may be called at any time; it drops the running session and starts over.
The timeout is a deadline checked by ``poll()`` and on every sample against the
injected clock.
-------------------------------------------------------------------------------
"""

import logging
import time
from typing import Callable, List, Optional

from ..config import (
    NUM_CALIBRATION_SAMPLES,
    CALIBRATION_TIMEOUT_S,
    MOVEMENT_THRESHOLD_DEG,
    CALIBRATION_MESSAGE,
)
from ..state import Phase, SensorState
from ..util.angles import normalize_angle, angular_distance, circular_mean

log = logging.getLogger(__name__)


class CalibrationController:
    """
    Collects heading samples during a figure-eight motion and computes the
    systematic heading offset.

    Attributes:
        state (SensorState): Shared cell; this controller owns ``phase`` and
            ``calibration_offset``.
        samples (List[float]): Kept angles of the current session.
        message (str): User-facing status text, empty when not calibrating.
    """
    def __init__(
        self,
        state: Optional[SensorState] = None,
        num_samples: int = NUM_CALIBRATION_SAMPLES,
        timeout_s: float = CALIBRATION_TIMEOUT_S,
        movement_threshold_deg: float = MOVEMENT_THRESHOLD_DEG,
        clock: Callable[[], float] = time.monotonic,
        on_complete: Optional[Callable[[float], None]] = None,
    ):
        if num_samples <= 0:
            raise ValueError(f"num_samples must be positive, got {num_samples}")
        if timeout_s <= 0.0:
            raise ValueError(f"timeout_s must be positive, got {timeout_s}")
        if movement_threshold_deg < 0.0:
            raise ValueError(f"movement_threshold_deg must be >= 0, got {movement_threshold_deg}")

        self.state = state if state is not None else SensorState()
        self.num_samples = num_samples
        self.timeout_s = timeout_s
        self.movement_threshold_deg = movement_threshold_deg
        self.clock = clock
        self.on_complete = on_complete

        self.samples: List[float] = []
        self.last_angle: Optional[float] = None
        self.deadline: Optional[float] = None
        self.message = ""

    # --- read-only views ---
    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def is_calibrating(self) -> bool:
        return self.state.is_calibrating

    @property
    def sample_count(self) -> int:
        return len(self.samples)

    @property
    def offset(self) -> float:
        return self.state.calibration_offset

    # --- session control ---
    def calibrate(self, now: Optional[float] = None):
        """Start (or restart) a calibration session."""
        now = self.clock() if now is None else now
        if self.state.phase == Phase.COLLECTING:
            log.info("[CAL] Restarting calibration (%d samples discarded)", len(self.samples))

        self.samples = []
        self.last_angle = None
        self.deadline = now + self.timeout_s
        self.message = CALIBRATION_MESSAGE
        self.state.phase = Phase.COLLECTING
        log.info("[CAL] Collecting up to %d samples for %.0fs", self.num_samples, self.timeout_s)

    def poll(self, now: Optional[float] = None) -> bool:
        """Fire the timeout if it has elapsed. Returns True if the session completed."""
        if self.state.phase != Phase.COLLECTING or self.deadline is None:
            return False
        now = self.clock() if now is None else now
        if now >= self.deadline:
            log.info("[CAL] Timeout after %.0fs", self.timeout_s)
            self.finish_calibration()
            return True
        return False

    def add_sample(self, angle_deg: float, now: Optional[float] = None) -> bool:
        """
        Offer one heading sample to the running session.

        Returns:
            True if the sample was kept.
        """
        if self.poll(now) or self.state.phase != Phase.COLLECTING:
            return False
        if self.state.tilted:
            log.debug("[CAL] tilted, sample %.1f dropped", angle_deg)
            return False

        angle = normalize_angle(angle_deg)
        if self.last_angle is not None and angular_distance(angle, self.last_angle) <= self.movement_threshold_deg:
            return False

        self.samples.append(angle)
        self.last_angle = angle
        if len(self.samples) >= self.num_samples:
            self.finish_calibration()
        return True

    def finish_calibration(self):
        """
        Complete the running session now. Does nothing outside a session, so a
        second call in a row leaves the offset untouched.
        """
        if self.state.phase != Phase.COLLECTING:
            return

        self.state.phase = Phase.COMPLETING
        offset = circular_mean(self.samples) if self.samples else 0.0
        self.state.calibration_offset = offset
        self.state.calibrated_once = True

        self.deadline = None
        self.message = ""
        self.state.phase = Phase.STEADY_STATE
        log.info("[CAL] Done: %d samples, offset=%.2f deg", len(self.samples), offset)

        if self.on_complete is not None:
            self.on_complete(offset)
