# -*- coding: utf-8 -*-
"""
Filename: pipeline.py
Description: Wires tilt detection, calibration, heading filtering and display
             smoothing around one shared ``SensorState``.

Flow:
    accelerometer --> TiltDetector --(tilted flag)--+
                                                    v
    heading -------> CalibrationController   (phase COLLECTING)
                 +-> HeadingFilter           (phase STEADY_STATE)
                                 |
                    heading (+ declination) --> DisplaySmoother
"""

import logging
import time
from typing import Callable, Dict, List, Optional

from ..state import Phase, SensorState
from ..sensors.sensor_framework import Subscription
from ..sensors.tilt import TiltDetector, TiltMode
from ..util.angles import normalize_angle
from .calibration import CalibrationController
from .heading_filter import HeadingFilter
from .display import DisplaySmoother

log = logging.getLogger(__name__)


class HeadingPipeline:
    """
    High-level heading estimator exposed to the surrounding application.

    Args:
        calibration_config: Keyword arguments for ``CalibrationController``.
        filter_config: Keyword arguments for ``HeadingFilter``.
        tilt_config: Keyword arguments for ``TiltDetector`` (``mode`` is managed here).
        display_config: Keyword arguments for ``DisplaySmoother``.
        clock: Time source for the calibration timeout. Sample timestamps from the
            streams never enter the timeout; it always runs on this clock.
        auto_calibrate: Start a calibration session immediately.
    """
    def __init__(
        self,
        calibration_config: Optional[Dict] = None,
        filter_config: Optional[Dict] = None,
        tilt_config: Optional[Dict] = None,
        display_config: Optional[Dict] = None,
        clock: Callable[[], float] = time.monotonic,
        auto_calibrate: bool = True,
    ):
        self.state = SensorState()
        self.clock = clock

        self.tilt = TiltDetector(self.state, **(tilt_config or {}))
        self.calibration = CalibrationController(self.state, clock=clock, **(calibration_config or {}))
        self.filter = HeadingFilter(self.state, **(filter_config or {}))
        self.display = DisplaySmoother(**(display_config or {}))

        self.declination = 0.0
        self._subscriptions: List[Subscription] = []

        if auto_calibrate:
            self.calibrate()

    # --- calibration surface ---
    def calibrate(self, now: Optional[float] = None):
        """Start or restart calibration; the stabilized heading is re-seeded afterwards."""
        self.filter.reset()
        self.tilt.set_mode(TiltMode.LEVEL)
        self.calibration.calibrate(now)

    def finish_calibration(self):
        self.calibration.finish_calibration()
        self._enter_steady_state()

    def poll(self, now: Optional[float] = None) -> bool:
        """Check the calibration timeout. Returns True if calibration just completed."""
        done = self.calibration.poll(now)
        if done:
            self._enter_steady_state()
        return done

    def _enter_steady_state(self):
        if self.state.phase == Phase.STEADY_STATE and self.tilt.mode != TiltMode.UPRIGHT:
            self.tilt.set_mode(TiltMode.UPRIGHT)

    @property
    def is_calibrating(self) -> bool:
        return self.state.is_calibrating

    @property
    def calibration_message(self) -> str:
        return self.calibration.message

    @property
    def sample_count(self) -> int:
        return self.calibration.sample_count

    def set_clock(self, clock: Callable[[], float]):
        """Replace the time source of the calibration timeout."""
        self.clock = clock
        self.calibration.clock = clock

    # --- sample ingestion ---
    def on_accel(self, x: float, y: float, z: float) -> bool:
        return self.tilt.update(x, y, z)

    def on_heading(self, angle_deg: float) -> bool:
        """
        Route one raw heading sample to calibration or to the filter.
        Returns True if the sample was used.
        """
        if self.poll():
            return False
        if self.state.phase == Phase.COLLECTING:
            used = self.calibration.add_sample(angle_deg)
            self._enter_steady_state()
            return used
        used = self.filter.update(angle_deg)
        if used:
            self.display.set_target(self.true_heading)
        return used

    # --- outputs ---
    @property
    def heading(self) -> Optional[float]:
        """Calibrated, filtered heading; None until calibration has completed once."""
        if not self.state.calibrated_once:
            return None
        return self.filter.heading

    @property
    def true_heading(self) -> Optional[float]:
        """Filtered heading corrected for magnetic declination (heading + declination)."""
        heading = self.heading
        if heading is None:
            return None
        return normalize_angle(heading + self.declination)

    @property
    def display_angle(self) -> float:
        return self.display.angle

    def tick(self) -> float:
        """One display frame."""
        self.poll()
        target = self.true_heading
        if target is not None:
            self.display.set_target(target)
        return self.display.tick()

    def advance(self, elapsed_s: float) -> float:
        """Run the display smoother for ``elapsed_s`` worth of ticks."""
        target = self.true_heading
        if target is not None:
            self.display.set_target(target)
        self.display.advance(elapsed_s)
        return self.display.angle

    # --- stream wiring ---
    def attach(self, heading_stream, accel_stream=None):
        """Subscribe to sensor streams. Previous subscriptions are cancelled first."""
        self.detach()
        self._subscriptions.append(
            heading_stream.subscribe(lambda angle, t: self.on_heading(angle))
        )
        if accel_stream is not None:
            self._subscriptions.append(
                accel_stream.subscribe(lambda v, t: self.on_accel(v[0], v[1], v[2]))
            )
        return self

    def detach(self):
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.detach()
        return False
