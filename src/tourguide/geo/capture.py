"""Capture trigger: ties the heading pipeline, position and declination to the resolver."""

import logging
from typing import Optional

from ..sensors.samples import PositionFix
from ..sensors.position import PositionTracker
from .declination import DeclinationTracker
from .resolver import AddressResolver, ResolutionResult

log = logging.getLogger(__name__)


class CaptureSession:
    """
    The object the surrounding application talks to when the user presses capture.

    The bearing handed to the resolver is the filtered heading plus declination,
    never the display-smoothed angle.
    """
    def __init__(
        self,
        pipeline,
        resolver: AddressResolver,
        tracker: Optional[PositionTracker] = None,
        declination: Optional[DeclinationTracker] = None,
    ):
        self.pipeline = pipeline
        self.resolver = resolver
        self.tracker = tracker if tracker is not None else PositionTracker()
        self.declination = declination

    def on_position(self, fix: PositionFix, now: Optional[float] = None) -> bool:
        accepted = self.tracker.update(fix)
        if accepted and self.declination is not None:
            self.pipeline.declination = self.declination.update(self.tracker.coordinate, now)
        return accepted

    def capture(self) -> ResolutionResult:
        calibrated = not self.pipeline.is_calibrating and self.pipeline.heading is not None
        result = self.resolver.resolve(
            self.tracker.coordinate,
            self.pipeline.true_heading if calibrated else None,
            calibrated=calibrated,
        )
        if result.rejected:
            log.info("[CAPTURE] %s", result.message)
        return result
