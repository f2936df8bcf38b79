# -*- coding: utf-8 -*-
"""
Filename: position.py
Description: Position fix filtering and smoothing.
             Fixes worse than the accuracy limit are discarded; the reported
             coordinate is the mean of a small sliding window of accepted fixes.
"""

import logging
import numpy as np
from collections import deque
from typing import Optional

from ..config import MAX_FIX_ACCURACY_M, POSITION_WINDOW
from .samples import Coordinate, PositionFix

log = logging.getLogger(__name__)


class PositionTracker:
    """
    Consumes fixes from the location provider.

    Note: the window mean is taken directly in degrees. Over a five-fix window the
    points are metres apart, far from the antimeridian case where this breaks.
    """
    def __init__(self, max_accuracy_m: float = MAX_FIX_ACCURACY_M, window: int = POSITION_WINDOW):
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        self.max_accuracy_m = max_accuracy_m
        self.window = window
        self.fixes = deque(maxlen=window)
        self.accuracy_m: Optional[float] = None
        self.rejected_count = 0

    def update(self, fix: PositionFix) -> bool:
        """Accept or discard one fix. Returns True if it entered the window."""
        if fix.accuracy_m is not None and fix.accuracy_m > self.max_accuracy_m:
            self.rejected_count += 1
            log.debug("[POS] discarded fix with accuracy %.1f m (limit %.1f m)",
                      fix.accuracy_m, self.max_accuracy_m)
            return False
        self.fixes.append((fix.latitude, fix.longitude))
        self.accuracy_m = fix.accuracy_m
        return True

    @property
    def is_loading(self) -> bool:
        return not self.fixes

    @property
    def coordinate(self) -> Optional[Coordinate]:
        if not self.fixes:
            return None
        lat, lon = np.mean(np.array(self.fixes), axis=0)
        return Coordinate(float(lat), float(lon))

    def reset(self):
        self.fixes.clear()
        self.accuracy_m = None
