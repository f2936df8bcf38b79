# -*- coding: utf-8 -*-
"""
Filename: declination.py
Description: Magnetic declination cache with a staleness policy.

The value is re-fetched only when:
    - nothing has been fetched yet, or
    - the position moved more than ``refresh_distance_m`` since the last fetch, or
    - the last fetch is older than ``max_age_s``.
A failed lookup keeps the previous value and is retried after ``retry_s``.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from ..config import DECLINATION_REFRESH_M, DECLINATION_MAX_AGE_S, DECLINATION_RETRY_S
from ..sensors.samples import Coordinate
from .projection import haversine_distance

log = logging.getLogger(__name__)


def noaa_declination_params(lat: float, lon: float, key: str) -> Dict[str, Any]:
    """Query parameters for the NOAA geomag ``calculateDeclination`` calculator."""
    return {"lat1": lat, "lon1": lon, "key": key, "resultFormat": "json"}


def parse_noaa_declination(payload: Any) -> Optional[float]:
    """Extract ``result[0].declination`` from a NOAA reply; None if absent."""
    if not isinstance(payload, dict):
        return None
    result = payload.get("result")
    if not isinstance(result, list) or not result or not isinstance(result[0], dict):
        return None
    value = result[0].get("declination")
    try:
        return None if value is None else float(value)
    except (TypeError, ValueError):
        return None


class DeclinationTracker:
    """
    Args:
        lookup: ``lookup(lat, lon) -> degrees | None``; may raise, failures are absorbed.
        clock: Wall-clock source in seconds.
    """
    def __init__(
        self,
        lookup: Callable[[float, float], Optional[float]],
        refresh_distance_m: float = DECLINATION_REFRESH_M,
        max_age_s: float = DECLINATION_MAX_AGE_S,
        retry_s: float = DECLINATION_RETRY_S,
        clock: Callable[[], float] = time.time,
    ):
        self.lookup = lookup
        self.refresh_distance_m = refresh_distance_m
        self.max_age_s = max_age_s
        self.retry_s = retry_s
        self.clock = clock

        self.value = 0.0
        self.fetched_at: Optional[float] = None
        self.fetched_from: Optional[Coordinate] = None
        self.failed_at: Optional[float] = None

    def needs_refresh(self, coordinate: Coordinate, now: Optional[float] = None) -> bool:
        now = self.clock() if now is None else now
        if self.failed_at is not None and now - self.failed_at < self.retry_s:
            return False
        if self.fetched_at is None or self.fetched_from is None:
            return True
        if now - self.fetched_at > self.max_age_s:
            return True
        moved = haversine_distance(
            self.fetched_from.latitude, self.fetched_from.longitude,
            coordinate.latitude, coordinate.longitude
        )
        return moved > self.refresh_distance_m

    def update(self, coordinate: Optional[Coordinate], now: Optional[float] = None) -> float:
        """Refresh if stale; returns the current declination in degrees."""
        if coordinate is None:
            return self.value
        now = self.clock() if now is None else now
        if not self.needs_refresh(coordinate, now):
            return self.value

        try:
            fetched = self.lookup(coordinate.latitude, coordinate.longitude)
        except Exception as err:
            log.warning("[DECL] lookup failed, keeping %.2f deg: %s", self.value, err)
            fetched = None

        if fetched is None:
            self.failed_at = now
            return self.value

        self.value = float(fetched)
        self.fetched_at = now
        self.fetched_from = coordinate
        self.failed_at = None
        log.info("[DECL] %.2f deg at (%.5f, %.5f)", self.value, coordinate.latitude, coordinate.longitude)
        return self.value
