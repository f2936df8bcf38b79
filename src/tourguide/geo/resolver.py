# -*- coding: utf-8 -*-
"""
Filename: resolver.py
Description: Finds the street address of the building the phone is pointed at.

-------------------------------------------------------------------------------
SEARCH
-------------------------------------------------------------------------------
Probe points are cast along the true bearing at geometrically growing distances

    d = start, 2*start, 4*start, ... while d <= max        (1, 2, 4, ..., 64 m)

and each point is reverse-geocoded. The first reply carrying a house number
ends the search. A reply with an address but no house number (a road, an area)
or no reply at all moves on to the next distance.

One run at a time: a second request while a run is in flight is rejected and
leaves the running search's steps and address alone.
-------------------------------------------------------------------------------
"""

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from ..config import SEARCH_START_M, SEARCH_MAX_M, EARTH_RADIUS_M
from ..sensors.samples import Coordinate
from ..util.angles import normalize_angle
from .geocoding import AddressRecord, format_address
from .projection import destination_point

log = logging.getLogger(__name__)


class StepStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"


@dataclass
class SearchStep:
    id: str
    label: str
    status: StepStatus = StepStatus.PENDING


STEP_LOCATE = "loc"
STEP_DIRECTION = "dir"
STEP_COMPUTE = "calc"
STEP_GEOCODE = "geocode"

STEP_LABELS = (
    (STEP_LOCATE, "getting location"),
    (STEP_DIRECTION, "getting direction"),
    (STEP_COMPUTE, "calculated coords"),
    (STEP_GEOCODE, "sending coords to geocoder"),
)


class ResolveStatus(Enum):
    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"
    REJECTED_BUSY = "REJECTED_BUSY"
    REJECTED_CALIBRATING = "REJECTED_CALIBRATING"
    REJECTED_NO_POSITION = "REJECTED_NO_POSITION"


@dataclass(frozen=True)
class ResolvedAddress:
    text: str
    endpoint: Coordinate
    distance_m: float
    display_name: str = ""


@dataclass(frozen=True)
class Probe:
    """One geocode lookup made during a run."""
    distance_m: float
    endpoint: Coordinate
    record: Optional[AddressRecord]


@dataclass
class ResolutionResult:
    status: ResolveStatus
    message: str = ""
    address: Optional[ResolvedAddress] = None
    probes: List[Probe] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status == ResolveStatus.FOUND

    @property
    def rejected(self) -> bool:
        return self.status.name.startswith("REJECTED")


class AddressResolver:
    """
    Args:
        geocode: ``geocode(lat, lon)`` returning a decoded reply dict, an
            ``AddressRecord`` or None. May raise; every failure counts as "no data".
        start_distance_m: First probe distance.
        max_distance_m: Last probe distance (inclusive).
        on_step: Called with a copy of the step list after every step change.
    """
    def __init__(
        self,
        geocode: Callable[[float, float], Any],
        start_distance_m: float = SEARCH_START_M,
        max_distance_m: float = SEARCH_MAX_M,
        radius_m: float = EARTH_RADIUS_M,
        on_step: Optional[Callable[[List[SearchStep]], None]] = None,
    ):
        if start_distance_m <= 0.0:
            raise ValueError(f"start_distance_m must be positive, got {start_distance_m}")
        if max_distance_m < start_distance_m:
            raise ValueError(
                f"max_distance_m ({max_distance_m}) must be >= start_distance_m ({start_distance_m})"
            )
        self.geocode = geocode
        self.start_distance_m = start_distance_m
        self.max_distance_m = max_distance_m
        self.radius_m = radius_m
        self.on_step = on_step

        self.steps: List[SearchStep] = []
        self.show_steps = False
        self.address: Optional[ResolvedAddress] = None
        self._run_lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._run_lock.locked()

    def max_probes(self) -> int:
        """Number of lookups a run makes when nothing is found."""
        n, d = 0, self.start_distance_m
        while d <= self.max_distance_m:
            n += 1
            d *= 2
        return n

    # --- step bookkeeping ---
    def _set_step(self, step_id: str, status: StepStatus):
        for step in self.steps:
            if step.id == step_id:
                if step.status == status:
                    return
                step.status = status
                break
        if self.on_step is not None:
            self.on_step([SearchStep(s.id, s.label, s.status) for s in self.steps])

    def _lookup(self, lat: float, lon: float) -> Optional[AddressRecord]:
        try:
            reply = self.geocode(lat, lon)
        except Exception as err:
            log.warning("[SEARCH] geocode failed at (%.6f, %.6f): %s", lat, lon, err)
            return None
        return AddressRecord.from_response(reply)

    # --- search ---
    def resolve(
        self,
        coordinate: Optional[Coordinate],
        bearing_deg: Optional[float],
        calibrated: bool = True,
    ) -> ResolutionResult:
        """
        Run one search from ``coordinate`` along the true bearing.

        Rejected requests leave steps, overlay and the previous address untouched.
        """
        if not self._run_lock.acquire(blocking=False):
            return ResolutionResult(ResolveStatus.REJECTED_BUSY, "A search is already running.")
        try:
            if not calibrated or bearing_deg is None:
                log.info("[SEARCH] compass still calibrating, request rejected")
                return ResolutionResult(ResolveStatus.REJECTED_CALIBRATING,
                                        "Compass is still calibrating, please wait.")
            if coordinate is None:
                log.info("[SEARCH] no position yet, request rejected")
                return ResolutionResult(ResolveStatus.REJECTED_NO_POSITION,
                                        "Location is still loading, please wait.")
            return self._search(coordinate, normalize_angle(bearing_deg))
        finally:
            self._run_lock.release()

    def _search(self, coordinate: Coordinate, bearing: float) -> ResolutionResult:
        self.address = None
        self.show_steps = True
        self.steps = [SearchStep(step_id, label) for step_id, label in STEP_LABELS]
        self._set_step(STEP_LOCATE, StepStatus.DONE)
        self._set_step(STEP_DIRECTION, StepStatus.DONE)

        log.info("[SEARCH] from (%.6f, %.6f) bearing %.1f deg, up to %.0f m",
                 coordinate.latitude, coordinate.longitude, bearing, self.max_distance_m)

        probes: List[Probe] = []
        distance = self.start_distance_m
        while distance <= self.max_distance_m:
            lat, lon = destination_point(coordinate.latitude, coordinate.longitude,
                                         bearing, distance, self.radius_m)
            endpoint = Coordinate(lat, lon)
            self._set_step(STEP_COMPUTE, StepStatus.DONE)

            self._set_step(STEP_GEOCODE, StepStatus.IN_PROGRESS)
            record = self._lookup(lat, lon)
            probes.append(Probe(distance, endpoint, record))

            if record is not None and record.has_address:
                if record.house_number:
                    self.address = ResolvedAddress(
                        text=format_address(record),
                        endpoint=endpoint,
                        distance_m=distance,
                        display_name=record.display_name,
                    )
                    self._set_step(STEP_GEOCODE, StepStatus.DONE)
                    self.show_steps = False
                    log.info("[SEARCH] building found at %.0f m: %s", distance, self.address.text)
                    return ResolutionResult(ResolveStatus.FOUND, self.address.text, self.address, probes)
                log.debug("[SEARCH] %.0f m: '%s' has no house number", distance, record.type)
            else:
                log.debug("[SEARCH] %.0f m: no data", distance)

            distance *= 2

        log.info("[SEARCH] no building within %.0f m after %d lookups", self.max_distance_m, len(probes))
        return ResolutionResult(ResolveStatus.NOT_FOUND,
                                f"No building found within {self.max_distance_m:.0f} m.",
                                None, probes)
