"""Geodesy and address-resolution package.

Most client code should import conveniently from here rather than diving into
individual submodules. The spherical projection is in ``projection.py``, the
reverse-geocode shapes in ``geocoding.py`` and the search in ``resolver.py``.

Example::

    from tourguide.geo import destination_point, AddressResolver

"""

from ..sensors.samples import Coordinate
from .projection import destination_point, haversine_distance
from .geocoding import AddressRecord, format_address, reverse_geocode_params
from .declination import DeclinationTracker, noaa_declination_params, parse_noaa_declination
from .resolver import (
    StepStatus,
    SearchStep,
    ResolveStatus,
    ResolvedAddress,
    Probe,
    ResolutionResult,
    AddressResolver,
)
from .capture import CaptureSession

__all__ = [
    "Coordinate",
    # projection
    "destination_point",
    "haversine_distance",
    # geocoding
    "AddressRecord",
    "format_address",
    "reverse_geocode_params",
    # declination
    "DeclinationTracker",
    "noaa_declination_params",
    "parse_noaa_declination",
    # search
    "StepStatus",
    "SearchStep",
    "ResolveStatus",
    "ResolvedAddress",
    "Probe",
    "ResolutionResult",
    "AddressResolver",
    "CaptureSession",
]
