"""tourguide: compass heading estimation and facing-address lookup.

Example::

    from tourguide import HeadingPipeline, AddressResolver, CaptureSession

"""

from .filters import HeadingPipeline, Phase, SensorState
from .geo import AddressResolver, CaptureSession, Coordinate, destination_point
from .sensors import PositionFix, PositionTracker

__version__ = "0.1.0"

__all__ = [
    "HeadingPipeline",
    "Phase",
    "SensorState",
    "AddressResolver",
    "CaptureSession",
    "Coordinate",
    "destination_point",
    "PositionFix",
    "PositionTracker",
]
