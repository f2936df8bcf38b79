"""Sensors package.

Most client code should import conveniently from here rather than diving into
individual submodules. The stream framework is in ``sensor_framework.py``, tilt
classification in ``tilt.py`` and position smoothing in ``position.py``.

Example::

    from tourguide.sensors import HeadingStream, TiltDetector, PositionTracker

"""

from .samples import (
    HeadingSample,
    AccelSample,
    Coordinate,
    PositionFix,
)

from .sensor_framework import (
    SampleSpec,
    Subscription,
    SampleStream,
    HeadingStream,
    AccelerometerStream,
    SimulatedHeadingSource,
    SimulatedAccelerometer,
)

from .tilt import TiltMode, TiltDetector
from .position import PositionTracker

__all__ = [
    # samples
    "HeadingSample",
    "AccelSample",
    "Coordinate",
    "PositionFix",
    # streams
    "SampleSpec",
    "Subscription",
    "SampleStream",
    "HeadingStream",
    "AccelerometerStream",
    "SimulatedHeadingSource",
    "SimulatedAccelerometer",
    # tilt / position
    "TiltMode",
    "TiltDetector",
    "PositionTracker",
]
