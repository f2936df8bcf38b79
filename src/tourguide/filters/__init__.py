"""Heading estimation package.

Most client code should import conveniently from here rather than diving into
individual submodules. The calibration state machine lives in ``calibration.py``,
the steady-state estimator in ``heading_filter.py`` and the wiring in ``pipeline.py``.

Example::

    from tourguide.filters import HeadingPipeline

    pipeline = HeadingPipeline()
    pipeline.on_accel(0.0, 0.0, 9.81)
    pipeline.on_heading(123.0)

"""

from ..state import Phase, SensorState
from .calibration import CalibrationController
from .heading_filter import HeadingFilter
from .display import DisplaySmoother
from .pipeline import HeadingPipeline

__all__ = [
    "Phase",
    "SensorState",
    "CalibrationController",
    "HeadingFilter",
    "DisplaySmoother",
    "HeadingPipeline",
]
