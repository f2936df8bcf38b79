"""Utility helpers package.

Most client code should import conveniently from here rather than diving into
individual submodules.  The angle arithmetic lives in ``angles.py``, sensor-log
playback in ``log_playback.py`` and plotting in ``plotting.py``.

Example::

    from tourguide.util import normalize_angle, shortest_arc, load_sensor_log

"""

# re-export commonly used symbols from submodules
from .angles import (
    normalize_angle,
    normalize_longitude,
    shortest_arc,
    angular_distance,
    circular_mean,
    pitch_roll_from_accel,
    normalized_z,
)
from .log_playback import load_sensor_log, replay_log
from .plotting import plot_heading_trace

__all__ = [
    # angles
    "normalize_angle",
    "normalize_longitude",
    "shortest_arc",
    "angular_distance",
    "circular_mean",
    "pitch_roll_from_accel",
    "normalized_z",
    # sensor logs
    "load_sensor_log",
    "replay_log",
    "plot_heading_trace",
]
