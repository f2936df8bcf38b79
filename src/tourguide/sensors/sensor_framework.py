# -*- coding: utf-8 -*-
"""
Filename: sensor_framework.py
Description: Push-based sample streams for the phone's sensor collaborators.
             - Heading streams (fused compass output, 1-D, degrees)
             - Accelerometer streams (3-axis, device-local frame)

             A stream buffers recent samples, optionally rate-limits them, and
             delivers each accepted sample to its subscribers. Subscriptions are
             handles: once cancelled, a callback is never called again.

             Simulated sources apply a Truth -> Bias -> Noise -> Glitch error chain
             so the pipeline can be exercised without a device.
"""

import logging
import numpy as np
from collections import deque
from typing import Callable, List, Optional, Tuple
from dataclasses import dataclass

from ..util.angles import normalize_angle
from .samples import AccelSample, HeadingSample

log = logging.getLogger(__name__)


@dataclass
class SampleSpec:
    """Specification for stream output format and interpretation."""
    dimension: int
    units: str
    description: str
    labels: List[str]


# ==============================================================================
# SUBSCRIPTIONS
# ==============================================================================

class Subscription:
    """
    Handle returned by ``SampleStream.subscribe``.
    Cancelling it detaches the callback; no delivery happens after ``cancel()`` returns.
    Can be used as a context manager to scope the subscription.
    """
    def __init__(self, stream: "SampleStream", callback: Callable):
        self._stream = stream
        self.callback = callback
        self.active = True

    def cancel(self):
        if not self.active:
            return
        self.active = False
        self._stream._detach(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cancel()
        return False


# ==============================================================================
# BASE STREAM
# ==============================================================================

class SampleStream:
    """
    Dimension-agnostic foundation for any sample source.
    Handles data management, timestamping, history buffering and fan-out.

    Attributes:
        stream_id (str): Identifier used in log messages.
        spec (SampleSpec): Output format specification.
        history (deque): A sliding window of (timestamp, value) pairs.
        current_value (np.ndarray): The most recent sample.
        update_rate_hz (float, optional): If set, samples arriving faster are dropped.
    """
    def __init__(
        self,
        stream_id: str,
        spec: SampleSpec,
        buffer_size: int = 100,
        update_rate_hz: Optional[float] = None
    ):
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self.stream_id = stream_id
        self.spec = spec
        self.buffer_size = buffer_size

        self.history = deque(maxlen=buffer_size)
        self.current_value: np.ndarray = np.zeros(spec.dimension)
        self.current_timestamp: float = 0.0

        self.update_rate_hz = update_rate_hz
        self.update_period = 0.0 if update_rate_hz is None else 1.0 / update_rate_hz
        self.last_update_time: Optional[float] = None

        self._subscriptions: List[Subscription] = []

    def _store(self, data: np.ndarray, timestamp: float):
        if data.shape != (self.spec.dimension,):
            raise ValueError(
                f"Data shape {data.shape} doesn't match spec dimension {self.spec.dimension}"
            )
        self.current_value = data.copy()
        self.current_timestamp = timestamp
        self.history.append((timestamp, data.copy()))

    def _sample_value(self, data: np.ndarray):
        """What subscribers receive for a stored sample. Override per stream type."""
        return data.copy()

    def should_update(self, timestamp: float) -> bool:
        """
        Check whether enough time has passed since the last accepted sample.
        Always True if no update_rate_hz was specified.
        """
        if self.update_period == 0.0:
            return True
        if self.last_update_time is None or timestamp - self.last_update_time >= self.update_period:
            self.last_update_time = timestamp
            return True
        return False

    def push(self, values, timestamp: float):
        """
        Ingest one sample from the collaborator and deliver it to subscribers.

        Returns:
            The stored sample vector, or None if rate limiting dropped it.
        """
        if not self.should_update(timestamp):
            return None
        data = np.atleast_1d(np.asarray(values, dtype=float))
        self._store(data, timestamp)

        value = self._sample_value(data)
        # copy: a callback may cancel its own subscription
        for sub in list(self._subscriptions):
            if sub.active:
                sub.callback(value, timestamp)
        return data

    def subscribe(self, callback: Callable) -> Subscription:
        """Register ``callback(value, timestamp)`` for every accepted sample."""
        sub = Subscription(self, callback)
        self._subscriptions.append(sub)
        log.debug("[%s] subscriber added (%d total)", self.stream_id, len(self._subscriptions))
        return sub

    def _detach(self, sub: Subscription):
        if sub in self._subscriptions:
            self._subscriptions.remove(sub)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def get_latest(self) -> np.ndarray:
        """Access the most recent sample vector."""
        return self.current_value

    def get_history_matrix(self) -> np.ndarray:
        """Converts the history buffer into a 2D NumPy array (N x D)."""
        if not self.history:
            return np.empty((0, self.spec.dimension))
        return np.array([item[1] for item in self.history])

    def get_history_with_timestamps(self) -> Tuple[np.ndarray, np.ndarray]:
        """Returns (timestamps (N,), data (N x D))."""
        if not self.history:
            return np.empty(0), np.empty((0, self.spec.dimension))
        timestamps = np.array([item[0] for item in self.history])
        data = np.array([item[1] for item in self.history])
        return timestamps, data


# ==============================================================================
# CONCRETE STREAMS
# ==============================================================================

class HeadingStream(SampleStream):
    """Fused compass heading. Subscribers receive a float in [0, 360)."""
    SPEC = SampleSpec(
        dimension=1,
        units="deg",
        description="Fused compass heading",
        labels=["heading"]
    )

    def __init__(self, stream_id: str = "heading", **kwargs):
        super().__init__(stream_id, self.SPEC, **kwargs)

    def push(self, values, timestamp: float):
        angle = float(np.atleast_1d(np.asarray(values, dtype=float))[0])
        return super().push([normalize_angle(angle)], timestamp)

    def _sample_value(self, data: np.ndarray) -> float:
        return float(data[0])

    def latest_sample(self) -> Optional[HeadingSample]:
        if not self.history:
            return None
        return HeadingSample(float(self.current_value[0]), self.current_timestamp)


class AccelerometerStream(SampleStream):
    """3-axis accelerometer in device-local axes. Subscribers receive an (x, y, z) array."""
    SPEC = SampleSpec(
        dimension=3,
        units="m/s^2",
        description="Device-frame specific force",
        labels=["x", "y", "z"]
    )

    def __init__(self, stream_id: str = "accel", **kwargs):
        super().__init__(stream_id, self.SPEC, **kwargs)

    def latest_sample(self) -> Optional[AccelSample]:
        if not self.history:
            return None
        x, y, z = (float(v) for v in self.current_value)
        return AccelSample(x, y, z, self.current_timestamp)


# ==============================================================================
# SIMULATED SOURCES
# ==============================================================================

class SimulatedHeadingSource(HeadingStream):
    """
    Heading stream that corrupts a true heading before pushing it.

    Error chain: Truth -> Bias -> White Noise -> Glitch (random jump) -> Wrap
    """
    def __init__(
        self,
        stream_id: str = "heading_sim",
        bias_deg: float = 0.0,
        white_noise_std: float = 0.0,
        glitch_probability: float = 0.0,
        glitch_magnitude_deg: float = 170.0,
        seed: Optional[int] = None,
        **kwargs
    ):
        super().__init__(stream_id, **kwargs)
        self.bias_deg = bias_deg
        self.white_noise_std = white_noise_std
        self.glitch_probability = glitch_probability
        self.glitch_magnitude_deg = glitch_magnitude_deg
        self.rng = np.random.default_rng(seed)

    def step(self, true_heading_deg: float, timestamp: float) -> Optional[float]:
        """Generate and push one corrupted sample. Returns the pushed heading."""
        measured = true_heading_deg + self.bias_deg
        if self.white_noise_std > 0.0:
            measured += self.white_noise_std * self.rng.standard_normal()
        if self.glitch_probability > 0.0 and self.rng.random() < self.glitch_probability:
            measured += self.glitch_magnitude_deg
        data = self.push([measured], timestamp)
        return None if data is None else float(data[0])


class SimulatedAccelerometer(AccelerometerStream):
    """
    Accelerometer stream generated from a device attitude.
    Pitch/roll follow the same convention as ``pitch_roll_from_accel``.
    """
    def __init__(
        self,
        stream_id: str = "accel_sim",
        gravity: float = 9.81,
        white_noise_std: float = 0.0,
        seed: Optional[int] = None,
        **kwargs
    ):
        super().__init__(stream_id, **kwargs)
        self.gravity = gravity
        self.white_noise_std = white_noise_std
        self.rng = np.random.default_rng(seed)

    @staticmethod
    def gravity_vector(pitch_deg: float, roll_deg: float, gravity: float = 9.81) -> np.ndarray:
        """Device-frame gravity reading for a static attitude."""
        p, r = np.radians(pitch_deg), np.radians(roll_deg)
        return gravity * np.array([
            -np.sin(p),
            np.cos(p) * np.sin(r),
            np.cos(p) * np.cos(r)
        ])

    def step(self, pitch_deg: float, roll_deg: float, timestamp: float) -> Optional[np.ndarray]:
        measured = self.gravity_vector(pitch_deg, roll_deg, self.gravity)
        if self.white_noise_std > 0.0:
            measured = measured + self.white_noise_std * self.rng.standard_normal(3)
        return self.push(measured, timestamp)
