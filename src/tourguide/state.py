# -*- coding: utf-8 -*-
"""
Filename: state.py
Description: Shared sensor state cell read by the tilt detector, the calibration
             controller and the heading filter.

The cell has exactly one writer per field and phase:
    - ``tilted``             : TiltDetector
    - ``phase``              : CalibrationController
    - ``calibration_offset`` : CalibrationController (on completion only)

Calibration and steady-state filtering never run at the same time because both
consult ``phase`` before touching anything.
"""

from dataclasses import dataclass
from enum import Enum


class Phase(Enum):
    IDLE = "IDLE"                  # never calibrated
    COLLECTING = "COLLECTING"
    COMPLETING = "COMPLETING"
    STEADY_STATE = "STEADY_STATE"  # calibrated at least once, filtering live samples


@dataclass
class SensorState:
    phase: Phase = Phase.IDLE
    tilted: bool = False
    calibration_offset: float = 0.0
    calibrated_once: bool = False

    @property
    def is_calibrating(self) -> bool:
        return self.phase in (Phase.COLLECTING, Phase.COMPLETING)
