# -*- coding: utf-8 -*-
"""
Filename: config.py
Description: Tunables for the heading pipeline and the facing-address search.
             Every component takes these as keyword-argument defaults, so a caller
             overrides a value per instance rather than editing this module.
"""

# --- Calibration --------------------------------------------------------
NUM_CALIBRATION_SAMPLES = 50
CALIBRATION_TIMEOUT_S = 10.0
MOVEMENT_THRESHOLD_DEG = 2.0      # min arc between two accepted calibration samples
CALIBRATION_MESSAGE = "Calibrating..."

# --- Heading filter -----------------------------------------------------
HEADING_SMOOTHING = 0.1           # first-order gain on the shortest-arc difference
GLITCH_THRESHOLD_DEG = 150.0      # larger jumps are sensor-fusion glitches

# --- Display smoother ---------------------------------------------------
DISPLAY_ALPHA = 0.18
DISPLAY_TICK_S = 0.05             # 20 Hz

# --- Tilt detection -----------------------------------------------------
TILT_LIMIT_DEG = 30.0             # pitch/roll limit while the phone lies flat
TILT_Z_RATIO = 0.5                # |z|/|g| limit while the phone is held upright

# --- Position -----------------------------------------------------------
MAX_FIX_ACCURACY_M = 50.0
POSITION_WINDOW = 5

# --- Magnetic declination ----------------------------------------------
DECLINATION_REFRESH_M = 1000.0
DECLINATION_MAX_AGE_S = 6 * 3600.0
DECLINATION_RETRY_S = 60.0

# --- Address search -----------------------------------------------------
SEARCH_START_M = 1.0
SEARCH_MAX_M = 64.0
EARTH_RADIUS_M = 6371000.0

# --- Reverse geocoding request -----------------------------------------
GEOCODE_ZOOM = 18
