import logging
from pathlib import Path

import numpy as np
import pandas as pd

from tourguide.filters import HeadingPipeline
from tourguide.geo import AddressResolver, CaptureSession, DeclinationTracker, destination_point
from tourguide.sensors import (
    PositionFix,
    PositionTracker,
    SimulatedAccelerometer,
    SimulatedHeadingSource,
)
from tourguide.util import load_sensor_log, plot_heading_trace, replay_log

"""
HEADING SIMULATION:
    0-4 s  : phone flat on a table facing north, jiggled by hand (calibration)
    4-20 s : phone held upright, user turns from 40 deg to face east
    12-13 s: user glances at the screen (phone tilted back, samples gated)

The compass carries a 73.5 deg bias, noise and occasional 170 deg glitches.
A fake geocoder answers with a house only 16 m east of the start point.
"""

SAVE_DIR = Path("examples") / "images"
SAVE_DIR.mkdir(parents=True, exist_ok=True)

DATA_DIR = Path("examples") / "data"
DATA_DIR.mkdir(parents=True, exist_ok=True)

START = (52.5200, 13.4050)
HOUSE = destination_point(*START, 90.0, 16.0)


def fake_geocoder(lat, lon):
    """Pretends there is one house 16 m due east; everything else is road."""
    if abs(lat - HOUSE[0]) < 2e-5 and abs(lon - HOUSE[1]) < 2e-5:
        return {"address": {"city": "Berlin", "road": "Spandauer Strasse", "house_number": "2"},
                "display_name": "2, Spandauer Strasse, Berlin", "type": "house"}
    return {"address": {"city": "Berlin", "road": "Spandauer Strasse"}, "type": "residential"}


def true_motion(i, t):
    """Returns (true heading, pitch, roll) of the phone at step i / time t."""
    if t < 4.0:
        return (6.0 if i % 2 else -6.0), 0.0, 0.0
    heading = 40.0 + 50.0 * min((t - 4.0) / 10.0, 1.0)
    pitch = 30.0 if 12.0 <= t < 13.0 else 90.0
    return heading, pitch, 0.0


def heading_sim():
    dt = 1 / 20  # 20 Hz
    total_duration = 20.0
    n_steps = int(total_duration / dt)

    compass = SimulatedHeadingSource(bias_deg=73.5, white_noise_std=1.5,
                                     glitch_probability=0.0, seed=42)
    accel = SimulatedAccelerometer(white_noise_std=0.05, seed=42)

    rows = []
    print(f"\nSimulating {total_duration} seconds at {1/dt:.0f} Hz ({n_steps} steps)...")
    for i in range(n_steps):
        t = i * dt
        true_heading, pitch, roll = true_motion(i, t)
        compass.glitch_probability = 0.02 if t >= 4.0 else 0.0
        a = accel.step(pitch, roll, t)
        h = compass.step(true_heading, t)
        rows.append({
            "time": t, "heading": h, "true_heading": true_heading,
            "ax": a[0], "ay": a[1], "az": a[2],
            "lat": START[0], "lon": START[1], "accuracy": 8.0,
        })

    csv_path = DATA_DIR / "heading_sim.csv"
    pd.DataFrame(rows).to_csv(csv_path, index=False)
    print(f"Sensor log saved to '{csv_path}'")

    # ===========================================================================
    # PLAYBACK
    # ===========================================================================
    pipeline = HeadingPipeline()
    tracker = PositionTracker()
    trace = replay_log(load_sensor_log(csv_path), pipeline, tracker=tracker)

    true_heading = np.array([r["true_heading"] for r in rows])
    steady = (~trace["calibrating"] & trace["heading"].notna()).to_numpy()
    error = (trace["heading"].to_numpy()[steady] - true_heading[steady] + 540.0) % 360.0 - 180.0
    print(f"Calibration offset: {pipeline.state.calibration_offset:.1f} deg")
    print(f"Glitches rejected: {pipeline.filter.glitch_count}")
    print(f"Steady-state heading error: mean {np.mean(error):.2f} deg, max {np.max(np.abs(error)):.2f} deg")

    # ===========================================================================
    # CAPTURE
    # ===========================================================================
    declination = DeclinationTracker(lambda lat, lon: 0.0)
    session = CaptureSession(pipeline, AddressResolver(fake_geocoder), tracker, declination)
    session.on_position(PositionFix(*START, accuracy_m=8.0, timestamp=total_duration))
    result = session.capture()
    print(f"Capture: {result.status.value} after {len(result.probes)} lookups -> '{result.message}'")

    # ===========================================================================
    # PLOTTING
    # ===========================================================================
    fig_filename = "heading_sim_results.png"
    plot_heading_trace(trace, path=SAVE_DIR / fig_filename,
                       title="Heading pipeline (bias 73.5 deg, glitches 2%)")
    print(f"\nPlot saved as '{fig_filename}' in the '{SAVE_DIR}' directory.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    heading_sim()
