import logging
from pathlib import Path

import numpy as np
import pandas as pd

log = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("time", "heading")
ACCEL_COLUMNS = ("ax", "ay", "az")
POSITION_COLUMNS = ("lat", "lon")


def load_sensor_log(input_path: str) -> pd.DataFrame:
    """Load a recorded sensor log from CSV.

    Required columns: ``time`` (s) and ``heading`` (deg). Optional columns:
    ``ax, ay, az`` (accelerometer, any unit) and ``lat, lon, accuracy`` (position fix).

    Header whitespace is stripped and rows are sorted by time.
    """
    inp = Path(input_path)
    if not inp.exists():
        raise FileNotFoundError(f"Sensor log not found: {input_path}")

    df = pd.read_csv(inp)
    df.columns = df.columns.str.strip()

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Sensor log {inp.name} is missing required columns: {missing}")

    df = df.sort_values("time", kind="stable").reset_index(drop=True)
    log.info("[LOG] Loaded %d samples from %s", len(df), inp)
    return df


def _has_values(row, columns) -> bool:
    return all(c in row.index and pd.notna(row[c]) for c in columns)


def replay_log(frame: pd.DataFrame, pipeline, tracker=None) -> pd.DataFrame:
    """
    Feed a loaded sensor log through a heading pipeline in time order.

    Args:
        frame: DataFrame as returned by ``load_sensor_log``.
        pipeline: A ``HeadingPipeline`` (anything with ``on_accel``, ``on_heading``,
            ``advance``, ``set_clock`` and the ``heading``/``display_angle`` properties).
        tracker: Optional ``PositionTracker`` receiving the position columns.

    The pipeline is switched to log time (its clock reads the timestamp of the
    row being replayed) and calibration restarts at the first row, so the
    calibration timeout follows the recording. The pipeline keeps the log
    clock afterwards.

    Returns:
        DataFrame with columns ``time, raw, tilted, calibrating, heading, display``.
    """
    # local import keeps util free of a hard dependency on the sensors package
    from ..sensors.samples import PositionFix

    rows = []
    if frame.empty:
        return pd.DataFrame(columns=["time", "raw", "tilted", "calibrating", "heading", "display"])

    t_prev = float(frame["time"].iloc[0])
    log_time = [t_prev]
    pipeline.set_clock(lambda: log_time[0])
    pipeline.calibrate()

    for _, row in frame.iterrows():
        t = float(row["time"])
        log_time[0] = t

        if tracker is not None and _has_values(row, POSITION_COLUMNS):
            accuracy = float(row["accuracy"]) if _has_values(row, ("accuracy",)) else 0.0
            tracker.update(PositionFix(float(row["lat"]), float(row["lon"]), accuracy, timestamp=t))

        if _has_values(row, ACCEL_COLUMNS):
            pipeline.on_accel(float(row["ax"]), float(row["ay"]), float(row["az"]))

        raw = float(row["heading"])
        pipeline.on_heading(raw)
        pipeline.advance(max(t - t_prev, 0.0))
        t_prev = t

        heading = pipeline.heading
        rows.append({
            "time": t,
            "raw": raw,
            "tilted": pipeline.state.tilted,
            "calibrating": pipeline.is_calibrating,
            "heading": np.nan if heading is None else heading,
            "display": pipeline.display_angle,
        })

    return pd.DataFrame(rows)
