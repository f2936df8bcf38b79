from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd
from matplotlib.figure import Figure


def plot_heading_trace(trace: pd.DataFrame, path: Optional[str] = None, title: str = "Heading trace") -> Figure:
    """
    Plot raw, filtered and display headings from a ``replay_log`` trace.

    Calibration windows are shaded. The figure is built without pyplot so it
    works on headless machines; pass ``path`` to save it as an image.
    """
    fig = Figure(figsize=(12, 5))
    ax = fig.add_subplot(1, 1, 1)

    t = trace["time"].to_numpy(dtype=float)
    ax.plot(t, trace["raw"].to_numpy(dtype=float), 'r.', markersize=3, label='Raw', alpha=0.6)
    ax.plot(t, trace["heading"].to_numpy(dtype=float), 'b-', linewidth=2, label='Filtered', alpha=0.8)
    ax.plot(t, trace["display"].to_numpy(dtype=float), 'g--', linewidth=1, label='Display', alpha=0.8)

    if "calibrating" in trace.columns and len(t):
        calibrating = trace["calibrating"].to_numpy(dtype=bool)
        ax.fill_between(t, 0, 360, where=calibrating, color='grey', alpha=0.15, label='Calibrating')

    ax.set_ylim(0, 360)
    ax.set_yticks(np.arange(0, 361, 45))
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Heading (deg)')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend(loc='upper right')
    fig.tight_layout()

    if path is not None:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out, dpi=150, bbox_inches='tight')
    return fig
