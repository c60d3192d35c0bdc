"""Tick history writers."""

from __future__ import annotations

import csv
from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)
import matplotlib.pyplot as plt
import numpy as np

from ..domain.region import RegionState

STATE_COLORS = {
    RegionState.ERROR.value: "#d62728",
    RegionState.AUTO_HEALING.value: "#ff7f0e",
    RegionState.LATE.value: "#bcbd22",
    RegionState.PROCESSING.value: "#1f77b4",
    RegionState.SCHEDULED.value: "#9467bd",
    RegionState.IDLE.value: "#7f7f7f",
    RegionState.PASSED.value: "#2ca02c",
}


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_history_csv(history: list[dict[str, int]], outdir: str | Path, filename: str = "history.csv") -> Path:
    """Save per-tick state counts into CSV."""
    path = _ensure_outdir(outdir) / filename
    fieldnames: list[str] = []
    for row in history:
        for key in row.keys():
            if key not in fieldnames:
                fieldnames.append(key)
    if not fieldnames:
        fieldnames = ["virtual_time", *STATE_COLORS, "completion_percentage"]

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in history:
            writer.writerow(row)
    return path


def save_history_png(history: list[dict[str, int]], outdir: str | Path, filename: str = "history.png") -> Path:
    """Save stacked state counts and completion percentage vs virtual time."""
    if not history:
        raise ValueError("History is empty; nothing to plot.")

    t = np.asarray([row["virtual_time"] for row in history], dtype=float)
    states = list(STATE_COLORS)
    counts = np.asarray([[row.get(state, 0) for row in history] for state in states], dtype=float)
    pct = np.asarray([row.get("completion_percentage", 0) for row in history], dtype=float)

    path = _ensure_outdir(outdir) / filename
    fig, axes = plt.subplots(nrows=2, ncols=1, figsize=(7.2, 6.0), dpi=140, sharex=True)

    axes[0].stackplot(t, counts, labels=states, colors=[STATE_COLORS[s] for s in states], alpha=0.85)
    axes[0].set_ylabel("regions")
    axes[0].legend(loc="upper left", fontsize=7, ncol=4)
    axes[0].grid(alpha=0.3)

    axes[1].plot(t, pct, color="#2ca02c", lw=1.6)
    axes[1].set_ylabel("completion [%]")
    axes[1].set_ylim(0.0, 100.0)
    axes[1].set_xlabel("virtual hour")
    axes[1].grid(alpha=0.3)

    fig.suptitle("Region state history", y=0.995)
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path
