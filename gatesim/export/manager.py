"""Export manager orchestrating format-specific writers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..services.simulation_service import SimulationDriver
from .events_writer import save_events_csv, save_events_json
from .history_writer import save_history_csv, save_history_png

VALID_FORMATS = ("json", "csv", "png")


def export_results(driver: SimulationDriver, outdir: str | Path, formats: Iterable[str]) -> list[Path]:
    """Write the driver's log and history in the requested formats."""
    requested = {str(fmt).lower() for fmt in formats}
    unknown = requested - set(VALID_FORMATS)
    if unknown:
        raise ValueError(f"Unsupported export format(s): {sorted(unknown)}")

    out = Path(outdir)
    logs = driver.logs
    history = driver.history
    written: list[Path] = []

    if "json" in requested:
        written.append(save_events_json(logs, out))

    if "csv" in requested:
        written.append(save_events_csv(logs, out))
        written.append(save_history_csv(history, out))

    if "png" in requested and history:
        written.append(save_history_png(history, out))

    return written
