"""Event log writers."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable

from ..domain.event_log import LogMessage

_FIELDS = ["id", "timestamp", "type", "message", "regionCode", "gpcId"]


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_events_json(events: Iterable[LogMessage], outdir: str | Path, filename: str = "events.json") -> Path:
    """Save log entries, newest first, as a JSON list."""
    path = _ensure_outdir(outdir) / filename
    with path.open("w", encoding="utf-8") as f:
        json.dump([event.to_dict() for event in events], f, ensure_ascii=False, indent=2)
    return path


def save_events_csv(events: Iterable[LogMessage], outdir: str | Path, filename: str = "events.csv") -> Path:
    """Save log entries, newest first, as CSV."""
    path = _ensure_outdir(outdir) / filename
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=_FIELDS)
        writer.writeheader()
        for event in events:
            row = event.to_dict()
            writer.writerow({key: "" if row[key] is None else row[key] for key in _FIELDS})
    return path
