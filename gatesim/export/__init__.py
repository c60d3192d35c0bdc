"""Export writers for event logs and tick history."""

from .events_writer import save_events_csv, save_events_json
from .history_writer import save_history_csv, save_history_png
from .manager import VALID_FORMATS, export_results

__all__ = [
    "VALID_FORMATS",
    "export_results",
    "save_events_csv",
    "save_events_json",
    "save_history_csv",
    "save_history_png",
]
