"""Analysis helpers for simulation snapshots."""

from .metrics import (
    PRIORITY_ORDER,
    MetricsSummary,
    completion_percentage,
    gate_status,
    phase_status,
    sort_by_priority,
    state_counts,
    summarize,
)

__all__ = [
    "PRIORITY_ORDER",
    "MetricsSummary",
    "completion_percentage",
    "gate_status",
    "phase_status",
    "sort_by_priority",
    "state_counts",
    "summarize",
]
