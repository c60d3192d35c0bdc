"""Aggregate metrics derived from region snapshots."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..domain.region import ISSUE_STATES, Region, RegionState
from ..domain.topology import PipelineTopology, Position

PRIORITY_ORDER: dict[RegionState, int] = {
    RegionState.ERROR: 0,
    RegionState.AUTO_HEALING: 1,
    RegionState.LATE: 2,
    RegionState.PROCESSING: 3,
    RegionState.SCHEDULED: 4,
    RegionState.IDLE: 5,
    RegionState.PASSED: 6,
}


def sort_by_priority(regions: Iterable[Region]) -> list[Region]:
    """Most urgent first; ties keep their input order."""
    return sorted(regions, key=lambda r: PRIORITY_ORDER[r.state])


def state_counts(regions: Iterable[Region]) -> dict[str, int]:
    counts = {state.value: 0 for state in RegionState}
    for region in regions:
        counts[region.state.value] += 1
    return counts


def completion_percentage(completed: int, total: int) -> int:
    """Rounded share of completed regions; halves round up."""
    return int(math.floor(completed / max(total, 1) * 100 + 0.5))


@dataclass(frozen=True)
class MetricsSummary:
    total: int
    counts: dict[str, int]
    completion_percentage: int
    sorted_regions: tuple[Region, ...] = field(default_factory=tuple)

    def _with_state(self, *states: RegionState) -> tuple[Region, ...]:
        return tuple(r for r in self.sorted_regions if r.state in states)

    @property
    def issue_regions(self) -> tuple[Region, ...]:
        return self._with_state(*ISSUE_STATES)

    @property
    def error_regions(self) -> tuple[Region, ...]:
        return self._with_state(RegionState.ERROR)

    @property
    def completed_regions(self) -> tuple[Region, ...]:
        return self._with_state(RegionState.PASSED)

    @property
    def processing_regions(self) -> tuple[Region, ...]:
        return self._with_state(RegionState.PROCESSING)

    def to_dict(self) -> dict[str, object]:
        return {
            "total": self.total,
            "counts": dict(self.counts),
            "completion_percentage": self.completion_percentage,
        }


def summarize(regions: Sequence[Region]) -> MetricsSummary:
    """Counts by state, completion percentage and priority ordering."""
    counts = state_counts(regions)
    return MetricsSummary(
        total=len(regions),
        counts=counts,
        completion_percentage=completion_percentage(counts[RegionState.PASSED.value], len(regions)),
        sorted_regions=tuple(sort_by_priority(regions)),
    )


def gate_status(topology: PipelineTopology, region: Region, gate_id: str) -> Position:
    """Where ``gate_id`` sits relative to the region's current gate."""
    return topology.gate_position(gate_id, region.current_gate_id)


def phase_status(topology: PipelineTopology, region: Region, phase_id: str) -> Position:
    return topology.phase_position(phase_id, region.current_phase_id)
