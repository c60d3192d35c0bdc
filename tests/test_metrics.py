"""Aggregate metric tests."""

from __future__ import annotations

import pytest

from gatesim.analysis import completion_percentage, gate_status, phase_status, sort_by_priority, state_counts, summarize
from gatesim.domain import DEFAULT_TOPOLOGY, IssueDetails, Region, RegionState


pytestmark = pytest.mark.unit


def _region(region_id: str, state: RegionState, gate: str = "PRE") -> Region:
    issue = IssueDetails("T", "d") if state in (RegionState.ERROR, RegionState.AUTO_HEALING, RegionState.LATE) else None
    return Region(
        id=region_id,
        country_code=region_id,
        name=region_id,
        current_phase_id=DEFAULT_TOPOLOGY.gate(gate).phase_id,
        current_gate_id=gate,
        state=state,
        issue=issue,
    )


def test_completion_percentage_rounds_half_up() -> None:
    assert completion_percentage(1, 8) == 13
    assert completion_percentage(1, 3) == 33
    assert completion_percentage(0, 0) == 0
    assert completion_percentage(4, 4) == 100


def test_priority_sort_is_stable() -> None:
    regions = [
        _region("a", RegionState.PASSED),
        _region("b", RegionState.PROCESSING),
        _region("c", RegionState.ERROR),
        _region("d", RegionState.PROCESSING),
        _region("e", RegionState.LATE),
    ]
    assert [r.id for r in sort_by_priority(regions)] == ["c", "e", "b", "d", "a"]


def test_summary_groups() -> None:
    regions = [
        _region("a", RegionState.PASSED),
        _region("b", RegionState.ERROR),
        _region("c", RegionState.AUTO_HEALING),
        _region("d", RegionState.SCHEDULED),
    ]
    summary = summarize(regions)
    assert summary.counts == state_counts(regions)
    assert summary.counts["SCHEDULED"] == 1
    assert summary.completion_percentage == 25
    assert [r.id for r in summary.issue_regions] == ["b", "c"]
    assert [r.id for r in summary.error_regions] == ["b"]
    assert summary.processing_regions == ()
    assert summary.to_dict()["total"] == 4


def test_gate_and_phase_status() -> None:
    region = _region("a", RegionState.PROCESSING, gate="GPC5")
    assert gate_status(DEFAULT_TOPOLOGY, region, "GPC4") == "past"
    assert gate_status(DEFAULT_TOPOLOGY, region, "GPC5") == "active"
    assert gate_status(DEFAULT_TOPOLOGY, region, "GPC21") == "future"
    assert phase_status(DEFAULT_TOPOLOGY, region, "PHASE2") == "active"
