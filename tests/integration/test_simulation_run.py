"""Integration tests for long seeded simulation runs."""

from __future__ import annotations

from pathlib import Path

import pytest

from gatesim.config import SimulationConfig
from gatesim.domain import ISSUE_STATES, DEFAULT_TOPOLOGY, RegionState
from gatesim.export import export_results
from gatesim.selfcheck import run_selfcheck
from gatesim.services import build_simulation_driver


pytestmark = pytest.mark.integration

EXAMPLES = Path(__file__).resolve().parents[2] / "examples"


def _driver(seed: int):
    driver = build_simulation_driver(SimulationConfig(seed=seed, autostart=True))
    assert driver.load_file(EXAMPLES / "demo_schedule.yaml")
    return driver


def test_invariants_hold_over_long_run() -> None:
    driver = _driver(seed=2024)
    topo = DEFAULT_TOPOLOGY
    seen_ids: set[str] = {entry.id for entry in driver.logs}

    for _ in range(600):
        before = {r.id: r for r in driver.regions}
        report = driver.tick()
        assert report.failed_region_ids == ()

        for region in driver.regions:
            prev = before[region.id]
            assert 0 <= region.progress <= 100
            assert topo.contains(region.current_phase_id, region.current_gate_id)
            assert region.has_issue == (region.state in ISSUE_STATES)

            if region.current_gate_id != prev.current_gate_id:
                restarted = prev.state is RegionState.PASSED and region.current_gate_id == topo.first_gate.id
                stepped = topo.gate_index(region.current_gate_id) == topo.gate_index(prev.current_gate_id) + 1
                assert restarted or stepped
                assert region.progress == 0
            if region.state is RegionState.PASSED and prev.state is not RegionState.PASSED:
                assert region.progress == 100
                assert region.current_gate_id == topo.last_gate.id

        assert len(driver.logs) <= 50
        for entry in report.events:
            assert entry.id not in seen_ids
            seen_ids.add(entry.id)

    assert driver.virtual_time == 600
    assert sum(driver.metrics().counts.values()) == 8


def test_same_seed_reproduces_run() -> None:
    a = _driver(seed=99)
    b = _driver(seed=99)
    a.run_ticks(120)
    b.run_ticks(120)

    assert a.regions == b.regions
    assert [(e.id, e.message) for e in a.logs] == [(e.id, e.message) for e in b.logs]


def test_export_after_run(tmp_path: Path) -> None:
    driver = _driver(seed=1)
    driver.run_ticks(40)

    written = export_results(driver, tmp_path, ["json", "csv", "png"])

    names = sorted(p.name for p in written)
    assert names == ["events.csv", "events.json", "history.csv", "history.png"]
    lines = (tmp_path / "history.csv").read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("virtual_time,")
    assert len(lines) == 41
    with pytest.raises(ValueError, match="Unsupported"):
        export_results(driver, tmp_path, ["xml"])


def test_selfcheck_smoke_passes() -> None:
    report = run_selfcheck(smoke=True)
    assert report.ok, report.to_text()
