"""Unit tests for the simulation driver lifecycle and tick loop."""

from __future__ import annotations

import logging

import pytest

from gatesim.config import SimulationConfig
from gatesim.domain import Region, RegionState
from gatesim.errors import SimulationStateError, TopologyError
from gatesim.pipeline import ScriptedDraws, Transition, build_default_rules, create_rule_registry
from gatesim.services import DriverState, SimulationDriver


pytestmark = pytest.mark.unit

MANIFEST = [
    {"id": "1", "countryCode": "DE", "name": "Germany", "state": "IDLE"},
    {"id": "2", "countryCode": "FR", "name": "France", "state": "IDLE"},
]


def _running_driver(draws: ScriptedDraws, **kwargs: object) -> SimulationDriver:
    driver = SimulationDriver(draws=draws, **kwargs)  # type: ignore[arg-type]
    assert driver.load(MANIFEST)
    driver.start()
    return driver


def test_new_driver_is_uninitialized() -> None:
    driver = SimulationDriver(draws=ScriptedDraws())
    assert driver.state is DriverState.UNINITIALIZED
    assert driver.virtual_time == -1
    assert driver.regions == ()
    assert driver.logs[0].message.startswith("Initializing 22-Gate")
    with pytest.raises(SimulationStateError):
        driver.tick()
    with pytest.raises(SimulationStateError):
        driver.start()


def test_load_arms_clock_at_zero() -> None:
    driver = SimulationDriver(draws=ScriptedDraws())
    assert driver.load(MANIFEST)
    assert driver.state is DriverState.ARMED
    assert driver.virtual_time == 0
    assert len(driver.regions) == 2
    assert all(r.current_gate_id == "PRE" and r.progress == 0 for r in driver.regions)
    assert driver.logs[0].message == "Loaded external schedule manifest. Virtual Clock engaged."
    with pytest.raises(SimulationStateError):
        driver.tick()


def test_failed_load_is_reported_and_final(caplog: pytest.LogCaptureFixture) -> None:
    driver = SimulationDriver(draws=ScriptedDraws())
    with caplog.at_level(logging.ERROR, logger="gatesim"):
        assert driver.load("not a manifest") is False

    assert driver.state is DriverState.UNINITIALIZED
    assert driver.virtual_time == -1
    assert driver.load_error is not None
    assert "Failed to load region manifest" in caplog.text
    with pytest.raises(SimulationStateError):
        driver.load(MANIFEST)


def test_autostart_goes_straight_to_running() -> None:
    driver = SimulationDriver(draws=ScriptedDraws(), config=SimulationConfig(autostart=True))
    driver.load(MANIFEST)
    assert driver.state is DriverState.RUNNING


def test_tick_applies_engine_to_every_region() -> None:
    driver = _running_driver(ScriptedDraws(floats=[0.1, 0.9]))

    report = driver.tick()

    assert report.virtual_time == 1
    assert driver.virtual_time == 1
    first, second = driver.regions
    assert first.state is RegionState.PROCESSING
    assert second.state is RegionState.IDLE
    assert len(report.events) == 1
    assert driver.logs[0] == report.events[0]
    assert driver.logs[0].timestamp == 1
    assert driver.logs[0].region_code == "DE"
    assert driver.history[-1]["virtual_time"] == 1
    assert driver.history[-1]["PROCESSING"] == 1


def test_history_keeps_only_latest_rows() -> None:
    driver = _running_driver(ScriptedDraws(floats=[0.9] * 10), config=SimulationConfig(history_capacity=3))

    driver.run_ticks(5)

    assert [row["virtual_time"] for row in driver.history] == [3, 4, 5]
    assert all(row["IDLE"] == 2 for row in driver.history)


def test_pause_freezes_clock_and_regions() -> None:
    driver = _running_driver(ScriptedDraws(floats=[0.9, 0.9, 0.9, 0.9]))
    driver.tick()
    driver.pause()
    frozen = driver.regions

    with pytest.raises(SimulationStateError):
        driver.tick()
    assert driver.virtual_time == 1
    assert driver.regions == frozen

    driver.start()
    driver.tick()
    assert driver.virtual_time == 2


def test_failing_region_is_isolated(caplog: pytest.LogCaptureFixture) -> None:
    def boom(region: Region, ctx: object) -> Transition:
        raise RuntimeError("rule exploded")

    rules = build_default_rules()
    rules[RegionState.IDLE] = boom
    driver = SimulationDriver(draws=ScriptedDraws(floats=[0.01]), registry=create_rule_registry(rules))
    driver.load(
        [
            {"id": "1", "countryCode": "DE", "name": "Germany", "state": "IDLE"},
            {"id": "2", "countryCode": "FR", "name": "France", "state": "PASSED"},
        ]
    )
    driver.start()

    with caplog.at_level(logging.ERROR, logger="gatesim"):
        report = driver.tick()

    assert report.failed_region_ids == ("1",)
    assert driver.store.get("1").state is RegionState.IDLE
    assert driver.store.get("2").state is RegionState.PROCESSING
    assert "rule exploded" in caplog.text


def test_topology_violation_propagates() -> None:
    def teleport(region: Region, ctx: object) -> Transition:
        return Transition(region.evolve(current_phase_id="PHASE1", current_gate_id="GPC9"))

    rules = build_default_rules()
    rules[RegionState.IDLE] = teleport
    driver = _running_driver(ScriptedDraws(), registry=create_rule_registry(rules))

    with pytest.raises(TopologyError):
        driver.tick()


def test_selection_does_not_touch_simulation() -> None:
    driver = _running_driver(ScriptedDraws())
    before = driver.regions

    selection = driver.select("2", "GPC3")

    assert selection.region_id == "2"
    assert selection.gate_id == "GPC3"
    assert driver.regions == before
    with pytest.raises(KeyError):
        driver.select("missing")
    with pytest.raises(TopologyError):
        driver.select("1", "GPC99")
    driver.clear_selection()
    assert driver.selection is None


def test_metrics_summary() -> None:
    driver = SimulationDriver(draws=ScriptedDraws())
    driver.load(
        [
            {"id": "1", "countryCode": "DE", "name": "Germany", "state": "PASSED"},
            {"id": "2", "countryCode": "FR", "name": "France", "state": "IDLE"},
        ]
    )
    summary = driver.metrics()
    assert summary.total == 2
    assert summary.completion_percentage == 50
    assert [r.id for r in summary.completed_regions] == ["1"]
