"""Simulation driver built on top of the transition engine."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterable

from ..analysis.metrics import MetricsSummary, completion_percentage, state_counts, summarize
from ..config.models import SimulationConfig
from ..domain.event_log import EventLog, LogEvent, LogMessage, LogType
from ..domain.region import Region, RegionState
from ..domain.store import RegionStore
from ..domain.topology import DEFAULT_TOPOLOGY, PipelineTopology
from ..errors import ManifestError, SimulationStateError, TopologyError
from ..manifest import load_manifest, parse_manifest
from ..pipeline.draws import DrawSource, GeneratorDraws
from ..pipeline.engine import advance
from ..pipeline.registry import StateRuleRegistry
from ..pipeline.rules import Rule

logger = logging.getLogger(__name__)


class DriverState(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    ARMED = "ARMED"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"


class SimulationClock:
    """Virtual hour counter; -1 until armed."""

    def __init__(self) -> None:
        self._now = -1

    @property
    def now(self) -> int:
        return self._now

    @property
    def armed(self) -> bool:
        return self._now >= 0

    def arm(self) -> None:
        self._now = 0

    def advance(self) -> int:
        if not self.armed:
            raise SimulationStateError("Clock is not armed.")
        self._now += 1
        return self._now


@dataclass(frozen=True)
class TickReport:
    virtual_time: int
    events: tuple[LogMessage, ...]
    failed_region_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class Selection:
    """Consumer focus on a region and optionally one of its gates."""

    region_id: str
    gate_id: str | None = None


class SimulationDriver:
    """Owns clock, store and log, and runs one engine pass per tick.

    Lifecycle: UNINITIALIZED until a manifest loads, then ARMED, then
    RUNNING/PAUSED under ``start``/``pause``. A failed load is reported
    and leaves the driver UNINITIALIZED for good.
    """

    def __init__(
        self,
        *,
        topology: PipelineTopology = DEFAULT_TOPOLOGY,
        config: SimulationConfig | None = None,
        draws: DrawSource | None = None,
        registry: StateRuleRegistry[Rule] | None = None,
    ) -> None:
        self.topology = topology
        self.config = SimulationConfig() if config is None else config
        self.draws = GeneratorDraws(seed=self.config.seed) if draws is None else draws
        self.registry = registry

        self.clock = SimulationClock()
        self.store = RegionStore(topology)
        self.log = EventLog(capacity=self.config.log_capacity)
        self._state = DriverState.UNINITIALIZED
        self._load_attempted = False
        self._selection: Selection | None = None
        self._history: deque[dict[str, int]] = deque(maxlen=self.config.history_capacity)
        self.load_error: Exception | None = None

        self._system(f"Initializing {len(topology)}-Gate Global Payroll Controls Virtual Simulation Engine...")

    # --- read-only views -------------------------------------------------

    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is DriverState.RUNNING

    @property
    def virtual_time(self) -> int:
        return self.clock.now

    @property
    def regions(self) -> tuple[Region, ...]:
        return self.store.snapshot()

    @property
    def logs(self) -> tuple[LogMessage, ...]:
        return self.log.snapshot()

    @property
    def selection(self) -> Selection | None:
        return self._selection

    @property
    def history(self) -> list[dict[str, int]]:
        return [dict(row) for row in self._history]

    def metrics(self) -> MetricsSummary:
        return summarize(self.store.snapshot())

    # --- loading ---------------------------------------------------------

    def _system(self, message: str) -> LogMessage:
        return self.log.append(LogEvent(type=LogType.SYSTEM, message=message), self.clock.now)

    def load_regions(self, regions: Iterable[Region]) -> bool:
        """Arm the simulation with already-built regions."""
        return self._arm(lambda: list(regions))

    def load(self, data: Any) -> bool:
        """Arm the simulation from a decoded manifest payload."""
        return self._arm(lambda: parse_manifest(data, self.topology))

    def load_file(self, path: str | Path) -> bool:
        """Arm the simulation from a manifest file."""
        return self._arm(lambda: load_manifest(path, self.topology))

    def _arm(self, loader) -> bool:
        if self._load_attempted:
            raise SimulationStateError("Manifest has already been requested for this simulation.")
        self._load_attempted = True

        try:
            regions = loader()
            self.store.load(regions)
        except (ManifestError, TopologyError, ValueError) as exc:
            self.load_error = exc
            logger.error("Failed to load region manifest: %s", exc)
            return False

        self.clock.arm()
        self._state = DriverState.ARMED
        self._system("Loaded external schedule manifest. Virtual Clock engaged.")
        logger.info("Simulation armed with %d regions", len(self.store))
        if self.config.autostart:
            self.start()
        return True

    # --- controls --------------------------------------------------------

    def start(self) -> None:
        if self._state not in (DriverState.ARMED, DriverState.PAUSED):
            raise SimulationStateError(f"Cannot start from state {self._state.value}.")
        self._state = DriverState.RUNNING
        logger.info("Simulation running at VT %d", self.clock.now)

    def pause(self) -> None:
        if self._state is not DriverState.RUNNING:
            raise SimulationStateError(f"Cannot pause from state {self._state.value}.")
        self._state = DriverState.PAUSED
        logger.info("Simulation paused at VT %d", self.clock.now)

    def select(self, region_id: str, gate_id: str | None = None) -> Selection:
        """Record consumer focus; simulation state is untouched."""
        if region_id not in self.store:
            raise KeyError(region_id)
        if gate_id is not None:
            self.topology.gate(gate_id)
        self._selection = Selection(region_id=region_id, gate_id=gate_id)
        return self._selection

    def clear_selection(self) -> None:
        self._selection = None

    # --- ticking ---------------------------------------------------------

    def tick(self) -> TickReport:
        """Advance the clock one hour and evaluate every region once."""
        if self._state is not DriverState.RUNNING:
            raise SimulationStateError(f"Cannot tick from state {self._state.value}.")

        vt = self.clock.advance()
        cfg = self.config
        updates: list[Region] = []
        events: list[LogEvent] = []
        failed: list[str] = []

        for region in self.store.snapshot():
            try:
                transition = advance(
                    region,
                    vt,
                    draws=self.draws,
                    topology=self.topology,
                    probabilities=cfg.probabilities,
                    issue_exempt_gates=cfg.issue_exempt_gates,
                    registry=self.registry,
                )
            except TopologyError:
                raise
            except Exception:
                logger.exception("Transition failed for region %s at VT %d", region.id, vt)
                failed.append(region.id)
                continue
            if transition.region is not region:
                updates.append(transition.region)
            if transition.event is not None:
                events.append(transition.event)

        for region in updates:
            self.store.apply(region)
        stamped = tuple(self.log.append(event, vt) for event in events)

        counts = state_counts(self.store.snapshot())
        row: dict[str, int] = {"virtual_time": vt, **counts}
        row["completion_percentage"] = completion_percentage(counts[RegionState.PASSED.value], len(self.store))
        self._history.append(row)

        logger.debug("VT %d: %d events, %d failed", vt, len(stamped), len(failed))
        return TickReport(virtual_time=vt, events=stamped, failed_region_ids=tuple(failed))

    def run_ticks(self, count: int) -> list[TickReport]:
        """Tick ``count`` times synchronously."""
        return [self.tick() for _ in range(count)]


def build_simulation_driver(
    config: SimulationConfig | None = None,
    *,
    topology: PipelineTopology = DEFAULT_TOPOLOGY,
    draws: DrawSource | None = None,
) -> SimulationDriver:
    """Create a driver with the default rule set."""
    return SimulationDriver(topology=topology, config=config, draws=draws)
