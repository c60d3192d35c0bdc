from __future__ import annotations

import importlib
from dataclasses import dataclass

from .config.models import SimulationConfig
from .domain.region import ISSUE_STATES
from .services.simulation_service import build_simulation_driver

SMOKE_MANIFEST = [
    {"id": "r1", "countryCode": "DE", "name": "Germany", "scheduleDropTime": "2"},
    {"id": "r2", "countryCode": "FR", "name": "France", "scheduleDropTime": 5},
    {"id": "r3", "countryCode": "JP", "name": "Japan", "state": "IDLE"},
]


@dataclass
class CheckRow:
    name: str
    ok: bool
    detail: str


@dataclass
class SelfCheckReport:
    rows: list[CheckRow]

    @property
    def ok(self) -> bool:
        return all(row.ok for row in self.rows)

    def to_text(self) -> str:
        lines: list[str] = []
        for row in self.rows:
            status = "OK" if row.ok else "FAIL"
            lines.append(f"[{status}] {row.name}: {row.detail}")
        lines.append(f"overall: {'OK' if self.ok else 'FAIL'}")
        return "\n".join(lines)


def _smoke(ticks: int = 200) -> CheckRow:
    driver = build_simulation_driver(SimulationConfig(seed=1234, autostart=True))
    if not driver.load(SMOKE_MANIFEST):
        return CheckRow("smoke", False, f"manifest load failed: {driver.load_error}")

    topology = driver.topology
    for _ in range(ticks):
        report = driver.tick()
        if report.failed_region_ids:
            return CheckRow("smoke", False, f"VT {report.virtual_time}: failed {report.failed_region_ids}")
        for region in driver.regions:
            if not 0 <= region.progress <= 100:
                return CheckRow("smoke", False, f"{region.id} progress {region.progress}")
            if not topology.contains(region.current_phase_id, region.current_gate_id):
                return CheckRow("smoke", False, f"{region.id} at invalid position")
            if region.has_issue != (region.state in ISSUE_STATES):
                return CheckRow("smoke", False, f"{region.id} issue/state mismatch")
    if len(driver.logs) > driver.log.capacity:
        return CheckRow("smoke", False, "event log exceeded capacity")
    return CheckRow("smoke", True, f"VT={driver.virtual_time}, logs={len(driver.logs)}")


def run_selfcheck(*, smoke: bool = True) -> SelfCheckReport:
    rows: list[CheckRow] = []

    for module_name in ("numpy", "yaml", "matplotlib"):
        try:
            mod = importlib.import_module(module_name)
            version = getattr(mod, "__version__", "unknown")
            rows.append(CheckRow(module_name, True, f"version={version}"))
        except Exception as exc:
            rows.append(CheckRow(module_name, False, str(exc)))

    if smoke and all(row.ok for row in rows):
        try:
            rows.append(_smoke())
        except Exception as exc:
            rows.append(CheckRow("smoke", False, str(exc)))

    return SelfCheckReport(rows=rows)
