"""Static pipeline topology: phases, gates and canonical ordering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

from ..errors import TopologyError

Position = Literal["past", "active", "future"]


@dataclass(frozen=True)
class Gate:
    """Atomic control step."""

    id: str
    name: str
    phase_id: str


@dataclass(frozen=True)
class Phase:
    """Named group of consecutive gates."""

    id: str
    name: str
    short_name: str
    gates: tuple[Gate, ...]


def _compare(ref_idx: int, cur_idx: int) -> Position:
    if ref_idx < cur_idx:
        return "past"
    if ref_idx == cur_idx:
        return "active"
    return "future"


class PipelineTopology:
    """Ordered phases with O(1) index lookups over the canonical gate order.

    The canonical order is every phase's gates concatenated in phase order.
    All past/active/future comparisons use indices into that sequence.
    """

    def __init__(self, phases: Iterable[Phase]) -> None:
        self._phases: tuple[Phase, ...] = tuple(phases)
        if not self._phases:
            raise TopologyError("Topology must define at least one phase.")

        self._phase_index: dict[str, int] = {}
        self._gate_index: dict[str, int] = {}
        gates: list[Gate] = []

        for p_idx, phase in enumerate(self._phases):
            if phase.id in self._phase_index:
                raise TopologyError(f"Duplicate phase id '{phase.id}'.")
            if not phase.gates:
                raise TopologyError(f"Phase '{phase.id}' has no gates.")
            self._phase_index[phase.id] = p_idx
            for gate in phase.gates:
                if gate.phase_id != phase.id:
                    raise TopologyError(
                        f"Gate '{gate.id}' declares phase '{gate.phase_id}' but is listed under '{phase.id}'."
                    )
                if gate.id in self._gate_index:
                    raise TopologyError(f"Duplicate gate id '{gate.id}'.")
                self._gate_index[gate.id] = len(gates)
                gates.append(gate)

        self._all_gates: tuple[Gate, ...] = tuple(gates)

    @property
    def phases(self) -> tuple[Phase, ...]:
        return self._phases

    @property
    def all_gates(self) -> tuple[Gate, ...]:
        return self._all_gates

    @property
    def first_gate(self) -> Gate:
        return self._all_gates[0]

    @property
    def last_gate(self) -> Gate:
        return self._all_gates[-1]

    def gate_index(self, gate_id: str) -> int:
        try:
            return self._gate_index[gate_id]
        except KeyError:
            raise TopologyError(f"Unknown gate id '{gate_id}'.") from None

    def phase_index(self, phase_id: str) -> int:
        try:
            return self._phase_index[phase_id]
        except KeyError:
            raise TopologyError(f"Unknown phase id '{phase_id}'.") from None

    def gate(self, gate_id: str) -> Gate:
        return self._all_gates[self.gate_index(gate_id)]

    def phase(self, phase_id: str) -> Phase:
        return self._phases[self.phase_index(phase_id)]

    def gates_of(self, phase_id: str) -> tuple[Gate, ...]:
        return self.phase(phase_id).gates

    def next_gate(self, gate_id: str) -> Gate | None:
        """Return the successor in canonical order, or None after the last gate."""
        idx = self.gate_index(gate_id)
        if idx + 1 >= len(self._all_gates):
            return None
        return self._all_gates[idx + 1]

    def contains(self, phase_id: str, gate_id: str) -> bool:
        """True when both ids resolve and the gate belongs to the phase."""
        idx = self._gate_index.get(gate_id)
        if idx is None or phase_id not in self._phase_index:
            return False
        return self._all_gates[idx].phase_id == phase_id

    def require_position(self, phase_id: str, gate_id: str) -> None:
        """Raise TopologyError unless (phase_id, gate_id) is a valid pair."""
        gate = self.gate(gate_id)
        self.phase_index(phase_id)
        if gate.phase_id != phase_id:
            raise TopologyError(f"Gate '{gate_id}' belongs to '{gate.phase_id}', not '{phase_id}'.")

    def gate_position(self, gate_id: str, current_gate_id: str) -> Position:
        return _compare(self.gate_index(gate_id), self.gate_index(current_gate_id))

    def phase_position(self, phase_id: str, current_phase_id: str) -> Position:
        return _compare(self.phase_index(phase_id), self.phase_index(current_phase_id))

    def __len__(self) -> int:
        return len(self._all_gates)


def _phase(phase_id: str, name: str, short_name: str, gates: list[tuple[str, str]]) -> Phase:
    return Phase(
        id=phase_id,
        name=name,
        short_name=short_name,
        gates=tuple(Gate(id=gid, name=gname, phase_id=phase_id) for gid, gname in gates),
    )


DEFAULT_TOPOLOGY = PipelineTopology(
    [
        _phase(
            "PHASE0",
            "Precondition Data Transformation",
            "Precondition",
            [("PRE", "Airflow/Python ETL")],
        ),
        _phase(
            "PHASE1",
            "Pre-payroll Processing Controls",
            "Pre-payroll",
            [
                ("GPC1", "Schema Match"),
                ("GPC2", "Character Encoding"),
                ("GPC3", "Date Formats"),
            ],
        ),
        _phase(
            "PHASE2",
            "Payroll Processing Controls",
            "Payroll",
            [
                ("GPC4", "Required Fields"),
                ("GPC5", "Currency Validation"),
                ("GPC6", "Gross-to-Net Variance"),
                ("GPC7", "Social Charge Thresholds"),
                ("GPC8", "Tax Bracket Alignment"),
                ("GPC9", "Aggregation Check"),
                ("GPC10", "Pension Contributions"),
                ("GPC11", "Benefit Deductions"),
            ],
        ),
        _phase(
            "PHASE3",
            "Post-payroll Processing Controls",
            "Post-payroll",
            [
                ("GPC12", "Bonus Caps"),
                ("GPC13", "Employee ID Matching"),
                ("GPC14", "New Joiner Validation"),
                ("GPC15", "Leaver Reconciliation"),
                ("GPC16", "Bank Account Format"),
                ("GPC17", "Duplicate Payment Check"),
                ("GPC18", "Cost Center Mapping"),
                ("GPC19", "Historical Trend Check"),
                ("GPC20", "Multi-Country Dedupe"),
                ("GPC21", "Final Sign-off"),
            ],
        ),
    ]
)
