"""Region entity and health states."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class RegionState(str, Enum):
    SCHEDULED = "SCHEDULED"
    LATE = "LATE"
    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    AUTO_HEALING = "AUTO_HEALING"
    ERROR = "ERROR"
    PASSED = "PASSED"


ISSUE_STATES = frozenset({RegionState.ERROR, RegionState.AUTO_HEALING, RegionState.LATE})


@dataclass(frozen=True)
class IssueDetails:
    """Ticket metadata carried while a region is in an issue state."""

    ticket_id: str
    description: str


@dataclass(frozen=True)
class Region:
    """Immutable snapshot of one region's pipeline position and health.

    ``state`` and ``issue`` form a tagged pair: an issue payload is required
    for ERROR, AUTO_HEALING and LATE and forbidden for every other state.
    Construction fails when that pairing, or the progress bound, is broken,
    so an invalid combination never leaves the engine.
    """

    id: str
    country_code: str
    name: str
    current_phase_id: str
    current_gate_id: str
    state: RegionState
    progress: int = 0
    issue: IssueDetails | None = None
    schedule_drop_time: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.state, RegionState):
            object.__setattr__(self, "state", RegionState(self.state))
        if not 0 <= self.progress <= 100:
            raise ValueError(f"Region {self.id}: progress must be within [0, 100], got {self.progress}.")
        has_issue = self.issue is not None
        if has_issue != (self.state in ISSUE_STATES):
            if has_issue:
                raise ValueError(f"Region {self.id}: state {self.state.value} cannot carry issue details.")
            raise ValueError(f"Region {self.id}: state {self.state.value} requires issue details.")

    @property
    def has_issue(self) -> bool:
        return self.issue is not None

    def evolve(self, **changes: object) -> "Region":
        """Return a copy with ``changes`` applied (validated on construction)."""
        return replace(self, **changes)
