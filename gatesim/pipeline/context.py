"""Inputs and outputs shared by transition rules."""

from __future__ import annotations

from dataclasses import dataclass

from ..config.models import TransitionProbabilities
from ..domain.event_log import LogEvent
from ..domain.region import Region
from ..domain.topology import PipelineTopology
from .draws import DrawSource


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may read besides the region itself."""

    virtual_time: int
    topology: PipelineTopology
    draws: DrawSource
    probabilities: TransitionProbabilities
    issue_exempt_gates: frozenset[str] = frozenset({"PRE"})


@dataclass(frozen=True)
class Transition:
    """Result of one engine call: the next region value and an optional event."""

    region: Region
    event: LogEvent | None = None


__all__ = ["RuleContext", "Transition"]
