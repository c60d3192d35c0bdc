"""Transition engine entry point."""

from __future__ import annotations

from typing import Iterable

from ..config.models import TransitionProbabilities
from ..domain.region import Region
from ..domain.topology import DEFAULT_TOPOLOGY, PipelineTopology
from ..errors import TransitionError
from .context import RuleContext, Transition
from .draws import DrawSource
from .registry import StateRuleRegistry, create_rule_registry
from .rules import Rule, build_default_rules

DEFAULT_RULES: StateRuleRegistry[Rule] = create_rule_registry(build_default_rules())


def advance(
    region: Region,
    virtual_time: int,
    *,
    draws: DrawSource,
    topology: PipelineTopology = DEFAULT_TOPOLOGY,
    probabilities: TransitionProbabilities | None = None,
    issue_exempt_gates: Iterable[str] | None = None,
    registry: StateRuleRegistry[Rule] | None = None,
) -> Transition:
    """Decide one region's next value for ``virtual_time``.

    The result depends only on the arguments and the values returned by
    ``draws``; the input region is never modified. The position is checked
    against ``topology`` first and a mismatch raises TopologyError.
    """
    topology.require_position(region.current_phase_id, region.current_gate_id)

    rules = DEFAULT_RULES if registry is None else registry
    rule = rules.resolve(region.state)
    if rule is None:
        supported = ", ".join(s.value for s in rules.supported_states())
        raise TransitionError(f"No rule registered for state '{region.state.value}'. Registered: {supported}.")

    exempt = frozenset((topology.first_gate.id,) if issue_exempt_gates is None else issue_exempt_gates)
    ctx = RuleContext(
        virtual_time=virtual_time,
        topology=topology,
        draws=draws,
        probabilities=TransitionProbabilities() if probabilities is None else probabilities,
        issue_exempt_gates=exempt,
    )
    return rule(region, ctx)
