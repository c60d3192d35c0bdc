"""State-rule registry for the transition engine."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from ..domain.region import RegionState

RuleT = TypeVar("RuleT", bound=Callable)


class StateRuleRegistry(Generic[RuleT]):
    """Registry that maps region states to transition rules."""

    def __init__(self, rules: dict[RegionState, RuleT] | None = None) -> None:
        self._rules: dict[RegionState, RuleT] = {}
        if rules:
            for state, rule in rules.items():
                self.register(state, rule)

    @staticmethod
    def _normalize(state: RegionState | str) -> RegionState:
        return RegionState(state)

    def register(self, state: RegionState | str, rule: RuleT) -> None:
        if not callable(rule):
            raise TypeError(f"Rule for '{state}' must be callable.")
        self._rules[self._normalize(state)] = rule

    def resolve(self, state: RegionState | str) -> RuleT | None:
        return self._rules.get(self._normalize(state))

    def supported_states(self) -> tuple[RegionState, ...]:
        return tuple(self._rules)


def create_rule_registry(rules: dict[RegionState, RuleT]) -> StateRuleRegistry[RuleT]:
    """Build a registry from a state -> rule mapping."""
    return StateRuleRegistry(rules=rules)
