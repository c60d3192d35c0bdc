"""Unit tests for the state-rule registry."""

from __future__ import annotations

import pytest

from gatesim.domain import RegionState
from gatesim.pipeline import DEFAULT_RULES, StateRuleRegistry
from gatesim.pipeline.rules import idle_rule


pytestmark = pytest.mark.unit


def test_default_rules_cover_every_state() -> None:
    assert set(DEFAULT_RULES.supported_states()) == set(RegionState)


def test_register_and_resolve_by_name() -> None:
    registry: StateRuleRegistry = StateRuleRegistry()
    registry.register("IDLE", idle_rule)
    assert registry.resolve(RegionState.IDLE) is idle_rule
    assert registry.resolve("PASSED") is None


def test_register_rejects_non_callable() -> None:
    with pytest.raises(TypeError, match="must be callable"):
        StateRuleRegistry({RegionState.IDLE: "nope"})  # type: ignore[dict-item]
