"""Transition engine primitives."""

from .context import RuleContext, Transition
from .draws import DrawSource, GeneratorDraws, ScriptedDraws
from .engine import DEFAULT_RULES, advance
from .registry import StateRuleRegistry, create_rule_registry
from .rules import Rule, build_default_rules

__all__ = [
    "DEFAULT_RULES",
    "DrawSource",
    "GeneratorDraws",
    "Rule",
    "RuleContext",
    "ScriptedDraws",
    "StateRuleRegistry",
    "Transition",
    "advance",
    "build_default_rules",
    "create_rule_registry",
]
