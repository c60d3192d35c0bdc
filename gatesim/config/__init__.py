"""Typed config models and parsers."""

from .models import SimulationConfig, TransitionProbabilities
from .parser import load_simulation_config, parse_simulation_config, parse_transition_probabilities
from .validators import (
    as_mapping,
    ensure_nonnegative,
    ensure_probability,
    opt_mapping,
    required,
    to_bool,
    to_float,
    to_int,
)

__all__ = [
    "SimulationConfig",
    "TransitionProbabilities",
    "as_mapping",
    "ensure_nonnegative",
    "ensure_probability",
    "load_simulation_config",
    "opt_mapping",
    "parse_simulation_config",
    "parse_transition_probabilities",
    "required",
    "to_bool",
    "to_float",
    "to_int",
]
