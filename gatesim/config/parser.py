"""Config parsing utilities."""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..errors import ConfigError
from .models import SimulationConfig, TransitionProbabilities
from .validators import (
    ensure_nonnegative,
    ensure_probability,
    opt_mapping,
    reject_unknown_keys,
    to_bool,
    to_float,
    to_int,
)

_PROBABILITY_KEYS = (
    "restart",
    "error_to_healing",
    "healing_success",
    "idle_start",
    "late_on_drop",
    "late_recovery",
    "issue",
    "critical",
)
_STEP_KEYS = ("progress_step_min", "progress_step_max")
_CONFIG_KEYS = tuple(f.name for f in fields(SimulationConfig))


def parse_transition_probabilities(raw: Mapping[str, Any] | None) -> TransitionProbabilities:
    """Parse the ``probabilities`` section, filling defaults for missing keys."""
    context = "config.probabilities"
    section = opt_mapping(raw, context)
    reject_unknown_keys(section, _PROBABILITY_KEYS + _STEP_KEYS, context)

    defaults = TransitionProbabilities()
    values: dict[str, Any] = {}
    for key in _PROBABILITY_KEYS:
        value = to_float(section.get(key, getattr(defaults, key)), key, context)
        values[key] = ensure_probability(f"{context}.{key}", value)

    lo = to_int(section.get("progress_step_min", defaults.progress_step_min), "progress_step_min", context)
    hi = to_int(section.get("progress_step_max", defaults.progress_step_max), "progress_step_max", context)
    ensure_nonnegative(f"{context}.progress_step_min", lo)
    if hi < lo:
        raise ValueError(f"{context}.progress_step_max ({hi}) must be >= progress_step_min ({lo}).")
    values["progress_step_min"] = lo
    values["progress_step_max"] = hi
    return TransitionProbabilities(**values)


def _parse_config(raw: Mapping[str, Any]) -> SimulationConfig:
    context = "config"
    reject_unknown_keys(raw, _CONFIG_KEYS, context)
    defaults = SimulationConfig()

    probabilities = parse_transition_probabilities(raw.get("probabilities"))

    log_capacity = to_int(raw.get("log_capacity", defaults.log_capacity), "log_capacity", context)
    ensure_nonnegative(f"{context}.log_capacity", log_capacity, allow_zero=False)

    history_capacity = to_int(
        raw.get("history_capacity", defaults.history_capacity), "history_capacity", context
    )
    ensure_nonnegative(f"{context}.history_capacity", history_capacity, allow_zero=False)

    tick_period_s = to_float(raw.get("tick_period_s", defaults.tick_period_s), "tick_period_s", context)
    ensure_nonnegative(f"{context}.tick_period_s", tick_period_s)

    seed_raw = raw.get("seed", defaults.seed)
    seed = None if seed_raw is None else to_int(seed_raw, "seed", context)

    autostart = to_bool(raw.get("autostart", defaults.autostart), "autostart", context)

    exempt_raw = raw.get("issue_exempt_gates", list(defaults.issue_exempt_gates))
    if not isinstance(exempt_raw, (list, tuple)):
        raise ValueError(f"{context}.issue_exempt_gates must be a list of gate ids.")
    exempt = tuple(str(gate_id) for gate_id in exempt_raw)

    return SimulationConfig(
        probabilities=probabilities,
        log_capacity=log_capacity,
        history_capacity=history_capacity,
        tick_period_s=tick_period_s,
        seed=seed,
        autostart=autostart,
        issue_exempt_gates=exempt,
    )


def parse_simulation_config(raw: Mapping[str, Any] | None) -> SimulationConfig:
    """Build a validated SimulationConfig from a plain mapping."""
    if raw is None:
        return SimulationConfig()
    if not isinstance(raw, Mapping):
        raise ConfigError("config must be a mapping.")
    try:
        return _parse_config(raw)
    except ConfigError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigError(str(exc)) from exc


def load_simulation_config(path: str | Path) -> SimulationConfig:
    """Read a YAML config file and parse it."""
    cfg_path = Path(path)
    try:
        with cfg_path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read config '{cfg_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config '{cfg_path}' is not valid YAML: {exc}") from exc
    return parse_simulation_config(raw)
