"""Typed models for simulation configuration."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TransitionProbabilities:
    """Per-tick branch probabilities and progress step bounds."""

    restart: float = 0.05
    error_to_healing: float = 0.20
    healing_success: float = 0.40
    idle_start: float = 0.30
    late_on_drop: float = 0.10
    late_recovery: float = 0.10
    issue: float = 0.05
    critical: float = 0.40
    progress_step_min: int = 5
    progress_step_max: int = 25


@dataclass(frozen=True)
class SimulationConfig:
    """Driver-level configuration."""

    probabilities: TransitionProbabilities = field(default_factory=TransitionProbabilities)
    log_capacity: int = 50
    history_capacity: int = 1000
    tick_period_s: float = 1.0
    seed: int | None = None
    autostart: bool = False
    issue_exempt_gates: tuple[str, ...] = ("PRE",)
