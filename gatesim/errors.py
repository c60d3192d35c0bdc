"""Shared error types for gatesim orchestration layers."""

from __future__ import annotations


class GatesimError(Exception):
    """Base class for simulator errors."""


class ManifestError(GatesimError, ValueError):
    """Raised when a region manifest cannot be fetched or parsed."""


class ConfigError(GatesimError, ValueError):
    """Raised when simulation configuration is invalid."""


class TopologyError(GatesimError, LookupError):
    """Raised when a phase/gate reference does not resolve in the topology."""


class TransitionError(GatesimError, RuntimeError):
    """Raised when the transition engine is wired incorrectly."""


class SimulationStateError(GatesimError, RuntimeError):
    """Raised when a driver control is used in the wrong lifecycle state."""
