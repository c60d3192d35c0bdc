"""gatesim: regional gate pipeline simulator."""

from .config import SimulationConfig, TransitionProbabilities
from .domain import DEFAULT_TOPOLOGY, EventLog, IssueDetails, LogMessage, PipelineTopology, Region, RegionState, RegionStore
from .errors import (
    ConfigError,
    GatesimError,
    ManifestError,
    SimulationStateError,
    TopologyError,
    TransitionError,
)
from .pipeline import Transition, advance
from .services import DriverState, SimulationDriver, Ticker, build_simulation_driver

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_TOPOLOGY",
    "ConfigError",
    "DriverState",
    "EventLog",
    "GatesimError",
    "IssueDetails",
    "LogMessage",
    "ManifestError",
    "PipelineTopology",
    "Region",
    "RegionState",
    "RegionStore",
    "SimulationConfig",
    "SimulationDriver",
    "SimulationStateError",
    "Ticker",
    "TopologyError",
    "Transition",
    "TransitionError",
    "TransitionProbabilities",
    "advance",
    "build_simulation_driver",
]
