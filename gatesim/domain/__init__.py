"""Domain-layer types and constants."""

from .event_log import EventLog, LogEvent, LogMessage, LogType
from .region import ISSUE_STATES, IssueDetails, Region, RegionState
from .store import RegionStore
from .topology import DEFAULT_TOPOLOGY, Gate, Phase, PipelineTopology, Position

__all__ = [
    "DEFAULT_TOPOLOGY",
    "ISSUE_STATES",
    "EventLog",
    "Gate",
    "IssueDetails",
    "LogEvent",
    "LogMessage",
    "LogType",
    "Phase",
    "PipelineTopology",
    "Position",
    "Region",
    "RegionState",
    "RegionStore",
]
