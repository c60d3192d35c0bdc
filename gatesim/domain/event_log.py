"""Append-only, capacity-bounded event log."""

from __future__ import annotations

import itertools
from collections import deque
from dataclasses import dataclass
from enum import Enum


class LogType(str, Enum):
    INFO = "INFO"
    SYSTEM = "SYSTEM"
    ERROR = "ERROR"
    AUTO_HEALING = "AUTO_HEALING"
    PASSED = "PASSED"
    PROCESSING = "PROCESSING"
    SCHEDULED = "SCHEDULED"
    LATE = "LATE"


@dataclass(frozen=True)
class LogEvent:
    """Event produced by the engine before the log stamps it."""

    type: LogType
    message: str
    region_code: str | None = None
    gate_id: str | None = None


@dataclass(frozen=True)
class LogMessage:
    id: str
    timestamp: int
    type: LogType
    message: str
    region_code: str | None = None
    gate_id: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "type": self.type.value,
            "message": self.message,
            "regionCode": self.region_code,
            "gpcId": self.gate_id,
        }


class EventLog:
    """Newest-first log that keeps only the most recent ``capacity`` entries."""

    def __init__(self, capacity: int = 50) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be > 0, got {capacity}.")
        self._capacity = capacity
        self._entries: deque[LogMessage] = deque(maxlen=capacity)
        self._seq = itertools.count()

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, event: LogEvent, timestamp: int) -> LogMessage:
        message = LogMessage(
            id=f"log-{next(self._seq)}",
            timestamp=timestamp,
            type=event.type,
            message=event.message,
            region_code=event.region_code,
            gate_id=event.gate_id,
        )
        # appendleft on a bounded deque drops from the right (oldest)
        self._entries.appendleft(message)
        return message

    def snapshot(self) -> tuple[LogMessage, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
