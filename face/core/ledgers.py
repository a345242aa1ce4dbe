"""Bounded activity and error ledgers."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from face.models import ActivityEvent, ErrorEvent

ACTIVITY_CAPACITY = 100
ERROR_CAPACITY = 50


class ActivityLog:
    """Oldest-first; appends at the tail and evicts from the head."""

    def __init__(self, events: list[ActivityEvent] | None = None, capacity: int = ACTIVITY_CAPACITY):
        self.capacity = capacity
        self._events: list[ActivityEvent] = list(events or [])[-capacity:]

    @classmethod
    def from_document(cls, doc: list[dict[str, Any]], capacity: int = ACTIVITY_CAPACITY) -> ActivityLog:
        return cls([ActivityEvent.from_dict(item) for item in doc or []], capacity)

    def to_document(self) -> list[dict[str, Any]]:
        return [event.to_dict() for event in self._events]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[ActivityEvent]:
        return iter(self._events)

    def append(self, event: ActivityEvent) -> None:
        self._events.append(event)
        if len(self._events) > self.capacity:
            self._events = self._events[-self.capacity :]

    def recent(self, limit: int) -> list[ActivityEvent]:
        """Newest `limit` events, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self._events[-limit:]))


class ErrorLedger:
    """Newest-first; inserts at the head and evicts from the tail."""

    def __init__(self, events: list[ErrorEvent] | None = None, capacity: int = ERROR_CAPACITY):
        self.capacity = capacity
        self._events: list[ErrorEvent] = list(events or [])[:capacity]

    @classmethod
    def from_document(cls, doc: list[dict[str, Any]], capacity: int = ERROR_CAPACITY) -> ErrorLedger:
        return cls([ErrorEvent.from_dict(item) for item in doc or []], capacity)

    def to_document(self) -> list[dict[str, Any]]:
        return [event.to_dict() for event in self._events]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[ErrorEvent]:
        return iter(self._events)

    def add(self, event: ErrorEvent) -> None:
        self._events.insert(0, event)
        del self._events[self.capacity :]

    def recent(self, limit: int) -> list[ErrorEvent]:
        if limit <= 0:
            return []
        return self._events[:limit]

    def clear_agent(self, agent_id: str) -> int:
        before = len(self._events)
        self._events = [event for event in self._events if event.agent_id != agent_id]
        return before - len(self._events)
