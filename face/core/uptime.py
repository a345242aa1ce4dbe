"""Daily uptime ledger plus the in-memory working-since markers."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from face.lib import clock
from face.models import UptimeEntry

logger = logging.getLogger(__name__)


class UptimeLedger:
    def __init__(self, agents: dict[str, UptimeEntry] | None = None, date: str | None = None):
        self.agents: dict[str, UptimeEntry] = dict(agents or {})
        self.date = date
        # Never persisted: a restart drops in-flight working intervals.
        self.working_since: dict[str, datetime] = {}

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> UptimeLedger:
        agents = doc.get("agents") or {}
        return cls(
            {agent_id: UptimeEntry.from_dict(data or {}) for agent_id, data in agents.items()},
            doc.get("date"),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "agents": {agent_id: entry.to_dict() for agent_id, entry in self.agents.items()},
            "date": self.date,
        }

    def check_daily_reset(self, now: datetime) -> bool:
        """Clear all entries when the UTC date moved on. Returns True when a reset happened."""
        today = clock.today(now)
        if self.date == today:
            return False
        logger.info(f"New day {today}, resetting daily uptime")
        self.agents = {}
        self.date = today
        return True

    def start(self, agent_id: str, now: datetime) -> None:
        self.working_since[agent_id] = now

    def stop(self, agent_id: str, now: datetime) -> UptimeEntry | None:
        """Close the agent's working interval. Returns the updated entry, or None without a marker."""
        started = self.working_since.pop(agent_id, None)
        if started is None:
            return None
        entry = self.agents.setdefault(agent_id, UptimeEntry())
        entry.total_ms += max(clock.elapsed_ms(started, now), 0)
        entry.sessions += 1
        entry.last_session = clock.isoformat(now)
        return entry

    def discard(self, agent_id: str) -> None:
        """Drop the marker without accruing the interval."""
        self.working_since.pop(agent_id, None)

    def read(self, agent_id: str, now: datetime) -> dict[str, Any]:
        data = (self.agents.get(agent_id) or UptimeEntry()).to_dict()
        started = self.working_since.get(agent_id)
        if started is not None:
            data["currentMs"] = max(clock.elapsed_ms(started, now), 0)
        return data

    def read_all(self, now: datetime) -> dict[str, Any]:
        doc = self.to_document()
        for agent_id in self.working_since:
            doc["agents"][agent_id] = self.read(agent_id, now)
        return doc

    def ticks(self) -> dict[str, str]:
        return {agent_id: clock.isoformat(started) for agent_id, started in self.working_since.items()}
