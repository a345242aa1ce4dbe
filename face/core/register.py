"""Status register: agent id -> current status record."""

from __future__ import annotations

from typing import Any

from face.models import STATUS_FIELDS, AgentStatus


class StatusRegister:
    def __init__(self, records: dict[str, AgentStatus] | None = None, last_updated: str | None = None):
        self._records: dict[str, AgentStatus] = dict(records or {})
        self.last_updated = last_updated

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> StatusRegister:
        agents = doc.get("agents") or {}
        return cls(
            {agent_id: AgentStatus.from_dict(data or {}) for agent_id, data in agents.items()},
            doc.get("lastUpdated"),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "agents": {agent_id: record.to_dict() for agent_id, record in self._records.items()},
            "lastUpdated": self.last_updated,
        }

    def get(self, agent_id: str) -> AgentStatus | None:
        return self._records.get(agent_id)

    def put(self, agent_id: str, record: AgentStatus) -> None:
        self._records[agent_id] = record
        self.last_updated = record.last_active

    def merge(self, agent_id: str, fields: dict[str, Any], timestamp: str) -> AgentStatus:
        """Shallow-merge known fields over the existing record."""
        current = self._records.get(agent_id) or AgentStatus()
        data = current.to_dict()
        data.update({key: value for key, value in fields.items() if key in STATUS_FIELDS})
        record = AgentStatus.from_dict(data)
        record.last_active = timestamp
        self._records[agent_id] = record
        return record
