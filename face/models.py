from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AgentState(str, Enum):
    OFFLINE = "offline"
    ONLINE = "online"
    WORKING = "working"
    IDLE = "idle"
    COMPLETE = "complete"
    ERROR = "error"


STATUS_FIELDS = ("status", "task", "detail", "progress", "error")


@dataclass
class AgentStatus:
    status: str = AgentState.ONLINE.value
    task: str | None = None
    detail: str | None = None
    progress: float | None = None
    error: str | None = None
    last_active: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "task": self.task,
            "detail": self.detail,
            "progress": self.progress,
            "error": self.error,
            "lastActive": self.last_active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AgentStatus:
        return cls(
            status=data.get("status") or AgentState.ONLINE.value,
            task=data.get("task"),
            detail=data.get("detail"),
            progress=data.get("progress"),
            error=data.get("error"),
            last_active=data.get("lastActive"),
        )


@dataclass
class UptimeEntry:
    total_ms: int = 0
    sessions: int = 0
    last_session: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"totalMs": self.total_ms, "sessions": self.sessions}
        if self.last_session:
            data["lastSession"] = self.last_session
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UptimeEntry:
        return cls(
            total_ms=int(data.get("totalMs") or 0),
            sessions=int(data.get("sessions") or 0),
            last_session=data.get("lastSession"),
        )


@dataclass
class ActivityEvent:
    id: str
    timestamp: str
    type: str
    agent: str
    text: str
    icon: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "type": self.type,
            "agent": self.agent,
            "text": self.text,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ActivityEvent:
        return cls(**{key: data.get(key) for key in ("id", "timestamp", "type", "agent", "text", "icon")})


@dataclass
class ErrorEvent:
    id: str
    timestamp: str
    agent_id: str
    error: str
    task: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "agentId": self.agent_id,
            "error": self.error,
            "task": self.task,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ErrorEvent:
        return cls(
            id=data.get("id"),
            timestamp=data.get("timestamp"),
            agent_id=data.get("agentId"),
            error=data.get("error"),
            task=data.get("task"),
        )
