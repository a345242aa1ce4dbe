"""Dashboard core: owns all live state and applies status transitions.

Every mutation runs to completion synchronously: update memory, write the
affected JSON document, then broadcast. A failed write is logged and recorded
but never undoes the in-memory change or suppresses the broadcast.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from face import __version__
from face.errors import MalformedRequestError, PersistenceError, UnknownAgentError
from face.lib import clock as clocks
from face.lib import ids, store
from face.lib.config import ServerConfig
from face.lib.store import JsonStore
from face.models import ActivityEvent, AgentState, AgentStatus, ErrorEvent

from . import savings as savings_calc
from .filters import SystemTaskFilter
from .hub import BroadcastHub, Subscriber
from .ledgers import ActivityLog, ErrorLedger
from .register import StatusRegister
from .uptime import UptimeLedger

logger = logging.getLogger(__name__)

DEFAULT_AGENT_CONFIG: dict[str, Any] = {"agents": {}, "departments": {}}

DEFAULT_SETTINGS: dict[str, Any] = {
    "soundEnabled": True,
    "soundVolume": 0.5,
    "notificationsEnabled": True,
    "showOfflineAgents": True,
    "compactMode": False,
}

TYPE_ICONS = {
    "message": "💬",
    "task": "⚡",
    "commit": "📝",
    "cron": "⏰",
    "alert": "🚨",
    "status": "🔄",
    "system": "🖥️",
}
DEFAULT_ICON = "📌"

SNAPSHOT_ACTIVITY = 20
SNAPSHOT_ERRORS = 10

WORKING = AgentState.WORKING.value
FINISHED_STATES = (AgentState.COMPLETE.value, AgentState.ONLINE.value)


class Dashboard:
    def __init__(
        self,
        documents: JsonStore,
        *,
        clock=None,
        hub: BroadcastHub | None = None,
        task_filter: Callable[[str | None], bool] | None = None,
    ):
        self.documents = documents
        self.clock = clock or clocks.SystemClock()
        self.hub = hub or BroadcastHub()
        self.is_system_task = task_filter or SystemTaskFilter()
        self.last_persistence_error: str | None = None

        self.config: dict[str, Any] = documents.load(store.CONFIG, DEFAULT_AGENT_CONFIG)
        self.register = StatusRegister.from_document(
            documents.load(store.STATUS, {"agents": {}, "lastUpdated": None})
        )
        self.activity = ActivityLog.from_document(documents.load(store.ACTIVITY, []))
        self.uptime = UptimeLedger.from_document(
            documents.load(store.UPTIME, {"agents": {}, "date": None})
        )
        self.errors = ErrorLedger.from_document(documents.load(store.ERRORS, []))
        self.settings: dict[str, Any] = {
            **DEFAULT_SETTINGS,
            **documents.load(store.SETTINGS, {}),
        }

    @classmethod
    def from_config(cls, config: ServerConfig) -> Dashboard:
        return cls(
            JsonStore(config.data_dir),
            task_filter=SystemTaskFilter(config.system_placeholders, config.system_keywords),
        )

    # -- plumbing -------------------------------------------------------

    def _now(self) -> datetime:
        return self.clock.now()

    def _persist(self, name: str, data: Any) -> bool:
        try:
            self.documents.save(name, data)
        except PersistenceError as e:
            logger.error(str(e))
            self.last_persistence_error = str(e)
            return False
        self.last_persistence_error = None
        return True

    def _persist_status(self) -> None:
        self._persist(store.STATUS, self.register.to_document())

    def _check_daily_reset(self, now: datetime) -> None:
        if self.uptime.check_daily_reset(now):
            self._persist(store.UPTIME, self.uptime.to_document())

    @property
    def known_agents(self) -> dict[str, Any]:
        return self.config.get("agents") or {}

    def is_known(self, agent_id: str) -> bool:
        return agent_id in self.known_agents

    # -- transitions ----------------------------------------------------

    def report_status(
        self,
        agent_id: str,
        status: str | None = None,
        task: str | None = None,
        detail: str | None = None,
        progress: float | None = None,
        error: str | None = None,
    ) -> AgentStatus:
        if not self.is_known(agent_id):
            raise UnknownAgentError(agent_id)

        now = self._now()
        timestamp = clocks.isoformat(now)
        self._check_daily_reset(now)

        previous = self.register.get(agent_id)
        prev_status = previous.status if previous else None
        prev_task = previous.task if previous else None
        new_status = status or AgentState.ONLINE.value

        if new_status == WORKING and prev_status != WORKING:
            self.uptime.start(agent_id, now)
        elif prev_status == WORKING and new_status != WORKING:
            if self.uptime.stop(agent_id, now) is not None:
                self._persist(store.UPTIME, self.uptime.to_document())

        if error:
            event = ErrorEvent(
                id=ids.event_id(),
                timestamp=timestamp,
                agent_id=agent_id,
                error=error,
                task=task or prev_task,
            )
            self.errors.add(event)
            self._persist(store.ERRORS, self.errors.to_document())
            self.hub.broadcast({"type": "error", "data": event.to_dict()})

        record = AgentStatus(
            status=new_status,
            task=task or None,
            detail=detail or None,
            progress=progress,
            error=error or None,
            last_active=timestamp,
        )
        self.register.put(agent_id, record)
        self._persist_status()
        self.hub.broadcast(
            {"type": "status", "agentId": agent_id, "data": record.to_dict(), "prevStatus": prev_status}
        )

        if new_status == WORKING and prev_status != WORKING and task and not self.is_system_task(task):
            self.add_activity("task", agent_id, f"Started: {task}")
        elif (
            new_status in FINISHED_STATES
            and prev_status == WORKING
            and not self.is_system_task(prev_task)
        ):
            self.add_activity("task", agent_id, f"Completed: {prev_task}")
        elif error:
            self.add_activity("alert", agent_id, f"Error: {error}")

        suffix = f" (ERROR: {error})" if error else ""
        logger.info(f"{agent_id}: {new_status} - {task or 'idle'}{suffix}")
        return record

    def batch_update(self, updates: dict[str, dict[str, Any]]) -> int:
        """Merge partial records for known agents. Skips the transition rules."""
        timestamp = clocks.isoformat(self._now())
        updated = 0
        for agent_id, fields in updates.items():
            if not self.is_known(agent_id):
                continue
            record = self.register.merge(agent_id, fields or {}, timestamp)
            if record.status != WORKING:
                self.uptime.discard(agent_id)
            updated += 1

        self.register.last_updated = timestamp
        self._persist_status()
        self.hub.broadcast({"type": "status-bulk", "data": self.register.to_document()})
        return updated

    def clear_errors(self, agent_id: str) -> int:
        cleared = self.errors.clear_agent(agent_id)
        self._persist(store.ERRORS, self.errors.to_document())

        record = self.register.get(agent_id)
        if record is not None:
            record.error = None
            self._persist_status()
            self.hub.broadcast({"type": "status", "agentId": agent_id, "data": record.to_dict()})
        return cleared

    def add_activity(
        self, kind: str | None, agent: str | None, text: str | None, icon: str | None = None
    ) -> ActivityEvent:
        if not kind or not agent or not text:
            raise MalformedRequestError("Required: type, agent, text")

        event = ActivityEvent(
            id=ids.event_id(),
            timestamp=clocks.isoformat(self._now()),
            type=kind,
            agent=agent,
            text=text,
            icon=icon or TYPE_ICONS.get(kind, DEFAULT_ICON),
        )
        self.activity.append(event)
        self._persist(store.ACTIVITY, self.activity.to_document())
        self.hub.broadcast({"type": "activity", "data": event.to_dict()})
        return event

    def update_settings(self, values: dict[str, Any]) -> dict[str, Any]:
        self.settings = {**self.settings, **values}
        self._persist(store.SETTINGS, self.settings)
        self.hub.broadcast({"type": "settings", "data": self.settings})
        return self.settings

    def add_savings(
        self, name: str | None, value: Any, date: str | None = None
    ) -> tuple[dict[str, Any], int | float]:
        now = self._now()
        addition = savings_calc.build_addition(name, value, date, now)
        savings_calc.append_addition(self.config, addition)
        self._persist(store.CONFIG, self.config)

        total = savings_calc.compute(self.config, now)["total"]
        self.hub.broadcast({"type": "savings", "data": {"total": total, "addition": addition}})
        return addition, total

    def reload_config(self) -> bool:
        """Re-read agents.json; broadcast only when it actually changed."""
        if not self.documents.exists(store.CONFIG):
            logger.warning("agents.json disappeared, keeping current config")
            return False
        fresh = self.documents.load(store.CONFIG, None)
        if fresh is None or fresh == self.config:
            return False
        logger.info("agents.json changed, reloaded")
        self.config = fresh
        self.hub.broadcast({"type": "config", "data": self.config})
        return True

    # -- reads ----------------------------------------------------------

    def status_document(self) -> dict[str, Any]:
        return self.register.to_document()

    def get_status(self, agent_id: str) -> AgentStatus:
        record = self.register.get(agent_id)
        if record is None:
            raise UnknownAgentError(agent_id)
        return record

    def uptime_document(self) -> dict[str, Any]:
        now = self._now()
        self._check_daily_reset(now)
        return self.uptime.read_all(now)

    def agent_uptime(self, agent_id: str) -> dict[str, Any]:
        now = self._now()
        self._check_daily_reset(now)
        return self.uptime.read(agent_id, now)

    def working_since(self) -> dict[str, str]:
        return self.uptime.ticks()

    def recent_activity(self, limit: int) -> list[dict[str, Any]]:
        return [event.to_dict() for event in self.activity.recent(limit)]

    def recent_errors(self, limit: int) -> list[dict[str, Any]]:
        return [event.to_dict() for event in self.errors.recent(limit)]

    def savings(self) -> dict[str, Any]:
        return savings_calc.compute(self.config, self._now())

    def snapshot(self) -> dict[str, Any]:
        return {
            "type": "init",
            "config": self.config,
            "status": self.status_document(),
            "activity": self.recent_activity(SNAPSHOT_ACTIVITY),
            "uptime": self.uptime_document(),
            "errors": self.recent_errors(SNAPSHOT_ERRORS),
            "settings": self.settings,
        }

    def subscribe(self) -> Subscriber:
        """Connect a live subscriber whose first message is the snapshot."""
        return self.hub.connect(self.snapshot())

    def health(self) -> dict[str, Any]:
        return {
            "status": "ok",
            "time": clocks.isoformat(self._now()),
            "agents": len(self.known_agents),
            "connected": len(self.hub),
            "version": __version__,
            "persistence": {
                "ok": self.last_persistence_error is None,
                "lastError": self.last_persistence_error,
            },
        }
