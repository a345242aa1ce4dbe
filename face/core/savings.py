"""Savings estimate: time-based accrual since birth plus manual project additions."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from face.errors import MalformedRequestError
from face.lib import clock

DEFAULT_BIRTH_DATE = "2026-01-25T23:53:22Z"
DEFAULT_HOURLY_RATE = 150
DEFAULT_ACTIVE_RATIO = 0.5


def savings_config(agent_config: dict[str, Any]) -> dict[str, Any]:
    meta = agent_config.get("meta") or {}
    config = meta.get("savingsConfig") or {}
    return {
        "hourlyRate": config.get("hourlyRate", DEFAULT_HOURLY_RATE),
        "activeRatio": config.get("activeRatio", DEFAULT_ACTIVE_RATIO),
        "manualAdditions": list(config.get("manualAdditions") or []),
    }


def birth_date(agent_config: dict[str, Any]) -> datetime:
    meta = agent_config.get("meta") or {}
    return clock.parse(meta.get("birthDate") or DEFAULT_BIRTH_DATE)


def compute(agent_config: dict[str, Any], now: datetime) -> dict[str, Any]:
    config = savings_config(agent_config)
    hours_online = (now - birth_date(agent_config)).total_seconds() / 3600
    time_savings = math.floor(hours_online * config["hourlyRate"] * config["activeRatio"])
    project_savings = sum(item.get("value") or 0 for item in config["manualAdditions"])
    return {
        "timeSavings": time_savings,
        "projectSavings": project_savings,
        "total": time_savings + project_savings,
        "projects": config["manualAdditions"],
        "config": {"hourlyRate": config["hourlyRate"], "activeRatio": config["activeRatio"]},
    }


def build_addition(name: str | None, value: Any, date: str | None, now: datetime) -> dict[str, Any]:
    if not name or not value:
        raise MalformedRequestError("name and value required")
    try:
        amount = float(value)
    except (TypeError, ValueError) as e:
        raise MalformedRequestError(f"value must be numeric, got {value!r}") from e
    if amount.is_integer():
        amount = int(amount)
    return {"name": name, "value": amount, "date": date or clock.today(now)}


def append_addition(agent_config: dict[str, Any], addition: dict[str, Any]) -> None:
    """Append to meta.savingsConfig.manualAdditions, creating defaults on the way."""
    meta = agent_config.setdefault("meta", {})
    config = meta.setdefault(
        "savingsConfig",
        {"hourlyRate": DEFAULT_HOURLY_RATE, "activeRatio": DEFAULT_ACTIVE_RATIO, "manualAdditions": []},
    )
    config.setdefault("manualAdditions", []).append(addition)
