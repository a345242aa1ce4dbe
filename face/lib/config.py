import shutil
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml

from . import paths

DEFAULT_CONFIG = {
    "host": "0.0.0.0",
    "port": 3334,
    "log_level": "INFO",
    "heartbeat_interval": 30,
    "watch_config": True,
    "allowed_origins": [
        "http://localhost:3334",
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    "system_tasks": {
        "placeholders": ["Available", "Idle", "Online", "task"],
        "keywords": ["gateway", "clawdbot"],
    },
}


@dataclass
class ServerConfig:
    data_dir: Path
    host: str = "0.0.0.0"
    port: int = 3334
    log_level: str = "INFO"
    heartbeat_interval: float = 30
    watch_config: bool = True
    allowed_origins: list[str] = field(default_factory=list)
    system_placeholders: list[str] = field(default_factory=list)
    system_keywords: list[str] = field(default_factory=list)


def get_default_config_path() -> Path:
    return paths.package_root() / "config.yaml"


def clear_cache():
    load_config.cache_clear()


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@lru_cache(maxsize=1)
def load_config() -> ServerConfig:
    """Load config.yaml from the data dir, layered over the built-in defaults."""
    raw = dict(DEFAULT_CONFIG)
    path = paths.config_file()
    if path.exists():
        with open(path) as f:
            raw = _merge(raw, yaml.safe_load(f) or {})

    system_tasks = raw.get("system_tasks") or {}
    return ServerConfig(
        data_dir=paths.data_dir(),
        host=raw["host"],
        port=int(raw["port"]),
        log_level=str(raw["log_level"]).upper(),
        heartbeat_interval=float(raw["heartbeat_interval"]),
        watch_config=bool(raw["watch_config"]),
        allowed_origins=list(raw.get("allowed_origins") or []),
        system_placeholders=list(system_tasks.get("placeholders") or []),
        system_keywords=list(system_tasks.get("keywords") or []),
    )


def init_config() -> bool:
    """Seed config.yaml in the data dir from the packaged default. Returns False if present."""
    target = paths.config_file()
    if target.exists():
        return False

    target.parent.mkdir(parents=True, exist_ok=True)

    default_config_path = get_default_config_path()
    if not default_config_path.exists():
        raise FileNotFoundError(f"Default config not found at {default_config_path}")

    shutil.copy(default_config_path, target)
    return True
