"""Flat JSON documents under the data dir, one file per logical store."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from face.errors import PersistenceError

logger = logging.getLogger(__name__)

CONFIG = "agents"
STATUS = "status"
ACTIVITY = "activity"
UPTIME = "uptime"
ERRORS = "errors"
SETTINGS = "settings"


class JsonStore:
    def __init__(self, root: Path):
        self.root = Path(root)

    def path(self, name: str) -> Path:
        return self.root / f"{name}.json"

    def exists(self, name: str) -> bool:
        return self.path(name).exists()

    def load(self, name: str, default: Any = None) -> Any:
        """Return the parsed document, or a copy of `default` when absent or unreadable."""
        path = self.path(name)
        if not path.exists():
            return copy.deepcopy(default)
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load {path.name}, using default: {e}")
            return copy.deepcopy(default)

    def save(self, name: str, data: Any) -> None:
        path = self.path(name)
        try:
            payload = json.dumps(data, indent=2, ensure_ascii=False)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(payload, encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(name, e) from e
