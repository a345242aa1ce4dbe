"""Reload agents.json when it changes on disk."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class AgentConfigHandler(FileSystemEventHandler):
    def __init__(self, filename: str, on_change: Callable[[], None]):
        self.filename = filename
        self.on_change = on_change

    def _matches(self, path: str | bytes | None) -> bool:
        if not path:
            return False
        if isinstance(path, bytes):
            path = path.decode()
        return Path(path).name == self.filename

    def on_modified(self, event):
        if not event.is_directory and self._matches(event.src_path):
            self.on_change()

    def on_created(self, event):
        self.on_modified(event)

    def on_moved(self, event):
        if not event.is_directory and self._matches(getattr(event, "dest_path", None)):
            self.on_change()


class ConfigWatcher:
    """Watches one file from an observer thread and hands reloads back to the event loop."""

    def __init__(self, path: Path, reload: Callable[[], object], loop: asyncio.AbstractEventLoop):
        self.path = Path(path)
        self.reload = reload
        self.loop = loop
        self.handler = AgentConfigHandler(self.path.name, self._schedule_reload)
        self._observer = None

    def _schedule_reload(self) -> None:
        self.loop.call_soon_threadsafe(self.reload)

    def start(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._observer = Observer()
        self._observer.schedule(self.handler, str(self.path.parent), recursive=False)
        self._observer.start()
        logger.info(f"Watching {self.path} for changes")

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None
