"""Live-update fan-out to WebSocket subscribers."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

SUBSCRIBER_QUEUE_SIZE = 256


class Subscriber:
    """One connected client. Serialized messages queue here until its connection task sends them."""

    def __init__(self, maxsize: int = SUBSCRIBER_QUEUE_SIZE):
        self.queue: asyncio.Queue[str] = asyncio.Queue(maxsize=maxsize)
        self.closed = False

    def deliver(self, payload: str) -> bool:
        if self.closed:
            return False
        try:
            self.queue.put_nowait(payload)
        except asyncio.QueueFull:
            self.closed = True
            return False
        return True

    def close(self) -> None:
        self.closed = True


class BroadcastHub:
    def __init__(self):
        self._subscribers: set[Subscriber] = set()

    def __len__(self) -> int:
        return len(self._subscribers)

    def connect(self, snapshot: dict[str, Any], maxsize: int = SUBSCRIBER_QUEUE_SIZE) -> Subscriber:
        """Register a subscriber with the snapshot already queued as its first message."""
        subscriber = Subscriber(maxsize)
        subscriber.deliver(json.dumps(snapshot))
        self._subscribers.add(subscriber)
        logger.info(f"Client connected ({len(self._subscribers)} total)")
        return subscriber

    def disconnect(self, subscriber: Subscriber) -> None:
        subscriber.close()
        if subscriber in self._subscribers:
            self._subscribers.discard(subscriber)
            logger.info(f"Client disconnected ({len(self._subscribers)} remaining)")

    def broadcast(self, message: dict[str, Any]) -> int:
        """Queue `message` for every live subscriber. Returns how many accepted it."""
        payload = json.dumps(message)
        delivered = 0
        for subscriber in list(self._subscribers):
            if subscriber.deliver(payload):
                delivered += 1
            else:
                logger.debug("Dropping unresponsive subscriber")
                self.disconnect(subscriber)
        return delivered


class Heartbeat:
    """Periodically broadcasts the active working-since markers."""

    def __init__(self, markers: Callable[[], dict[str, str]], hub: BroadcastHub, interval: float = 30):
        self.markers = markers
        self.hub = hub
        self.interval = interval
        self._task: asyncio.Task | None = None

    def tick(self) -> bool:
        working_since = self.markers()
        if not working_since:
            return False
        self.hub.broadcast({"type": "uptime-tick", "workingSince": working_since})
        return True

    async def run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.tick()

    def start(self) -> None:
        if self._task is None and self.interval > 0:
            self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
