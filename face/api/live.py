"""WebSocket live-update channel."""

import asyncio
import contextlib
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from face.core.hub import Subscriber

logger = logging.getLogger(__name__)

router = APIRouter(tags=["live"])

# "Try again later": the client reconnects and gets a fresh snapshot.
OVERFLOW_CLOSE_CODE = 1013


async def _send_loop(websocket: WebSocket, subscriber: Subscriber) -> None:
    while not subscriber.closed:
        payload = await subscriber.queue.get()
        try:
            await websocket.send_text(payload)
        except (WebSocketDisconnect, RuntimeError) as e:
            logger.debug(f"Send failed, dropping subscriber: {e}")
            subscriber.close()
            return

    # The hub dropped us for falling behind; queued messages are incomplete.
    logger.info("Subscriber fell behind, closing connection")
    with contextlib.suppress(WebSocketDisconnect, RuntimeError):
        await websocket.close(code=OVERFLOW_CLOSE_CODE)


@router.websocket("/ws")
async def live_updates(websocket: WebSocket):
    dashboard = websocket.app.state.dashboard
    await websocket.accept()

    # Snapshot is queued before the subscriber can see any broadcast.
    subscriber = dashboard.subscribe()
    sender = asyncio.create_task(_send_loop(websocket, subscriber))
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    except WebSocketDisconnect:
        pass
    finally:
        dashboard.hub.disconnect(subscriber)
        sender.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sender
