from __future__ import annotations

import secrets
import threading
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

# Monotonic state for same-millisecond ids
_state_lock = threading.Lock()
_last_timestamp_ms = 0
_counter = 0


def _base36(value: int, width: int = 0) -> str:
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits)).rjust(width, "0") or "0"


def event_id() -> str:
    """Time-ordered event id: base36 ms timestamp, same-ms counter, random suffix."""
    global _last_timestamp_ms, _counter

    with _state_lock:
        timestamp_ms = int(time.time() * 1000)
        if timestamp_ms <= _last_timestamp_ms:
            # Clock stood still or stepped back: stay on the last timestamp
            timestamp_ms = _last_timestamp_ms
            _counter += 1
        else:
            _last_timestamp_ms = timestamp_ms
            _counter = 0

        counter = _counter

    return _base36(timestamp_ms, 9) + _base36(counter, 3) + _base36(secrets.randbits(20), 4)
