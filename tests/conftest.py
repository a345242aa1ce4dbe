import json
from datetime import UTC, datetime, timedelta

import pytest

from face.core import Dashboard
from face.lib import config, paths
from face.lib.store import JsonStore

AGENT_CONFIG = {
    "agents": {
        "mason": {"name": "Mason", "department": "engineering"},
        "raven": {"name": "Raven", "department": "command"},
        "quill": {"name": "Quill", "department": "content"},
    },
    "departments": {
        "engineering": {"name": "Engineering"},
        "command": {"name": "Command"},
        "content": {"name": "Content"},
    },
    "meta": {"birthDate": "2026-01-25T23:53:22Z"},
}


class FakeClock:
    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def face_home(monkeypatch, tmp_path):
    """Isolated data dir per test; FACE_HOME points at it and the config cache is reset."""
    home = tmp_path / "face"
    home.mkdir()
    monkeypatch.setenv("FACE_HOME", str(home))
    config.clear_cache()
    yield home
    config.clear_cache()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 2, 9, 0, 0, tzinfo=UTC))


@pytest.fixture
def documents(face_home):
    (face_home / "agents.json").write_text(json.dumps(AGENT_CONFIG))
    return JsonStore(paths.data_dir())


@pytest.fixture
def dashboard(documents, clock):
    return Dashboard(documents, clock=clock)


@pytest.fixture
def subscriber(dashboard):
    """A connected subscriber with the init snapshot already drained."""
    sub = dashboard.subscribe()
    sub.queue.get_nowait()
    return sub


def drain(subscriber) -> list[dict]:
    messages = []
    while not subscriber.queue.empty():
        messages.append(json.loads(subscriber.queue.get_nowait()))
    return messages
