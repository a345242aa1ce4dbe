"""HTTP surface tests against an app bound to a test dashboard."""

import pytest
from fastapi.testclient import TestClient

from face.api.main import create_app
from face.lib import config


@pytest.fixture
def app(dashboard, face_home):
    cfg = config.load_config()
    cfg.heartbeat_interval = 0
    cfg.watch_config = False
    return create_app(dashboard, cfg)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


def test_get_config(client, dashboard):
    response = client.get("/api/config")
    assert response.status_code == 200
    assert set(response.json()["agents"]) == {"mason", "raven", "quill"}


def test_report_status_round_trip(client, clock):
    response = client.post("/api/status/mason", json={"status": "working", "task": "Refactor cache layer"})

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["agent"] == {
        "status": "working",
        "task": "Refactor cache layer",
        "detail": None,
        "progress": None,
        "error": None,
        "lastActive": "2026-03-02T09:00:00.000Z",
    }

    assert client.get("/api/status/mason").json() == body["agent"]
    assert client.get("/api/status").json()["agents"]["mason"] == body["agent"]


def test_report_unknown_agent_is_404(client, dashboard):
    response = client.post("/api/status/ghost", json={"status": "working"})

    assert response.status_code == 404
    assert "ghost" in response.json()["detail"]
    assert dashboard.register.get("ghost") is None


def test_get_unreported_agent_is_404(client):
    assert client.get("/api/status/quill").status_code == 404


def test_progress_out_of_range_is_rejected(client, dashboard):
    response = client.post("/api/status/mason", json={"status": "working", "progress": 150})
    assert response.status_code == 422
    assert dashboard.register.get("mason") is None


def test_bulk_update(client, dashboard):
    response = client.post(
        "/api/status", json={"mason": {"status": "idle"}, "ghost": {"status": "working"}}
    )

    assert response.json() == {"ok": True, "updated": 1}
    assert dashboard.get_status("mason").status == "idle"


def test_uptime_endpoints(client, clock):
    client.post("/api/status/quill", json={"status": "working", "task": "Draft"})
    clock.advance(seconds=9)

    everyone = client.get("/api/uptime").json()
    single = client.get("/api/uptime/quill").json()

    assert everyone["date"] == "2026-03-02"
    assert everyone["agents"]["quill"]["currentMs"] == 9000
    assert single == {"totalMs": 0, "sessions": 0, "currentMs": 9000}
    assert client.get("/api/uptime/raven").json() == {"totalMs": 0, "sessions": 0}


def test_errors_limit_and_clear(client, dashboard):
    for i in range(60):
        dashboard.report_status("raven" if i % 2 else "mason", "error", error=f"e{i}")

    assert len(client.get("/api/errors").json()) == 20
    assert len(client.get("/api/errors", params={"limit": 5}).json()) == 5
    assert len(client.get("/api/errors", params={"limit": 500}).json()) == 50

    response = client.delete("/api/errors/raven")
    assert response.json() == {"ok": True, "cleared": 25}
    remaining = client.get("/api/errors", params={"limit": 50}).json()
    assert {e["agentId"] for e in remaining} == {"mason"}
    assert client.get("/api/status/raven").json()["error"] is None
    assert client.get("/api/status/mason").json()["error"] == "e58"


def test_settings(client):
    assert client.get("/api/settings").json()["soundEnabled"] is True

    response = client.post("/api/settings", json={"soundEnabled": False})

    assert response.json()["ok"] is True
    assert response.json()["settings"]["soundEnabled"] is False
    assert client.get("/api/settings").json()["soundEnabled"] is False


def test_activity(client):
    response = client.post("/api/activity", json={"type": "cron", "agent": "raven", "text": "Nightly sync"})

    assert response.status_code == 201
    assert response.json()["icon"] == "⏰"

    client.post("/api/activity", json={"type": "message", "agent": "quill", "text": "Hello"})
    listed = client.get("/api/activity", params={"limit": 1}).json()
    assert [e["text"] for e in listed] == ["Hello"]


def test_activity_missing_fields_is_400(client, dashboard):
    response = client.post("/api/activity", json={"type": "cron", "agent": "raven"})
    assert response.status_code == 400
    assert len(dashboard.activity) == 0


def test_savings(client):
    before = client.get("/api/savings").json()
    response = client.post("/api/savings", json={"name": "Landing page", "value": 1200})

    assert response.status_code == 200
    body = response.json()
    assert body["addition"]["value"] == 1200
    assert body["total"] == before["total"] + 1200
    after = client.get("/api/savings").json()
    assert after["projects"] == [body["addition"]]
    assert after["projectSavings"] == 1200


def test_savings_missing_fields_is_400(client):
    assert client.post("/api/savings", json={"name": "Nothing"}).status_code == 400


def test_savings_non_numeric_value_is_400(client):
    response = client.post("/api/savings", json={"name": "Landing page", "value": "abc"})

    assert response.status_code == 400
    assert client.get("/api/savings").json()["projects"] == []


def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "ok"
    assert body["agents"] == 3
    assert body["persistence"]["ok"] is True


def test_security_headers(client):
    response = client.get("/api/health")
    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["x-content-type-options"] == "nosniff"
    assert "frame-ancestors 'none'" in response.headers["content-security-policy"]


def test_cors_allows_configured_origin_only(client):
    allowed = client.get("/api/health", headers={"Origin": "http://localhost:3000"})
    denied = client.get("/api/health", headers={"Origin": "https://evil.example"})

    assert allowed.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert "access-control-allow-origin" not in denied.headers


def test_app_builds_dashboard_from_config(face_home, documents):
    cfg = config.load_config()
    cfg.heartbeat_interval = 0
    cfg.watch_config = False

    with TestClient(create_app(cfg=cfg)) as client:
        response = client.post("/api/status/mason", json={"status": "online"})

    assert response.status_code == 200
    assert (face_home / "status.json").exists()
