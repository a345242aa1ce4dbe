from datetime import UTC, datetime, timedelta

import pytest

from face.core import savings
from face.errors import MalformedRequestError
from tests.conftest import drain

BIRTH = datetime(2026, 1, 25, 23, 53, 22, tzinfo=UTC)


def test_compute_uses_defaults():
    result = savings.compute({}, BIRTH + timedelta(hours=10))

    assert result["timeSavings"] == 750
    assert result["projectSavings"] == 0
    assert result["total"] == 750
    assert result["projects"] == []
    assert result["config"] == {"hourlyRate": 150, "activeRatio": 0.5}


def test_compute_floors_time_term_and_adds_manual():
    config = {
        "meta": {
            "birthDate": "2026-01-25T23:53:22Z",
            "savingsConfig": {
                "hourlyRate": 100,
                "activeRatio": 0.25,
                "manualAdditions": [{"name": "Site", "value": 500}, {"name": "Bot", "value": 250.5}],
            },
        }
    }
    result = savings.compute(config, BIRTH + timedelta(minutes=90))

    assert result["timeSavings"] == 37
    assert result["projectSavings"] == 750.5
    assert result["total"] == 787.5


def test_reads_are_monotonic(dashboard, clock):
    first = dashboard.savings()["total"]
    second = dashboard.savings()["total"]
    clock.advance(hours=1)
    third = dashboard.savings()["total"]

    assert first == second
    assert third >= second


def test_add_savings_persists_and_broadcasts(dashboard, subscriber, face_home, clock):
    import json

    before = dashboard.savings()["total"]
    addition, total = dashboard.add_savings("Landing page", "1200")

    assert addition == {"name": "Landing page", "value": 1200, "date": "2026-03-02"}
    assert total == before + 1200
    stored = json.loads((face_home / "agents.json").read_text())
    assert stored["meta"]["savingsConfig"]["manualAdditions"] == [addition]
    assert stored["meta"]["savingsConfig"]["hourlyRate"] == 150
    assert drain(subscriber) == [{"type": "savings", "data": {"total": total, "addition": addition}}]


def test_add_savings_keeps_explicit_date(dashboard):
    addition, _ = dashboard.add_savings("Audit", 300, date="2026-02-01")
    assert addition["date"] == "2026-02-01"


@pytest.mark.parametrize("name,value", [(None, 10), ("", 10), ("Thing", None), ("Thing", 0), ("Thing", "lots")])
def test_add_savings_rejects_malformed(dashboard, subscriber, name, value):
    with pytest.raises(MalformedRequestError):
        dashboard.add_savings(name, value)

    assert "savingsConfig" not in dashboard.config.get("meta", {})
    assert drain(subscriber) == []
