from face.core.ledgers import ActivityLog, ErrorLedger
from face.models import ActivityEvent, ErrorEvent


def _activity(i: int) -> ActivityEvent:
    return ActivityEvent(f"id{i:03d}", "2026-03-02T09:00:00.000Z", "task", "mason", f"event {i}", "⚡")


def _error(i: int, agent_id: str = "raven") -> ErrorEvent:
    return ErrorEvent(f"id{i:03d}", "2026-03-02T09:00:00.000Z", agent_id, f"error {i}")


def test_activity_fifo_keeps_newest_hundred():
    log = ActivityLog()
    for i in range(1, 106):
        log.append(_activity(i))

    texts = [event.text for event in log]
    assert len(texts) == 100
    assert texts[0] == "event 6"
    assert texts[-1] == "event 105"


def test_activity_fifo_through_dashboard(dashboard):
    for i in range(1, 106):
        dashboard.add_activity("task", "mason", f"event {i}")

    texts = [event.text for event in dashboard.activity]
    assert texts == [f"event {i}" for i in range(6, 106)]


def test_activity_recent_is_newest_first():
    log = ActivityLog([_activity(i) for i in range(5)])
    assert [e.text for e in log.recent(2)] == ["event 4", "event 3"]
    assert log.recent(0) == []
    assert len(log.recent(50)) == 5


def test_activity_loaded_over_capacity_is_truncated():
    log = ActivityLog.from_document([_activity(i).to_dict() for i in range(120)])
    assert len(log) == 100
    assert next(iter(log)).text == "event 20"


def test_error_ledger_keeps_fifty_newest():
    ledger = ErrorLedger()
    for i in range(1, 56):
        ledger.add(_error(i))

    errors = [event.error for event in ledger]
    assert len(errors) == 50
    assert errors[0] == "error 55"
    assert errors[-1] == "error 6"


def test_error_ledger_cap_through_dashboard(dashboard):
    for i in range(1, 56):
        dashboard.report_status("raven", "error", error=f"error {i}")

    errors = dashboard.recent_errors(100)
    assert len(errors) == 50
    assert errors[0]["error"] == "error 55"
    assert errors[-1]["error"] == "error 6"


def test_error_clear_agent_leaves_others():
    ledger = ErrorLedger([_error(1, "raven"), _error(2, "mason"), _error(3, "raven")])

    assert ledger.clear_agent("raven") == 2
    assert [e.agent_id for e in ledger] == ["mason"]
    assert ledger.clear_agent("raven") == 0


def test_error_recent_slices_from_head():
    ledger = ErrorLedger([_error(i) for i in range(5)])
    assert [e.error for e in ledger.recent(2)] == ["error 0", "error 1"]


def test_event_ids_unique_within_dashboard(dashboard):
    for i in range(200):
        dashboard.add_activity("task", "mason", f"event {i}")

    ids = [event.id for event in dashboard.activity]
    assert len(set(ids)) == len(ids)
    assert ids == sorted(ids)
