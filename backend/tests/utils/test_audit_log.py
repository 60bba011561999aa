import datetime as dt
import json
from typing import Any, List

import pytest
from tablebook.utils import audit_log
from tablebook.utils.request_id import set_request_id


def test_emit_audit_log_outputs_json(monkeypatch: pytest.MonkeyPatch) -> None:
    messages: List[str] = []

    class DummyLogger:
        def info(self, message: str) -> None:
            messages.append(message)

    monkeypatch.setattr(audit_log, "_audit_logger", DummyLogger())

    set_request_id("req-123")
    try:
        audit_log.emit_audit_log(
            action="booking.admitted",
            booking_id=7,
            date=dt.date(2024, 6, 10),
            time="13:30",
            guests=2,
        )
    finally:
        set_request_id(None)
    assert len(messages) == 1
    payload = json.loads(messages[0])
    assert payload["action"] == "booking.admitted"
    assert payload["request_id"] == "req-123"
    assert payload["booking_id"] == 7
    assert payload["date"] == "2024-06-10"
    assert payload["time"] == "13:30"
    assert "timestamp" in payload


def test_emit_audit_log_drops_missing_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    messages: List[str] = []

    class DummyLogger:
        def info(self, message: str) -> None:
            messages.append(message)

    monkeypatch.setattr(audit_log, "_audit_logger", DummyLogger())

    audit_log.emit_audit_log(
        action="booking.rejected",
        booking_id=None,
        date=dt.date(2024, 6, 15),
        time="13:00",
        reason="DateClosedError",
        extra={"source": "test"},
    )
    payload = json.loads(messages[0])
    assert "booking_id" not in payload
    assert "guests" not in payload
    assert payload["reason"] == "DateClosedError"
    assert payload["source"] == "test"


def test_emit_audit_log_raises_on_logger_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    class DummyLogger:
        def info(self, _: Any) -> None:
            raise ValueError("fail")

    monkeypatch.setattr(audit_log, "_audit_logger", DummyLogger())

    with pytest.raises(RuntimeError):
        audit_log.emit_audit_log(action="booking.cancelled", booking_id=1, date=None, time=None)
