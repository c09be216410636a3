from __future__ import annotations

import re
from datetime import datetime, timezone

import pytest

from eventq_sdk.keys import QUEUE_PATH, build_queue_key, format_timestamp
from eventq_sdk.models import (
    create_error_event,
    create_event,
    create_feature_usage_event,
    create_log_event,
    create_not_found_event,
)

MOMENT = datetime(2024, 5, 1, 12, 30, 15, 123456, tzinfo=timezone.utc)


def test_queue_key_shape() -> None:
    key = build_queue_key(QUEUE_PATH, MOMENT)
    assert re.fullmatch(r"ex-q-2024-05-01T12:30:15\.123Z-[0-9a-f]{12}", key)
    assert key != build_queue_key(QUEUE_PATH, MOMENT)


def test_naive_timestamps_are_treated_as_utc() -> None:
    assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05.000Z"


def test_create_event_omits_empty_fields() -> None:
    event = create_event("usage", date=MOMENT)
    assert event == {"type": "usage", "date": "2024-05-01T12:30:15.123Z"}


def test_create_event_requires_type() -> None:
    with pytest.raises(ValueError):
        create_event("")


def test_log_event() -> None:
    event = create_log_event("cache warm", source="worker", level="info", reference_id="ref-1", date=MOMENT)
    assert event == {
        "type": "log",
        "date": "2024-05-01T12:30:15.123Z",
        "message": "cache warm",
        "source": "worker",
        "reference_id": "ref-1",
        "data": {"level": "info"},
    }


def test_usage_and_not_found_events() -> None:
    assert create_feature_usage_event("export")["source"] == "export"
    assert create_not_found_event("/missing")["type"] == "404"


def test_error_event() -> None:
    event = create_error_event(KeyError("user_id"))
    assert event["type"] == "error"
    assert event["message"] == "'user_id'"
    assert event["data"]["error_type"] == "builtins.KeyError"
