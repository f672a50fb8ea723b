import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from HabitTracker.models import Activity


def test_now_stamps_utc():
    before = datetime.now(timezone.utc)
    activity = Activity.now(1.5, "read")
    after = datetime.now(timezone.utc)
    assert before <= activity.timestamp <= after
    assert activity.timestamp.utcoffset() == timedelta(0)


def test_timestamp_serializes_with_z_suffix():
    activity = Activity(
        timestamp=datetime(2026, 10, 17, 8, 30, tzinfo=timezone.utc), hours=2.0, description="walk"
    )
    data = json.loads(activity.model_dump_json())
    assert data == {"timestamp": "2026-10-17T08:30:00Z", "hours": 2.0, "description": "walk"}


def test_naive_and_offset_timestamps_are_normalized_to_utc():
    naive = Activity(timestamp=datetime(2026, 1, 1, 12, 0), hours=1, description="x")
    assert naive.timestamp == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    offset = Activity.model_validate(
        {"timestamp": "2026-01-01T14:00:00+02:00", "hours": 1, "description": "x"}
    )
    assert offset.timestamp.utcoffset() == timedelta(0)
    assert offset.timestamp.hour == 12


def test_negative_hours_rejected_for_new_entries():
    with pytest.raises(ValueError):
        Activity.now(-1.0, "oops")


def test_stored_negative_hours_are_accepted():
    activity = Activity.model_validate(
        {"timestamp": "2026-01-01T12:00:00Z", "hours": -0.5, "description": "correction"}
    )
    assert activity.hours == -0.5


def test_non_finite_hours_rejected():
    with pytest.raises(ValidationError):
        Activity.model_validate(
            {"timestamp": "2026-01-01T12:00:00Z", "hours": float("inf"), "description": "x"}
        )


def test_empty_description_accepted():
    assert Activity.now(0.0, "").description == ""


def test_activity_is_immutable():
    activity = Activity.now(1.0, "read")
    with pytest.raises(ValidationError):
        activity.hours = 3.0
