from datetime import datetime, timezone

import pytest

from HabitTracker.config import Settings
from HabitTracker.models import Activity


@pytest.fixture
def settings(tmp_path, monkeypatch):
    monkeypatch.setenv("HABIT_TRACKER_DATA_DIR", str(tmp_path / "habit-tracker"))
    monkeypatch.setenv("HABIT_TRACKER_LOCAL_TZ", "UTC")
    return Settings()


@pytest.fixture
def make_activity():
    def _make(ts: datetime, hours: float = 1.0, description: str = "practice") -> Activity:
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return Activity(timestamp=ts, hours=hours, description=description)
    return _make
