from __future__ import annotations
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

class Activity(BaseModel):
    """
    One logged unit of time spent on an improvement task.
    """
    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="UTC instant the activity was logged")
    hours: float = Field(..., allow_inf_nan=False, description="Hours spent")
    description: str = Field(..., description="Free-text description, e.g. 'read'")

    @field_validator("timestamp")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        # Naive timestamps in older files are UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        return value.isoformat().replace("+00:00", "Z")

    @classmethod
    def now(cls, hours: float, description: str) -> "Activity":
        # Only new entries are checked; stored negative values load as-is
        if hours < 0:
            raise ValueError(f"hours must be non-negative, got {hours}")
        return cls(timestamp=datetime.now(timezone.utc), hours=hours, description=description)
