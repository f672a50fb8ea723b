# Append-only JSON storage for logged activities

import enum
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from HabitTracker.config import Settings
from HabitTracker.models import Activity

log = logging.getLogger(__name__)

_ACTIVITY_LIST = TypeAdapter(List[Activity])


class StorageError(Exception):
    """Base class for errors reading or writing the activity file."""


class StorageInitError(StorageError):
    """The data directory could not be created or accessed."""


class StorageReadError(StorageError):
    """The activity file exists but could not be read or parsed."""


class StorageWriteError(StorageError):
    """The activity file could not be written."""


class LoadStatus(enum.Enum):
    OK = "ok"
    EMPTY = "empty"      # no file written yet
    CORRUPT = "corrupt"  # file present but malformed, recovered as empty


class LoadResult(BaseModel):
    status: LoadStatus
    activities: List[Activity] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def recovered(self) -> bool:
        return self.status is LoadStatus.CORRUPT


def dump_activities(activities: List[Activity]) -> bytes:
    return _ACTIVITY_LIST.dump_json(activities, indent=2)


def parse_activities(content: bytes) -> List[Activity]:
    """Parse a stored document. Raises ``pydantic.ValidationError`` if malformed."""
    return _ACTIVITY_LIST.validate_json(content)


class ActivityStore:
    """
    Owns the in-memory activity sequence and its JSON file.

    The file always holds the full sequence as of the last save; every save
    rewrites it through a temporary file and an atomic rename. No locking is
    done, so concurrent writers are last-writer-wins.
    """

    def __init__(self, data_file: Path, strict: bool = False):
        self.data_file = Path(data_file)
        self.strict = strict
        self.activities: List[Activity] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> "ActivityStore":
        return cls(settings.data_file, strict=settings.strict_load)

    def load(self, strict: Optional[bool] = None) -> LoadResult:
        """
        Read the activity file into memory.

        A missing file is an empty history. A malformed file is recovered as
        empty and reported through ``LoadStatus.CORRUPT``, unless ``strict``
        is set, in which case ``StorageReadError`` is raised.
        """
        strict = self.strict if strict is None else strict
        if not self.data_file.exists():
            log.debug(f"No activity file at {self.data_file}; starting empty.")
            self.activities = []
            return LoadResult(status=LoadStatus.EMPTY)

        try:
            content = self.data_file.read_bytes()
        except OSError as e:
            log.error(f"Could not read activity file {self.data_file}: {e}", exc_info=True)
            raise StorageReadError(f"Could not read {self.data_file}: {e}") from e

        try:
            activities = parse_activities(content)
        except ValidationError as e:
            reason = f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}"
            if strict:
                raise StorageReadError(f"Malformed activity file {self.data_file}: {reason}") from e
            log.warning(f"Activity file {self.data_file} is malformed ({reason}); treating it as empty.")
            self.activities = []
            return LoadResult(status=LoadStatus.CORRUPT, error=reason)

        self.activities = activities
        log.debug(f"Loaded {len(activities)} activities from {self.data_file}")
        return LoadResult(status=LoadStatus.OK, activities=list(activities))

    def append(self, hours: float, description: str) -> Activity:
        activity = Activity.now(hours, description)
        if self.activities and activity.timestamp < self.activities[-1].timestamp:
            # Clock went backwards; keep the log ordered
            activity = activity.model_copy(update={"timestamp": self.activities[-1].timestamp})
        self.activities.append(activity)
        try:
            self.save()
        except StorageError:
            self.activities.pop()
            raise
        log.info(f"Logged {activity.hours:.1f}h '{activity.description}'")
        return activity

    def save(self) -> None:
        self._ensure_data_dir()
        payload = dump_activities(self.activities)
        tmp_path: Optional[str] = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self.data_file.parent, prefix=f".{self.data_file.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.data_file)
        except OSError as e:
            log.error(f"Could not write activity file {self.data_file}: {e}", exc_info=True)
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageWriteError(f"Could not write {self.data_file}: {e}") from e
        log.debug(f"Saved {len(self.activities)} activities to {self.data_file}")

    def _ensure_data_dir(self) -> None:
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            log.error(f"Could not create data directory {self.data_file.parent}: {e}", exc_info=True)
            raise StorageInitError(f"Could not create {self.data_file.parent}: {e}") from e
