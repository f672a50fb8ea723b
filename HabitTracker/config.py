import os
import sys
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "habit-tracker"


def default_data_dir() -> Path:
    """Per-user application data directory, e.g. ~/.local/share/habit-tracker."""
    if sys.platform.startswith("win"):
        base = os.getenv("APPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Roaming"
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        base = os.getenv("XDG_DATA_HOME")
        root = Path(base) if base else Path.home() / ".local" / "share"
    return root / APP_DIR_NAME


class Settings(BaseSettings):
    # --- Storage ---
    data_dir: Path = default_data_dir()
    data_filename: str = "activities.json"
    strict_load: bool = False # If true, a malformed data file is an error instead of being read as empty

    # --- Dashboard ---
    local_tz: Optional[str] = None # IANA name, e.g. "Europe/Berlin". None uses the system timezone
    default_view_days: int = 365
    chart_days: int = 7
    day_bar_width: int = 20
    month_bar_width: int = 30
    months_shown: int = 3

    model_config = SettingsConfigDict(
        env_prefix="HABIT_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra='ignore'
    )

    @property
    def data_file(self) -> Path:
        return self.data_dir / self.data_filename
