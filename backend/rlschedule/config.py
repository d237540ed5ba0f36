import os
from dataclasses import dataclass
from datetime import date, timezone, tzinfo
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from rlschedule.models.week import WeekLabel, WeekTrackingConfig

load_dotenv()

DEFAULT_SCHEDULE_PATH = Path(__file__).resolve().parent / "data" / "schedule.json"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8081",
]


@dataclass(frozen=True)
class Settings:
    schedule_path: Path
    timezone_name: str
    default_tracking: Optional[WeekTrackingConfig]
    cors_origins: List[str]
    log_level: str

    @property
    def tz(self) -> tzinfo:
        if self.timezone_name.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.timezone_name)


def load_settings() -> Settings:
    """Read settings from the environment (and .env, if present)"""
    schedule_path = Path(os.getenv("SCHEDULE_PATH") or DEFAULT_SCHEDULE_PATH)

    reference_date = os.getenv("ROTATION_REFERENCE_DATE", "2025-11-21").strip()
    reference_label = os.getenv("ROTATION_REFERENCE_LABEL", "B").strip().upper()
    default_tracking = None
    if reference_date:
        default_tracking = WeekTrackingConfig(
            reference_date=date.fromisoformat(reference_date),
            reference_label=WeekLabel(reference_label),
        )

    cors_origins = list(DEFAULT_CORS_ORIGINS)
    extra = os.getenv("CORS_ORIGINS", "")
    if extra:
        cors_origins.extend(o.strip() for o in extra.split(",") if o.strip())

    return Settings(
        schedule_path=schedule_path,
        timezone_name=os.getenv("SCHEDULE_TIMEZONE", "UTC"),
        default_tracking=default_tracking,
        cors_origins=cors_origins,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


settings = load_settings()
