from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from task_scheduler.constants import DEFAULT_START_TIME
from task_scheduler.domain.common.time import TimeOfDay, is_valid_time_format, parse_time


@dataclass(frozen=True)
class Settings:
    db_path: Path
    default_start_time: TimeOfDay
    timezone: str
    log_level: str


def load_settings() -> Settings:
    load_dotenv(find_dotenv(usecwd=True))

    db_raw = os.getenv("DB_PATH", "data/schedule.db").strip()
    start_raw = os.getenv("DEFAULT_START_TIME", DEFAULT_START_TIME).strip()
    tz = os.getenv("TZ", "UTC").strip() or "UTC"
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    if not db_raw:
        raise RuntimeError("DB_PATH is empty in .env")
    if not is_valid_time_format(start_raw):
        raise RuntimeError(f"DEFAULT_START_TIME must be HH:MM, got {start_raw!r}")

    return Settings(
        db_path=Path(db_raw),
        default_start_time=parse_time(start_raw),
        timezone=tz,
        log_level=log_level,
    )
