"""
Clock-of-day values and duration text.

Times are pure clock-of-day: arithmetic wraps at 24:00 and no day marker is
kept. Start times are strict two-digit HH:MM; durations also accept a single
hour digit (H:MM) because spreadsheets render them that way.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Union

from task_scheduler.domain.common.errors import FormatError

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

_TIME_RE = re.compile(r"([0-9]{2}):([0-9]{2})")
_DURATION_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})")


@dataclass(frozen=True)
class TimeOfDay:
    hours: int
    minutes: int

    def __post_init__(self) -> None:
        if not (0 <= self.hours <= 23 and 0 <= self.minutes <= 59):
            raise FormatError(f"Invalid time range: {self.hours}:{self.minutes}")

    @classmethod
    def from_minutes(cls, total: int) -> "TimeOfDay":
        total = total % MINUTES_PER_DAY
        return cls(hours=total // MINUTES_PER_HOUR, minutes=total % MINUTES_PER_HOUR)

    @property
    def total_minutes(self) -> int:
        return self.hours * MINUTES_PER_HOUR + self.minutes

    def __str__(self) -> str:
        return format_time(self)


TimeLike = Union[TimeOfDay, str]


def is_valid_time_format(value: Any) -> bool:
    """True for exactly HH:MM with hours 00-23 and minutes 00-59."""
    if not value or not isinstance(value, str):
        return False
    match = _TIME_RE.fullmatch(value)
    if not match:
        return False
    hours, minutes = int(match.group(1)), int(match.group(2))
    return 0 <= hours <= 23 and 0 <= minutes <= 59


def parse_time(value: Any) -> TimeOfDay:
    if not is_valid_time_format(value):
        raise FormatError(f"Invalid time format: {value}")
    hours, minutes = value.split(":")
    return TimeOfDay(hours=int(hours), minutes=int(minutes))


def format_time(t: TimeOfDay) -> str:
    return f"{t.hours:02d}:{t.minutes:02d}"


def as_time(value: TimeLike) -> TimeOfDay:
    """Accept either a TimeOfDay or its HH:MM string."""
    if isinstance(value, TimeOfDay):
        return value
    return parse_time(value)


def add_minutes(t: TimeLike, minutes: int) -> TimeOfDay:
    """
    Add a non-negative number of minutes, wrapping past midnight.

    Callers chain one task at a time, so one call never needs to span more
    than a day, but larger values still wrap correctly.
    """
    if minutes < 0:
        raise ValueError("minutes must be non-negative")
    start = as_time(t)
    return TimeOfDay.from_minutes(start.total_minutes + minutes)


def time_from_datetime(dt: datetime) -> TimeOfDay:
    return TimeOfDay(hours=dt.hour, minutes=dt.minute)


def is_valid_duration_format(value: Any) -> bool:
    if not value or not isinstance(value, str):
        return False
    match = _DURATION_RE.fullmatch(value)
    if not match:
        return False
    hours, minutes = int(match.group(1)), int(match.group(2))
    return 0 <= hours <= 23 and 0 <= minutes <= 59


def parse_duration(value: Any) -> int:
    """Parse H:MM or HH:MM duration text into total minutes."""
    if not is_valid_duration_format(value):
        raise FormatError(f"Invalid time format: {value}. Expected HH:MM")
    hours, minutes = value.split(":")
    return int(hours) * MINUTES_PER_HOUR + int(minutes)


def format_duration(minutes: int) -> str:
    """Render whole minutes as H:MM (hours unpadded, may be negative)."""
    sign = "-" if minutes < 0 else ""
    minutes = abs(minutes)
    return f"{sign}{minutes // MINUTES_PER_HOUR}:{minutes % MINUTES_PER_HOUR:02d}"
