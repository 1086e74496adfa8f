from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from task_scheduler.domain.schedule.ports import Clock


class SystemClock(Clock):
    """Wall clock in the configured zone; only used to capture "now"."""

    def __init__(self, tz_name: str) -> None:
        self._tz = ZoneInfo(tz_name)

    def now(self) -> datetime:
        return datetime.now(self._tz)
