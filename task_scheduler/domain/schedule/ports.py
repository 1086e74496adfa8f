from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from task_scheduler.domain.schedule.models import ClearResult, ImportSummary, Schedule


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...


class ScheduleRepository(ABC):
    @abstractmethod
    async def init(self) -> None: ...

    @abstractmethod
    async def load_schedule(self) -> Optional[Schedule]: ...

    @abstractmethod
    async def save_schedule(self, schedule: Schedule) -> None: ...

    @abstractmethod
    async def load_import_history(self) -> Optional[ImportSummary]: ...

    @abstractmethod
    async def save_import_history(self, summary: ImportSummary) -> None: ...

    @abstractmethod
    async def clear_all(self) -> ClearResult:
        """Clear every storage area independently and report each one."""
