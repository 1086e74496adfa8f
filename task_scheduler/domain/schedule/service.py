from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from task_scheduler.domain.common.time import TimeOfDay
from task_scheduler.domain.schedule.models import ClearResult, ImportSummary, Schedule
from task_scheduler.domain.schedule.ports import Clock, ScheduleRepository
from task_scheduler.domain.schedule import triggers

logger = logging.getLogger(__name__)


class ScheduleService:
    """
    Owns the authoritative schedule for one session. No sqlite here.

    Mutating calls run one at a time under a lock; each applies a trigger to
    the current value and persists the result. If a trigger raises, the
    current value and the stored copy stay as they were.
    """

    def __init__(
        self,
        repo: ScheduleRepository,
        clock: Clock,
        default_start: Optional[TimeOfDay] = None,
    ) -> None:
        self._repo = repo
        self._clock = clock
        self._default_start = default_start
        self._lock = asyncio.Lock()
        self._schedule: Optional[Schedule] = None

    @property
    def schedule(self) -> Schedule:
        if self._schedule is None:
            return self._empty()
        return self._schedule

    def _empty(self) -> Schedule:
        if self._default_start is None:
            return Schedule.empty()
        return Schedule.empty(self._default_start)

    async def load(self) -> Schedule:
        async with self._lock:
            stored = await self._repo.load_schedule()
            self._schedule = triggers.recalculate(stored or self._empty())
            logger.info(
                "Loaded schedule: %d task(s) from %s",
                len(self._schedule.tasks),
                self._schedule.start_time,
            )
            return self._schedule

    async def _commit(self, schedule: Schedule) -> Schedule:
        await self._repo.save_schedule(schedule)
        self._schedule = schedule
        return schedule

    async def import_rows(self, raw_rows: Any, source_name: Optional[str] = None) -> ImportSummary:
        async with self._lock:
            updated, summary = triggers.on_import(self.schedule, raw_rows, source_name)
            await self._commit(updated)

            summary = summary.stamped(self._clock.now().isoformat())
            try:
                await self._repo.save_import_history(summary)
            except Exception:
                # tasks stay saved; the caller still gets the summary
                logger.exception("Failed to save import history for %s", summary.source_name)
            if summary.rejected_count:
                logger.warning(
                    "Import of %s rejected %d row(s)", summary.source_name, summary.rejected_count
                )
            return summary

    async def reorder(self, from_index: int, to_index: int) -> Schedule:
        async with self._lock:
            return await self._commit(triggers.on_reorder(self.schedule, from_index, to_index))

    async def change_start_time(self, new_start: str) -> Schedule:
        async with self._lock:
            return await self._commit(triggers.on_start_time_change(self.schedule, new_start))

    async def set_to_now(self) -> Schedule:
        now = self._clock.now()
        async with self._lock:
            return await self._commit(triggers.on_set_to_now(self.schedule, now))

    async def update_notes(self, task_id: str, notes: Optional[str]) -> Schedule:
        async with self._lock:
            return await self._commit(triggers.on_update_notes(self.schedule, task_id, notes))

    async def last_import(self) -> Optional[ImportSummary]:
        return await self._repo.load_import_history()

    async def reset(self) -> ClearResult:
        async with self._lock:
            result = await self._repo.clear_all()
            if result.success:
                self._schedule = self._empty()
            else:
                logger.error("Reset partially failed: %s", "; ".join(result.errors))
            return result
