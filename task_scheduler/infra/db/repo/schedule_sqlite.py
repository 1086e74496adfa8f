from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

import aiosqlite

from task_scheduler.constants import (
    AREA_IMPORT_HISTORY,
    AREA_SETTINGS,
    AREA_TASKS,
    SETTING_START_TIME,
)
from task_scheduler.domain.common.time import parse_time
from task_scheduler.domain.schedule.models import (
    DEFAULT_START_TIME,
    ClearResult,
    ImportSummary,
    Schedule,
    Task,
)
from task_scheduler.domain.schedule.ports import ScheduleRepository
from task_scheduler.infra.db.connection import Database, Statement
from task_scheduler.infra.db.schema_version import apply_migrations

logger = logging.getLogger(__name__)

_CLEAR_SQL: Dict[str, str] = {
    AREA_TASKS: "DELETE FROM tasks;",
    AREA_SETTINGS: "DELETE FROM settings;",
    AREA_IMPORT_HISTORY: "DELETE FROM import_history;",
}


class ScheduleSqliteRepo(ScheduleRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    def _now_iso(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    async def init(self) -> None:
        await apply_migrations(self._db, self._now_iso())

    async def load_schedule(self) -> Optional[Schedule]:
        setting = await self._db.fetchone(
            "SELECT value FROM settings WHERE key = ?;", (SETTING_START_TIME,)
        )
        rows = await self._db.fetchall("SELECT * FROM tasks ORDER BY position ASC;")
        if setting is None and not rows:
            return None

        start = parse_time(setting["value"]) if setting else DEFAULT_START_TIME
        return Schedule(tasks=tuple(self._row_to_task(r) for r in rows), start_time=start)

    async def save_schedule(self, schedule: Schedule) -> None:
        statements: List[Statement] = [("DELETE FROM tasks;", ())]
        for position, task in enumerate(schedule.tasks):
            statements.append(
                (
                    """
                    INSERT INTO tasks(
                      id, position, order_id, task_name, duration_minutes,
                      start_time, end_time, notes
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?);
                    """,
                    (
                        task.id,
                        position,
                        task.order_id,
                        task.name,
                        task.duration_minutes,
                        task.start_time,
                        task.end_time,
                        task.notes,
                    ),
                )
            )
        statements.append(
            (
                "INSERT OR REPLACE INTO settings(key, value) VALUES (?, ?);",
                (SETTING_START_TIME, str(schedule.start_time)),
            )
        )
        await self._db.transaction(statements)

    async def load_import_history(self) -> Optional[ImportSummary]:
        row = await self._db.fetchone("SELECT * FROM import_history ORDER BY id DESC LIMIT 1;")
        return self._row_to_summary(row) if row else None

    async def save_import_history(self, summary: ImportSummary) -> None:
        record = summary.to_record()
        await self._db.execute(
            """
            INSERT INTO import_history(
              source_name, accepted_count, rejected_count, rejections_json, imported_at
            ) VALUES (?, ?, ?, ?, ?);
            """,
            (
                record["sourceName"],
                record["acceptedCount"],
                record["rejectedCount"],
                json.dumps(record["rejections"], ensure_ascii=False) if record["rejections"] else None,
                record["importedAt"],
            ),
        )

    async def clear_all(self) -> ClearResult:
        areas: Dict[str, bool] = {}
        errors: List[str] = []
        for area, sql in _CLEAR_SQL.items():
            try:
                await self._db.execute(sql)
                areas[area] = True
            except aiosqlite.Error as e:
                logger.exception("Failed to clear %s", area)
                areas[area] = False
                errors.append(f"Failed to clear {area}: {e}")
        return ClearResult(success=not errors, areas=areas, errors=tuple(errors))

    def _row_to_task(self, row) -> Task:
        return Task(
            id=row["id"],
            order_id=row["order_id"],
            name=row["task_name"],
            duration_minutes=row["duration_minutes"],
            start_time=row["start_time"],
            end_time=row["end_time"],
            notes=row["notes"] or "",
        )

    def _row_to_summary(self, row) -> ImportSummary:
        raw = row["rejections_json"]
        return ImportSummary.from_record(
            {
                "acceptedCount": row["accepted_count"],
                "rejectedCount": row["rejected_count"],
                "sourceName": row["source_name"],
                "rejections": json.loads(raw) if raw else [],
                "importedAt": row["imported_at"],
            }
        )
