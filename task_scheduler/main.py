from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from task_scheduler.config import load_settings
from task_scheduler.domain.common.errors import DomainError
from task_scheduler.domain.schedule.models import ImportSummary, Schedule
from task_scheduler.domain.schedule.service import ScheduleService
from task_scheduler.infra.clock.system_clock import SystemClock
from task_scheduler.infra.db.connection import Database
from task_scheduler.infra.db.repo.schedule_sqlite import ScheduleSqliteRepo
from task_scheduler.infra.tabular.csv_source import read_csv_rows

logger = logging.getLogger(__name__)


def render_schedule(schedule: Schedule) -> str:
    lines = [f"Start time: {schedule.start_time}"]
    if not schedule.tasks:
        lines.append("No tasks yet. Import a task sheet to get started.")
        return "\n".join(lines)

    name_width = max(len("Task"), *(len(t.name) for t in schedule.tasks))
    lines.append(f"{'#':>3}  {'Order':>5}  {'Task':<{name_width}}  {'Min':>4}  Start  End")
    for position, task in enumerate(schedule.tasks):
        lines.append(
            f"{position:>3}  {task.order_id:>5}  {task.name:<{name_width}}  "
            f"{task.duration_minutes:>4}  {task.formatted_start_time()}  {task.formatted_end_time()}"
        )
        if task.notes:
            lines.append(f"{'':>3}  {'':>5}  note: {task.notes}")
    return "\n".join(lines)


def render_summary(summary: ImportSummary) -> str:
    lines = [
        f"Imported {summary.source_name}: "
        f"{summary.accepted_count} accepted, {summary.rejected_count} rejected"
    ]
    for rejection in summary.rejections:
        lines.append(f"  row {rejection.row_number}: {rejection.reason}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="task-scheduler",
        description="Sequential task schedule: import tasks, reorder them, move the start time.",
    )
    sub = ap.add_subparsers(dest="command")

    sub.add_parser("show", help="Print the current schedule")

    p_import = sub.add_parser("import", help="Import tasks from a CSV export of the task sheet")
    p_import.add_argument("path")

    p_start = sub.add_parser("start", help="Set the schedule start time (HH:MM)")
    p_start.add_argument("time")

    sub.add_parser("now", help="Set the schedule start time to the current time")

    p_move = sub.add_parser("move", help="Move the task at one position to another")
    p_move.add_argument("from_index", type=int)
    p_move.add_argument("to_index", type=int)

    p_notes = sub.add_parser("notes", help="Set the notes of a task")
    p_notes.add_argument("task_id")
    p_notes.add_argument("text")

    sub.add_parser("history", help="Show the last import summary")
    sub.add_parser("reset", help="Clear tasks, settings and import history")
    return ap


async def run(args: argparse.Namespace, service: ScheduleService) -> int:
    command = args.command or "show"

    if command == "import":
        source = read_csv_rows(args.path)
        summary = await service.import_rows(source.rows, source.source_name)
        print(render_summary(summary))
    elif command == "start":
        await service.change_start_time(args.time)
    elif command == "now":
        await service.set_to_now()
    elif command == "move":
        await service.reorder(args.from_index, args.to_index)
    elif command == "notes":
        await service.update_notes(args.task_id, args.text)
    elif command == "history":
        summary = await service.last_import()
        print(render_summary(summary) if summary else "No imports yet.")
        return 0
    elif command == "reset":
        result = await service.reset()
        if not result.success:
            for error in result.errors:
                print(f"Reset partially failed: {error}", file=sys.stderr)
            return 1
        print("All data cleared.")
        return 0

    print(render_schedule(service.schedule))
    return 0


async def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    os.makedirs(os.path.dirname(settings.db_path) or ".", exist_ok=True)
    repo = ScheduleSqliteRepo(Database(settings.db_path))
    await repo.init()

    service = ScheduleService(repo, SystemClock(settings.timezone), settings.default_start_time)
    await service.load()

    try:
        return await run(args, service)
    except (DomainError, FileNotFoundError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
