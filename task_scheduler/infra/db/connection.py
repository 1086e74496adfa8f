# task_scheduler/infra/db/connection.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, Tuple

import aiosqlite

Statement = Tuple[str, Sequence[Any]]


class Database:
    """
    Async SQLite helper for the schedule store:
    - one connection per operation, rows as aiosqlite.Row
    - WAL journal for the schema script
    - `transaction` runs several statements and commits them together
    """

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)

    @property
    def path(self) -> str:
        return self._path

    async def executescript(self, sql: str) -> None:
        async with aiosqlite.connect(self._path) as db:
            await db.execute("PRAGMA journal_mode=WAL;")
            await db.executescript(sql)
            await db.commit()

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> None:
        async with aiosqlite.connect(self._path) as db:
            await db.execute(sql, params)
            await db.commit()

    async def transaction(self, statements: Iterable[Statement]) -> None:
        async with aiosqlite.connect(self._path) as db:
            try:
                for sql, params in statements:
                    await db.execute(sql, params)
            except aiosqlite.Error:
                await db.rollback()
                raise
            await db.commit()

    async def fetchone(self, sql: str, params: Sequence[Any] = ()) -> Optional[aiosqlite.Row]:
        async with aiosqlite.connect(self._path) as db:
            db.row_factory = aiosqlite.Row
            cur = await db.execute(sql, params)
            return await cur.fetchone()

    async def fetchall(self, sql: str, params: Sequence[Any] = ()) -> list[aiosqlite.Row]:
        async with aiosqlite.connect(self._path) as db:
            db.row_factory = aiosqlite.Row
            cur = await db.execute(sql, params)
            return list(await cur.fetchall())
