"""Transactional access to one scope's points and draw results.

A ledger session runs inside ``BEGIN IMMEDIATE``: SQLite grants the write
lock up front, so the "is there a result for today" check and the insert
that follows cannot interleave with another session on the same database.
The ``UNIQUE(scope, draw_date, kind)`` constraint backs this up at the
storage level.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

import aiosqlite

from core.constants import LotteryDefaults, ResultKind
from database.base_repository import store_errors
from database.connection import get_db_pool
from database.models import DrawResult, Participant
from database.repositories import RESULT_COLUMNS


class DrawLedger:
    """Reads and writes for a single scope on an open transaction."""

    def __init__(self, conn: aiosqlite.Connection, scope: str) -> None:
        self.conn = conn
        self.scope = scope

    async def find_result(self, draw_date: str, kind: ResultKind = ResultKind.DAILY) -> Optional[DrawResult]:
        with store_errors():
            cursor = await self.conn.execute(
                f"SELECT {RESULT_COLUMNS} FROM results WHERE scope=? AND draw_date=? AND kind=?",
                (self.scope, draw_date, kind.value),
            )
            row = await cursor.fetchone()
        return DrawResult.from_row(row) if row else None

    async def participants(self) -> List[Participant]:
        """All participants of the scope in storage order."""
        with store_errors():
            cursor = await self.conn.execute(
                "SELECT user_id, name, points FROM participants WHERE scope=? ORDER BY id ASC",
                (self.scope,),
            )
            rows = await cursor.fetchall()
        return [Participant.from_row(row) for row in rows]

    async def max_points(self) -> int:
        with store_errors():
            cursor = await self.conn.execute(
                "SELECT COALESCE(MAX(points), 0) FROM participants WHERE scope=?",
                (self.scope,),
            )
            row = await cursor.fetchone()
        return int(row[0])

    async def award_point(self, participant: Participant) -> Participant:
        """Increment the participant's points and return the updated record."""
        with store_errors():
            await self.conn.execute(
                "UPDATE participants SET points = points + ? WHERE scope=? AND user_id=?",
                (LotteryDefaults.POINTS_PER_WIN, self.scope, participant.id),
            )
            cursor = await self.conn.execute(
                "SELECT points FROM participants WHERE scope=? AND user_id=?",
                (self.scope, participant.id),
            )
            row = await cursor.fetchone()
        return participant.with_points(int(row[0]))

    async def record(self, result: DrawResult) -> None:
        """Insert a draw result; raises DuplicateRecordError if one exists."""
        with store_errors():
            await self.conn.execute(
                """
                INSERT INTO results (scope, draw_date, kind, winner_id, winner_name, winner_points)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    self.scope,
                    result.date,
                    result.kind.value,
                    result.winner.id,
                    result.winner.name,
                    result.winner.points,
                ),
            )


@asynccontextmanager
async def open_ledger(scope: str) -> AsyncIterator[DrawLedger]:
    """Open a write transaction for ``scope``; commit on success.

    An exception leaving the block skips the commit and the pool rolls the
    connection back before returning it.
    """
    pool = get_db_pool()
    async with pool.connection() as conn:
        with store_errors():
            await conn.execute("BEGIN IMMEDIATE")
        yield DrawLedger(conn, scope)
        with store_errors():
            await conn.commit()
