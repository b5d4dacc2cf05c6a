"""Database schema migrations."""

from __future__ import annotations

import sqlite3

from core.exceptions import StoreUnavailableError
from core.logger import get_logger

from .connection import SQLitePool

logger = get_logger(__name__)


SCHEMA_SQL: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS participants (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        scope TEXT NOT NULL,
        user_id BIGINT NOT NULL,
        name TEXT NOT NULL,
        points INTEGER NOT NULL DEFAULT 0 CHECK (points >= 0),
        registered_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        UNIQUE (scope, user_id)
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_participants_scope_points ON participants(scope, points DESC);",
    # One row per (scope, date, kind): the storage-level guard against double draws
    """
    CREATE TABLE IF NOT EXISTS results (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        scope TEXT NOT NULL,
        draw_date TEXT NOT NULL,
        kind TEXT NOT NULL DEFAULT 'daily' CHECK (kind IN ('daily', 'champion')),
        winner_id BIGINT NOT NULL,
        winner_name TEXT NOT NULL,
        winner_points INTEGER NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        UNIQUE (scope, draw_date, kind)
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_results_scope_date ON results(scope, draw_date);",
)


async def run_migrations(pool: SQLitePool) -> None:
    async with pool.connection() as conn:
        try:
            await conn.execute("BEGIN")
            for statement in SCHEMA_SQL:
                await conn.execute(statement)
        except sqlite3.Error as exc:
            await conn.rollback()
            raise StoreUnavailableError(f"Schema migration failed: {exc}") from exc
        else:
            await conn.commit()
    logger.debug("Schema is up to date")
