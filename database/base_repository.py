"""Base repository pattern for database operations."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from core.exceptions import DuplicateRecordError, StoreUnavailableError
from database.connection import get_db_pool


@contextmanager
def store_errors() -> Iterator[None]:
    """Translate sqlite3 errors into application errors."""
    try:
        yield
    except sqlite3.IntegrityError as exc:
        raise DuplicateRecordError(str(exc)) from exc
    except sqlite3.Error as exc:
        raise StoreUnavailableError(str(exc)) from exc


class BaseRepository:
    """Base repository with common database operations."""

    @staticmethod
    async def execute(query: str, params: Sequence[Any] = ()) -> int:
        """Execute a query and return the number of affected rows."""
        pool = get_db_pool()
        async with pool.connection() as conn:
            with store_errors():
                cursor = await conn.execute(query, params)
                await conn.commit()
                return cursor.rowcount

    @staticmethod
    async def fetch_one(query: str, params: Sequence[Any] = ()) -> Optional[Tuple]:
        """Fetch a single row."""
        pool = get_db_pool()
        async with pool.connection() as conn:
            with store_errors():
                cursor = await conn.execute(query, params)
                return await cursor.fetchone()

    @staticmethod
    async def fetch_all(query: str, params: Sequence[Any] = ()) -> List[Tuple]:
        """Fetch all rows."""
        pool = get_db_pool()
        async with pool.connection() as conn:
            with store_errors():
                cursor = await conn.execute(query, params)
                return [row async for row in cursor]
