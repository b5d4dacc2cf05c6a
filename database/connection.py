"""SQLite connection pool handing out one connection per operation."""

from __future__ import annotations

import asyncio
import sqlite3
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Optional

import aiosqlite

from core.constants import DatabaseDefaults
from core.exceptions import StoreUnavailableError
from core.logger import get_logger

logger = get_logger(__name__)


class SQLitePool:
    """Fixed-size pool of aiosqlite connections.

    Every handler acquires a connection with ``async with pool.connection()``
    and gives it back on every exit path; no connection is held across
    requests.
    """

    def __init__(
        self,
        database_path: str,
        pool_size: int = DatabaseDefaults.POOL_SIZE,
        busy_timeout_ms: int = DatabaseDefaults.BUSY_TIMEOUT,
    ) -> None:
        self.database_path = Path(database_path)
        self.pool_size = pool_size
        self.busy_timeout_ms = busy_timeout_ms
        self._connections: List[aiosqlite.Connection] = []
        self._idle: Optional[asyncio.Queue[aiosqlite.Connection]] = None
        self._init_lock = asyncio.Lock()
        self._initialized = False

    @property
    def size(self) -> int:
        return len(self._connections)

    async def init_pool(self) -> None:
        async with self._init_lock:
            if self._initialized:
                return

            self.database_path.parent.mkdir(parents=True, exist_ok=True)
            self._idle = asyncio.Queue()
            try:
                for _ in range(self.pool_size):
                    conn = await aiosqlite.connect(self.database_path.as_posix())
                    await self._apply_pragma(conn)
                    self._connections.append(conn)
                    self._idle.put_nowait(conn)
            except sqlite3.Error as exc:
                await self._close_all()
                raise StoreUnavailableError(f"Cannot open database {self.database_path}: {exc}") from exc

            self._initialized = True
            logger.debug(f"SQLite pool ready: {self.database_path} x{self.pool_size}")

    async def close(self) -> None:
        async with self._init_lock:
            await self._close_all()
            self._initialized = False

    async def _close_all(self) -> None:
        while self._connections:
            conn = self._connections.pop()
            await conn.close()
        self._idle = None

    async def _apply_pragma(self, conn: aiosqlite.Connection) -> None:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute("PRAGMA foreign_keys=ON")
        await conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout_ms)}")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        if not self._initialized:
            await self.init_pool()
        conn = await self._idle.get()
        try:
            yield conn
        finally:
            if conn.in_transaction:
                await conn.rollback()
            self._idle.put_nowait(conn)


_db_pool: Optional[SQLitePool] = None


def get_db_pool() -> SQLitePool:
    if _db_pool is None:
        raise StoreUnavailableError("Database pool not initialized")
    return _db_pool


async def init_db_pool(database_path: str, pool_size: int, busy_timeout_ms: int) -> SQLitePool:
    global _db_pool
    pool = SQLitePool(database_path=database_path, pool_size=pool_size, busy_timeout_ms=busy_timeout_ms)
    await pool.init_pool()
    _db_pool = pool
    return pool


async def close_db_pool() -> None:
    global _db_pool
    if _db_pool is not None:
        await _db_pool.close()
        _db_pool = None
