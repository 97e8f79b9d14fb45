"""
aiosqlite connections shared by the order, stock and catalog stores.

Connections run in autocommit mode. ``get_transaction`` opens the write
transaction with ``BEGIN IMMEDIATE`` so the version read and the update of
an order compare-and-swap happen under the database write lock, and a
batch of stock rows lands entirely or not at all.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from prodline.config import get_logger, get_settings

logger = get_logger(__name__)

PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """A fixed set of connections to one database file."""

    def __init__(self, db_path: Path, size: int, busy_timeout: int):
        self.db_path = db_path
        self.size = size
        self.busy_timeout = busy_timeout
        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._all: list[aiosqlite.Connection] = []

    async def open(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        for _ in range(self.size):
            conn = await aiosqlite.connect(self.db_path, isolation_level=None)
            conn.row_factory = aiosqlite.Row
            for pragma in PRAGMAS:
                await conn.execute(pragma)
            await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
            self._all.append(conn)
            self._idle.put_nowait(conn)
        logger.info("connection_pool_opened", db_path=str(self.db_path), size=self.size)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        async with self.connection() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
                await conn.execute("COMMIT")
            except BaseException:
                if conn.in_transaction:
                    await conn.execute("ROLLBACK")
                raise

    async def close(self) -> None:
        for conn in self._all:
            await conn.close()
        self._all.clear()
        logger.info("connection_pool_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def open_pool(db_path: Path | None = None, size: int | None = None) -> ConnectionPool:
    """Open the process-wide pool, replacing any open one.

    Storage settings supply whatever is not passed in.
    """
    global _pool
    storage = get_settings().storage
    await close_pool()
    pool = ConnectionPool(
        db_path=db_path or storage.db_path,
        size=size or storage.pool_size,
        busy_timeout=storage.busy_timeout,
    )
    await pool.open()
    _pool = pool
    return pool


async def get_pool() -> ConnectionPool:
    return _pool if _pool is not None else await open_pool()


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        pool, _pool = _pool, None
        await pool.close()


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """Connection for reads."""
    pool = await get_pool()
    async with pool.connection() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """Connection inside a write transaction: commit on exit, rollback on error."""
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn
