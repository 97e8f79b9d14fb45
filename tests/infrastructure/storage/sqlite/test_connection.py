"""Tests for the aiosqlite connection pool."""

import pytest

from prodline.config import get_settings
from prodline.infrastructure.storage.sqlite import (
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    open_pool,
)


async def _partner_count() -> int:
    async with get_connection() as conn:
        cursor = await conn.execute("SELECT COUNT(*) FROM partners")
        row = await cursor.fetchone()
    return row[0]


async def test_transaction_commits(sqlite_db):
    async with get_transaction() as conn:
        await conn.execute("INSERT INTO partners (id, name, type) VALUES ('p1', 'Ana', 'cutter')")
    assert await _partner_count() == 1


async def test_transaction_rolls_back_on_error(sqlite_db):
    with pytest.raises(RuntimeError):
        async with get_transaction() as conn:
            await conn.execute("INSERT INTO partners (id, name, type) VALUES ('p1', 'Ana', 'cutter')")
            raise RuntimeError("interrupted")

    assert await _partner_count() == 0
    async with get_transaction() as conn:
        assert conn.in_transaction


async def test_pool_defaults_to_storage_settings():
    storage = get_settings().storage
    try:
        pool = await get_pool()
        assert pool.db_path == storage.db_path
        assert pool.size == storage.pool_size
        assert await get_pool() is pool
    finally:
        await close_pool()


async def test_reopen_replaces_pool(tmp_path):
    first = await open_pool(tmp_path / "a.db", size=1)
    second = await open_pool(tmp_path / "b.db", size=1)
    try:
        assert first is not second
        assert await get_pool() is second
    finally:
        await close_pool()
