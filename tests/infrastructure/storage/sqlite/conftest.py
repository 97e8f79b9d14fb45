"""Pytest fixtures for SQLite storage tests."""

import pytest

from prodline.infrastructure.storage.sqlite import (
    SQLiteCatalog,
    SQLiteFinishedStockStore,
    SQLiteOrderStore,
)


@pytest.fixture
async def order_store(sqlite_db) -> SQLiteOrderStore:
    return SQLiteOrderStore()


@pytest.fixture
async def stock_store(sqlite_db) -> SQLiteFinishedStockStore:
    return SQLiteFinishedStockStore()


@pytest.fixture
async def catalog(sqlite_db) -> SQLiteCatalog:
    return SQLiteCatalog()
