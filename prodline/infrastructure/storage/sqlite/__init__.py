"""SQLite storage implementations."""

from prodline.infrastructure.storage.sqlite.catalog_store import SQLiteCatalog
from prodline.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    open_pool,
)
from prodline.infrastructure.storage.sqlite.order_store import SQLiteOrderStore
from prodline.infrastructure.storage.sqlite.stock_store import SQLiteFinishedStockStore

# Singleton instances
_order_store: SQLiteOrderStore | None = None
_stock_store: SQLiteFinishedStockStore | None = None
_catalog: SQLiteCatalog | None = None


async def get_order_store() -> SQLiteOrderStore:
    """Get singleton order store instance."""
    global _order_store
    if _order_store is None:
        _order_store = SQLiteOrderStore()
    return _order_store


async def get_stock_store() -> SQLiteFinishedStockStore:
    """Get singleton finished-goods stock store instance."""
    global _stock_store
    if _stock_store is None:
        _stock_store = SQLiteFinishedStockStore()
    return _stock_store


async def get_catalog() -> SQLiteCatalog:
    """Get singleton catalog instance."""
    global _catalog
    if _catalog is None:
        _catalog = SQLiteCatalog()
    return _catalog


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "open_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteOrderStore",
    "SQLiteFinishedStockStore",
    "SQLiteCatalog",
    # Factory functions
    "get_order_store",
    "get_stock_store",
    "get_catalog",
]
