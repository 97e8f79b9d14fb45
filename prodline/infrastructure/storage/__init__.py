"""Storage infrastructure implementations."""

from prodline.infrastructure.storage.sqlite import (
    SQLiteCatalog,
    SQLiteFinishedStockStore,
    SQLiteOrderStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteOrderStore",
    "SQLiteFinishedStockStore",
    "SQLiteCatalog",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
