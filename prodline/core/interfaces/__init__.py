"""Core interfaces (ports) for dependency injection."""

from prodline.core.interfaces.catalog import ICatalog
from prodline.core.interfaces.order_store import IOrderStore
from prodline.core.interfaces.stock_store import IFinishedStockStore

__all__ = [
    "IOrderStore",
    "IFinishedStockStore",
    "ICatalog",
]
