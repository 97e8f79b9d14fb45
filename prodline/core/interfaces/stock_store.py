"""Abstract interface for finished-goods stock storage."""

from abc import ABC, abstractmethod

from prodline.core.entities.stock import FinishedProductStock, StockStatus


class IFinishedStockStore(ABC):
    """Interface for finished-goods stock persistence."""

    @abstractmethod
    async def add_batch(
        self, records: list[FinishedProductStock]
    ) -> list[FinishedProductStock]:
        """Insert all records in one transaction: all or nothing."""
        pass

    @abstractmethod
    async def get(self, stock_id: str) -> FinishedProductStock | None:
        """Get stock record by ID."""
        pass

    @abstractmethod
    async def list_stock(
        self,
        status: StockStatus | None = None,
        order_id: str | None = None,
        limit: int = 1000,
        offset: int = 0,
    ) -> list[FinishedProductStock]:
        """List stock records, optionally filtered."""
        pass

    @abstractmethod
    async def delete_for_order(self, order_id: str) -> list[FinishedProductStock]:
        """Delete every record of an order in one transaction, returning them."""
        pass

    @abstractmethod
    async def mark_exported(self, stock_ids: list[str]) -> int:
        """Flag records as exported. Returns the number of rows changed."""
        pass
