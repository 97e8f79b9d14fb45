"""Abstract interface for production order storage."""

from abc import ABC, abstractmethod

from prodline.core.entities.order import OrderStatus, ProductionOrder


class IOrderStore(ABC):
    """Interface for production order persistence.

    Orders are read and written as whole documents keyed by id. The store
    owns identity; the engine never keeps a second copy of truth.
    """

    @abstractmethod
    async def create(self, order: ProductionOrder) -> ProductionOrder:
        """Persist a new order and return it with its initial version."""
        pass

    @abstractmethod
    async def get(self, order_id: str) -> ProductionOrder | None:
        """Get order by ID."""
        pass

    @abstractmethod
    async def list_orders(
        self,
        statuses: list[OrderStatus] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ProductionOrder]:
        """List orders, newest first, optionally restricted to statuses.

        ``limit=None`` returns every matching order.
        """
        pass

    @abstractmethod
    async def list_by_batch_key(self, key: str) -> list[ProductionOrder]:
        """Every order whose lot number belongs to batch ``key``, newest first."""
        pass

    @abstractmethod
    async def save(self, order: ProductionOrder) -> ProductionOrder:
        """Replace the stored document.

        Compare-and-swap on ``order.version``: raises ConflictError when the
        stored version differs, otherwise stores and bumps the version.
        """
        pass

    @abstractmethod
    async def list_lot_numbers(self, prefix: str) -> list[str]:
        """List lot numbers starting with prefix."""
        pass
