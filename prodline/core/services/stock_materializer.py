"""
Stock materializer.

Turns the packed breakdown of a completed order into finished-goods stock,
one record per (color, size) row, and removes it again on revert. Each
direction is a single atomic store call.
"""

from datetime import datetime
from uuid import uuid4

from prodline.config import get_logger
from prodline.core.entities.order import ProductionOrder
from prodline.core.entities.stock import FinishedProductStock, StockStatus
from prodline.core.interfaces.stock_store import IFinishedStockStore

logger = get_logger(__name__)


class StockMaterializer:
    """Creates and removes the stock rows of an order's completion."""

    def __init__(self, stock_store: IFinishedStockStore, default_warehouse: str) -> None:
        self._stock_store = stock_store
        self._default_warehouse = default_warehouse

    def build_records(
        self, order: ProductionOrder, price: float = 0.0
    ) -> list[FinishedProductStock]:
        """
        One available record per packed row, quantities copied verbatim.

        Falls back to the order's items when packing recorded no breakdown.
        Zero-quantity rows are skipped.
        """
        packing = order.packing_details
        rows = packing.items_packed if packing and packing.items_packed else order.items
        warehouse = (packing.warehouse if packing else None) or self._default_warehouse
        now = datetime.utcnow()

        return [
            FinishedProductStock(
                id=f"STOCK-{uuid4().hex[:16]}",
                product_id=order.product_id,
                order_id=order.id,
                warehouse=warehouse,
                quantity=row.quantity,
                color=row.color,
                size=row.size,
                cost=order.cost_snapshot,
                price=price,
                date=now,
                observation=f"Lot {order.lot_number}",
                status=StockStatus.AVAILABLE,
            )
            for row in rows
            if row.quantity > 0
        ]

    async def materialize(
        self, order: ProductionOrder, price: float = 0.0
    ) -> list[FinishedProductStock]:
        """Write all stock rows of a completion in one batch."""
        return await self.write(order, self.build_records(order, price))

    async def write(
        self, order: ProductionOrder, records: list[FinishedProductStock]
    ) -> list[FinishedProductStock]:
        if not records:
            logger.warning("stock_materialized_empty", order_id=order.id)
            return []
        created = await self._stock_store.add_batch(records)
        logger.info(
            "stock_materialized",
            order_id=order.id,
            records=len(created),
            pieces=sum(r.quantity for r in created),
        )
        return created

    async def remove(self, order_id: str) -> list[FinishedProductStock]:
        """Delete every stock row of an order in one batch."""
        removed = await self._stock_store.delete_for_order(order_id)
        logger.info("stock_removed", order_id=order_id, records=len(removed))
        return removed
