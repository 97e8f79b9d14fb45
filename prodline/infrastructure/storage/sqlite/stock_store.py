"""SQLite implementation of finished-goods stock storage."""

from datetime import datetime

import aiosqlite

from prodline.config import get_logger
from prodline.core.entities.stock import FinishedProductStock, StockStatus
from prodline.core.exceptions import DatabaseError
from prodline.core.interfaces.stock_store import IFinishedStockStore
from prodline.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteFinishedStockStore(IFinishedStockStore):
    """SQLite implementation of finished-goods stock storage."""

    async def add_batch(
        self, records: list[FinishedProductStock]
    ) -> list[FinishedProductStock]:
        if not records:
            return []
        try:
            async with get_transaction() as conn:
                await conn.executemany(
                    """
                    INSERT INTO finished_stock (
                        id, product_id, order_id, warehouse, quantity, color,
                        size, cost, price, date, observation, status
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            r.id,
                            r.product_id,
                            r.order_id,
                            r.warehouse,
                            r.quantity,
                            r.color,
                            r.size,
                            r.cost,
                            r.price,
                            r.date.isoformat(),
                            r.observation,
                            r.status.value,
                        )
                        for r in records
                    ],
                )
        except aiosqlite.Error as e:
            raise DatabaseError("add stock batch", str(e)) from e

        logger.info("stock_batch_added", order_id=records[0].order_id, count=len(records))
        return records

    async def get(self, stock_id: str) -> FinishedProductStock | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM finished_stock WHERE id = ?", (stock_id,))
            row = await cursor.fetchone()
        return self._row_to_stock(row) if row else None

    async def list_stock(
        self,
        status: StockStatus | None = None,
        order_id: str | None = None,
        limit: int = 1000,
        offset: int = 0,
    ) -> list[FinishedProductStock]:
        conditions = []
        params: list = []
        if status is not None:
            conditions.append("status = ?")
            params.append(status.value)
        if order_id is not None:
            conditions.append("order_id = ?")
            params.append(order_id)
        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM finished_stock
                {where}
                ORDER BY date DESC, id
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
        return [self._row_to_stock(row) for row in rows]

    async def delete_for_order(self, order_id: str) -> list[FinishedProductStock]:
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM finished_stock WHERE order_id = ?", (order_id,)
                )
                removed = [self._row_to_stock(row) for row in await cursor.fetchall()]
                await conn.execute("DELETE FROM finished_stock WHERE order_id = ?", (order_id,))
        except aiosqlite.Error as e:
            raise DatabaseError("delete stock", str(e)) from e

        logger.info("stock_deleted_for_order", order_id=order_id, count=len(removed))
        return removed

    async def mark_exported(self, stock_ids: list[str]) -> int:
        if not stock_ids:
            return 0
        placeholders = ", ".join("?" for _ in stock_ids)
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"""
                    UPDATE finished_stock SET status = ?
                    WHERE id IN ({placeholders}) AND status != ?
                    """,
                    (StockStatus.EXPORTED.value, *stock_ids, StockStatus.EXPORTED.value),
                )
                changed = cursor.rowcount
        except aiosqlite.Error as e:
            raise DatabaseError("mark stock exported", str(e)) from e

        logger.info("stock_marked_exported", requested=len(stock_ids), changed=changed)
        return changed

    def _row_to_stock(self, row: aiosqlite.Row) -> FinishedProductStock:
        return FinishedProductStock(
            id=row["id"],
            product_id=row["product_id"],
            order_id=row["order_id"],
            warehouse=row["warehouse"],
            quantity=row["quantity"],
            color=row["color"],
            size=row["size"],
            cost=row["cost"],
            price=row["price"],
            date=datetime.fromisoformat(row["date"]),
            observation=row["observation"],
            status=StockStatus(row["status"]),
        )
