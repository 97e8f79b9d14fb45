"""
SQLite implementation of production order storage.

Orders are kept as whole JSON documents. Indexed columns (lot, status,
product, created_at) are denormalized copies used for filtering only; the
``version`` column is the optimistic concurrency token.
"""

from datetime import UTC, datetime

import aiosqlite

from prodline.config import get_logger
from prodline.core.entities.order import OrderStatus, ProductionOrder
from prodline.core.exceptions import (
    ConflictError,
    DatabaseError,
    InvalidInputError,
    OrderNotFoundError,
)
from prodline.core.interfaces.order_store import IOrderStore
from prodline.core.services.lot_grouping import batch_key, is_batch_identifier
from prodline.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


def _reject_batch_identifier(order: ProductionOrder) -> None:
    if is_batch_identifier(order.id):
        raise InvalidInputError("id", "batch views are read-only and cannot be saved", order.id)


class SQLiteOrderStore(IOrderStore):
    """SQLite implementation of production order storage."""

    async def create(self, order: ProductionOrder) -> ProductionOrder:
        _reject_batch_identifier(order)
        order.version = 1
        now = datetime.now(UTC).isoformat()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO production_orders (
                        id, lot_number, product_id, status, created_at,
                        updated_at, version, document
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        order.id,
                        order.lot_number,
                        order.product_id,
                        order.status.value,
                        order.created_at.isoformat(),
                        now,
                        order.version,
                        order.model_dump_json(),
                    ),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("create order", str(e)) from e

        logger.info("order_created", order_id=order.id, lot_number=order.lot_number)
        return order

    async def get(self, order_id: str) -> ProductionOrder | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT version, document FROM production_orders WHERE id = ?",
                (order_id,),
            )
            row = await cursor.fetchone()
        return self._row_to_order(row) if row else None

    async def list_orders(
        self,
        statuses: list[OrderStatus] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ProductionOrder]:
        query = "SELECT version, document FROM production_orders"
        params: list = []
        if statuses:
            placeholders = ", ".join("?" for _ in statuses)
            query += f" WHERE status IN ({placeholders})"
            params.extend(s.value for s in statuses)
        query += " ORDER BY created_at DESC, lot_number DESC"
        if limit is not None:
            query += " LIMIT ? OFFSET ?"
            params.extend([limit, offset])
        elif offset:
            # SQLite needs a LIMIT before OFFSET; -1 means unbounded
            query += " LIMIT -1 OFFSET ?"
            params.append(offset)

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
        return [self._row_to_order(row) for row in rows]

    async def list_by_batch_key(self, key: str) -> list[ProductionOrder]:
        escaped = key.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT version, document FROM production_orders
                WHERE lot_number = ? OR lot_number LIKE ? ESCAPE '\\'
                ORDER BY created_at DESC, lot_number DESC
                """,
                (key, f"{escaped}-%"),
            )
            rows = await cursor.fetchall()
        # LIKE is case-insensitive and a two-token lot is its own batch
        orders = [self._row_to_order(row) for row in rows]
        return [o for o in orders if batch_key(o.lot_number) == key]

    async def save(self, order: ProductionOrder) -> ProductionOrder:
        """Compare-and-swap on version; the stored document gets version + 1."""
        _reject_batch_identifier(order)
        expected = order.version
        updated = order.model_copy(update={"version": expected + 1})
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    UPDATE production_orders
                    SET lot_number = ?, product_id = ?, status = ?, updated_at = ?,
                        version = ?, document = ?
                    WHERE id = ? AND version = ?
                    """,
                    (
                        updated.lot_number,
                        updated.product_id,
                        updated.status.value,
                        datetime.now(UTC).isoformat(),
                        updated.version,
                        updated.model_dump_json(),
                        order.id,
                        expected,
                    ),
                )
                if cursor.rowcount == 0:
                    cursor = await conn.execute(
                        "SELECT version FROM production_orders WHERE id = ?", (order.id,)
                    )
                    row = await cursor.fetchone()
                    if row is None:
                        raise OrderNotFoundError(order.id)
                    raise ConflictError(order.id, expected, row["version"])
        except aiosqlite.Error as e:
            raise DatabaseError("save order", str(e)) from e

        order.version = updated.version
        logger.debug("order_saved", order_id=order.id, version=order.version)
        return updated

    async def list_lot_numbers(self, prefix: str) -> list[str]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT lot_number FROM production_orders WHERE lot_number LIKE ? || '%'",
                (prefix,),
            )
            rows = await cursor.fetchall()
        return [row["lot_number"] for row in rows]

    def _row_to_order(self, row: aiosqlite.Row) -> ProductionOrder:
        order = ProductionOrder.model_validate_json(row["document"])
        order.version = row["version"]
        return order
