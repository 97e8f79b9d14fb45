"""Tests for SQLiteFinishedStockStore."""

import pytest

from prodline.core.entities import FinishedProductStock, StockStatus


def _record(stock_id: str, order_id: str = "op-1", quantity: int = 10) -> FinishedProductStock:
    return FinishedProductStock(
        id=stock_id, product_id="prod-1", order_id=order_id, warehouse="Main",
        quantity=quantity, color="Blue", size="M", cost=12.5, price=30.0,
    )


@pytest.fixture
async def orders(order_store, order_factory):
    await order_store.create(order_factory(order_id="op-1"))
    await order_store.create(order_factory(order_id="op-2", lot_number="2025-002"))


class TestStockStore:
    async def test_add_batch_and_get(self, stock_store, orders):
        await stock_store.add_batch([_record("S1"), _record("S2", quantity=5)])
        record = await stock_store.get("S2")
        assert record.quantity == 5
        assert record.total_cost == 62.5
        assert record.status == StockStatus.AVAILABLE

    async def test_list_filters(self, stock_store, orders):
        await stock_store.add_batch([_record("S1"), _record("S2", order_id="op-2")])
        assert [r.id for r in await stock_store.list_stock(order_id="op-2")] == ["S2"]

    async def test_delete_for_order_returns_rows(self, stock_store, orders):
        await stock_store.add_batch([_record("S1"), _record("S2"), _record("S3", order_id="op-2")])

        removed = await stock_store.delete_for_order("op-1")

        assert sorted(r.id for r in removed) == ["S1", "S2"]
        assert [r.id for r in await stock_store.list_stock()] == ["S3"]

    async def test_failed_batch_writes_nothing(self, stock_store, orders):
        from prodline.core.exceptions import DatabaseError

        await stock_store.add_batch([_record("S1")])
        with pytest.raises(DatabaseError):
            await stock_store.add_batch([_record("S2"), _record("S1")])
        assert [r.id for r in await stock_store.list_stock()] == ["S1"]

    async def test_mark_exported_counts_changes(self, stock_store, orders):
        await stock_store.add_batch([_record("S1"), _record("S2")])
        assert await stock_store.mark_exported(["S1"]) == 1
        assert await stock_store.mark_exported(["S1", "S2"]) == 1
        exported = await stock_store.list_stock(status=StockStatus.EXPORTED)
        assert sorted(r.id for r in exported) == ["S1", "S2"]
