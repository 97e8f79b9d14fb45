"""Tests for the finished stock use cases."""

import pytest

from prodline.application.dto.requests import MarkStockExportedRequest, RevertStockRequest
from prodline.application.use_cases.finished_stock import (
    MarkStockExportedUseCase,
    RevertCompletedStockUseCase,
)
from prodline.core.entities import FinishedProductStock, OrderStatus, PackingDetails, StockStatus
from prodline.core.exceptions import (
    ConflictError,
    DatabaseError,
    IllegalTransitionError,
    StockNotFoundError,
)


def _record(stock_id: str = "STOCK-1", status: StockStatus = StockStatus.AVAILABLE) -> FinishedProductStock:
    return FinishedProductStock(
        id=stock_id, product_id="prod-1", order_id="op-1", warehouse="Main",
        quantity=50, color="Blue", size="M", status=status,
    )


@pytest.fixture
def use_case(mock_order_store, mock_stock_store):
    return RevertCompletedStockUseCase(order_store=mock_order_store, stock_store=mock_stock_store)


@pytest.fixture
def completed(order_factory):
    order = order_factory(status=OrderStatus.COMPLETED)
    order.packing_details = PackingDetails(warehouse="Main", is_finalized=True)
    return order


class TestRevertCompletedStock:
    async def test_revert_removes_all_rows(self, use_case, mock_order_store, mock_stock_store, completed):
        rows = [_record("STOCK-1"), _record("STOCK-2")]
        mock_stock_store.get.return_value = rows[0]
        mock_stock_store.list_stock.return_value = rows
        mock_stock_store.delete_for_order.return_value = rows
        mock_order_store.get.return_value = completed

        result = await use_case.execute(RevertStockRequest(stock_id="STOCK-1"))

        assert result.order.status == OrderStatus.PACKING
        assert [r.id for r in result.removed] == ["STOCK-1", "STOCK-2"]
        mock_stock_store.delete_for_order.assert_awaited_once_with("op-1")

    async def test_delete_failure_leaves_order_completed(
        self, use_case, mock_order_store, mock_stock_store, completed
    ):
        mock_stock_store.get.return_value = _record()
        mock_stock_store.list_stock.return_value = [_record()]
        mock_stock_store.delete_for_order.side_effect = DatabaseError("delete stock", "locked")
        mock_order_store.get.return_value = completed

        with pytest.raises(DatabaseError):
            await use_case.execute(RevertStockRequest(stock_id="STOCK-1"))

        assert completed.status == OrderStatus.COMPLETED
        mock_order_store.save.assert_not_awaited()

    async def test_order_save_failure_restores_rows(
        self, use_case, mock_order_store, mock_stock_store, completed
    ):
        rows = [_record()]
        mock_stock_store.get.return_value = rows[0]
        mock_stock_store.list_stock.return_value = rows
        mock_stock_store.delete_for_order.return_value = rows
        mock_order_store.get.return_value = completed
        mock_order_store.save.side_effect = ConflictError("op-1", 1, 2)

        with pytest.raises(ConflictError):
            await use_case.execute(RevertStockRequest(stock_id="STOCK-1"))

        mock_stock_store.add_batch.assert_awaited_once_with(rows)

    async def test_exported_stock_blocks_revert(
        self, use_case, mock_order_store, mock_stock_store, completed
    ):
        mock_stock_store.get.return_value = _record()
        mock_stock_store.list_stock.return_value = [_record(), _record("STOCK-2", StockStatus.EXPORTED)]
        mock_order_store.get.return_value = completed

        with pytest.raises(IllegalTransitionError):
            await use_case.execute(RevertStockRequest(stock_id="STOCK-1"))
        mock_stock_store.delete_for_order.assert_not_awaited()

    async def test_order_must_be_completed(self, use_case, mock_order_store, mock_stock_store, order_factory):
        mock_stock_store.get.return_value = _record()
        mock_order_store.get.return_value = order_factory(status=OrderStatus.PACKING)
        with pytest.raises(IllegalTransitionError):
            await use_case.execute(RevertStockRequest(stock_id="STOCK-1"))

    async def test_unknown_stock(self, use_case, mock_stock_store):
        mock_stock_store.get.return_value = None
        with pytest.raises(StockNotFoundError):
            await use_case.execute(RevertStockRequest(stock_id="STOCK-X"))


class TestMarkExported:
    async def test_duplicates_sent_once(self, mock_stock_store):
        mock_stock_store.mark_exported.return_value = 2
        use_case = MarkStockExportedUseCase(stock_store=mock_stock_store)
        request = MarkStockExportedRequest(stock_ids=["S1", "S2", "S1"])

        updated = await use_case.execute(request)

        mock_stock_store.mark_exported.assert_awaited_once_with(["S1", "S2"])
        assert use_case.to_response(request, updated).model_dump() == {"requested": 2, "updated": 2}
