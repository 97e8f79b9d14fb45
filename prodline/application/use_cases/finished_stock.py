"""Finished-goods stock use cases: listing, export flagging and revert to packing."""

from dataclasses import dataclass

from prodline.application.dto.requests import (
    ListStockRequest,
    MarkStockExportedRequest,
    RevertStockRequest,
)
from prodline.application.dto.responses import (
    MarkExportedResponse,
    RevertStockResponse,
    StockListResponse,
)
from prodline.application.use_cases.base import (
    OrderUseCase,
    order_to_response,
    stock_to_response,
)
from prodline.config import get_logger, get_settings
from prodline.core.entities.order import OrderStatus, ProductionOrder
from prodline.core.entities.stock import FinishedProductStock, StockStatus
from prodline.core.exceptions import (
    IllegalTransitionError,
    OrderNotFoundError,
    StockNotFoundError,
)
from prodline.core.services import lifecycle
from prodline.core.services.stock_materializer import StockMaterializer

logger = get_logger(__name__)


class ListStockUseCase(OrderUseCase):
    async def execute(self, request: ListStockRequest) -> list[FinishedProductStock]:
        store = await self._get_stock_store()
        return await store.list_stock(
            status=request.status,
            order_id=request.order_id,
            limit=request.limit,
            offset=request.offset,
        )

    def to_response(self, records: list[FinishedProductStock]) -> StockListResponse:
        return StockListResponse(
            records=[stock_to_response(r) for r in records],
            total=len(records),
            total_pieces=sum(r.quantity for r in records),
        )


class MarkStockExportedUseCase(OrderUseCase):
    """Flag stock records as exported. Already exported records are left alone."""

    async def execute(self, request: MarkStockExportedRequest) -> int:
        store = await self._get_stock_store()
        ids = list(dict.fromkeys(request.stock_ids))
        return await store.mark_exported(ids)

    def to_response(self, request: MarkStockExportedRequest, updated: int) -> MarkExportedResponse:
        return MarkExportedResponse(requested=len(set(request.stock_ids)), updated=updated)


@dataclass
class RevertStockResult:
    order: ProductionOrder
    removed: list[FinishedProductStock]


class RevertCompletedStockUseCase(OrderUseCase):
    """
    Return a completed order to packing through one of its stock records.

    Every stock row of the order's completion is removed in one batch before
    the order is touched, so a failed removal leaves the order completed.
    If the order save then fails, the removed rows are restored.
    """

    async def execute(self, request: RevertStockRequest) -> RevertStockResult:
        user = self._actor(request.user)
        stock_store = await self._get_stock_store()
        record = await stock_store.get(request.stock_id)
        if record is None:
            raise StockNotFoundError(request.stock_id)

        order_store = await self._get_order_store()
        order = await order_store.get(record.order_id)
        if order is None:
            raise OrderNotFoundError(record.order_id)
        if order.status != OrderStatus.COMPLETED:
            raise IllegalTransitionError(
                order.id, order.status.value, "revert stock", "order is not completed"
            )

        siblings = await stock_store.list_stock(order_id=order.id)
        exported = [r.id for r in siblings if r.status == StockStatus.EXPORTED]
        if exported:
            raise IllegalTransitionError(
                order.id,
                order.status.value,
                "revert stock",
                f"{len(exported)} stock record(s) already exported",
            )

        materializer = StockMaterializer(
            stock_store, get_settings().production.default_warehouse
        )
        removed = await materializer.remove(order.id)

        lifecycle.reopen_packing(order, user, len(removed))
        try:
            order = await order_store.save(order)
        except Exception:
            logger.error("stock_revert_order_save_failed", order_id=order.id, restoring=len(removed))
            await stock_store.add_batch(removed)
            raise

        logger.info(
            "stock_reverted_to_packing",
            order_id=order.id,
            stock_id=request.stock_id,
            removed=len(removed),
        )
        return RevertStockResult(order=order, removed=removed)

    def to_response(self, result: RevertStockResult) -> RevertStockResponse:
        return RevertStockResponse(
            order=order_to_response(result.order),
            removed_stock_ids=[r.id for r in result.removed],
        )
