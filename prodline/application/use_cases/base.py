"""Shared plumbing for order use cases: store wiring, loading and response mapping."""

from prodline.application.dto.responses import ProductionOrderResponse, StockRecordResponse
from prodline.config import get_settings
from prodline.core.entities.order import ProductionOrder
from prodline.core.entities.stock import FinishedProductStock
from prodline.core.exceptions import ConflictError, OrderNotFoundError
from prodline.core.interfaces.catalog import ICatalog
from prodline.core.interfaces.order_store import IOrderStore
from prodline.core.interfaces.stock_store import IFinishedStockStore
from prodline.core.services.lot_grouping import batch_key


def order_to_response(order: ProductionOrder) -> ProductionOrderResponse:
    return ProductionOrderResponse(
        id=order.id,
        lot_number=order.lot_number,
        batch_key=batch_key(order.lot_number),
        product_id=order.product_id,
        tech_pack_version=order.tech_pack_version,
        status=order.status.value,
        quantity_total=order.quantity_total,
        total_cut=order.total_cut,
        cutting_complete=order.is_cutting_complete,
        is_late=order.is_late,
        items=order.items,
        start_date=order.start_date,
        due_date=order.due_date,
        phase_dates=order.phase_dates,
        subcontractor=order.subcontractor,
        cost_snapshot=order.cost_snapshot,
        created_at=order.created_at,
        version=order.version,
        cutting_details=order.cutting_details,
        revision_details=order.revision_details,
        packing_details=order.packing_details,
        events=order.events,
    )


def stock_to_response(record: FinishedProductStock) -> StockRecordResponse:
    return StockRecordResponse(
        id=record.id,
        product_id=record.product_id,
        order_id=record.order_id,
        warehouse=record.warehouse,
        quantity=record.quantity,
        color=record.color,
        size=record.size,
        cost=record.cost,
        price=record.price,
        total_cost=record.total_cost,
        date=record.date,
        observation=record.observation,
        status=record.status.value,
    )


class OrderUseCase:
    """Base for use cases working on production orders.

    Stores may be injected; otherwise the SQLite singletons are used.
    """

    def __init__(
        self,
        order_store: IOrderStore | None = None,
        stock_store: IFinishedStockStore | None = None,
        catalog: ICatalog | None = None,
    ):
        self._order_store = order_store
        self._stock_store = stock_store
        self._catalog = catalog

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from prodline.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def _get_stock_store(self) -> IFinishedStockStore:
        if self._stock_store is None:
            from prodline.infrastructure.storage.sqlite import get_stock_store

            self._stock_store = await get_stock_store()
        return self._stock_store

    async def _get_catalog(self) -> ICatalog:
        if self._catalog is None:
            from prodline.infrastructure.storage.sqlite import get_catalog

            self._catalog = await get_catalog()
        return self._catalog

    async def _load_order(
        self, order_id: str, expected_version: int | None = None
    ) -> ProductionOrder:
        """Load an order, failing fast when the caller's snapshot is stale."""
        store = await self._get_order_store()
        order = await store.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if expected_version is not None and expected_version != order.version:
            raise ConflictError(order_id, expected_version, order.version)
        return order

    @staticmethod
    def _actor(user: str | None) -> str:
        return (user or "").strip() or get_settings().production.system_user
