"""Order queries: filtered listing, single order and batch views."""

from dataclasses import dataclass

from prodline.application.dto.requests import ListOrdersRequest
from prodline.application.dto.responses import (
    BatchListResponse,
    BatchResponse,
    OrderListResponse,
)
from prodline.application.use_cases.base import OrderUseCase, order_to_response
from prodline.config import get_logger
from prodline.core.entities.batch import BatchView
from prodline.core.entities.catalog import Product
from prodline.core.entities.order import OrderStatus, ProductionOrder
from prodline.core.exceptions import NotFoundError
from prodline.core.services.cutting import cutting_bucket
from prodline.core.services.lot_grouping import build_batch_view, build_batch_views

logger = get_logger(__name__)

# Orders physically on the shop floor
WIP_STATUSES = frozenset(
    {
        OrderStatus.CUTTING,
        OrderStatus.SEWING,
        OrderStatus.QUALITY_CONTROL,
        OrderStatus.PACKING,
    }
)


@dataclass
class OrderListResult:
    orders: list[ProductionOrder]
    total: int


class ListOrdersUseCase(OrderUseCase):
    """List orders newest first with the floor's filters applied."""

    async def execute(self, request: ListOrdersRequest) -> OrderListResult:
        matched = await self.matching(request)
        page = matched[request.offset : request.offset + request.limit]
        logger.debug("orders_listed", matched=len(matched), returned=len(page))
        return OrderListResult(orders=page, total=len(matched))

    async def matching(self, request: ListOrdersRequest) -> list[ProductionOrder]:
        """Every order passing the filters; paging is left to the caller."""
        store = await self._get_order_store()
        statuses = [request.status] if request.status else None
        orders = await store.list_orders(statuses=statuses)

        products: dict[str, Product | None] = {}
        if request.search:
            catalog = await self._get_catalog()
            for product_id in {o.product_id for o in orders}:
                products[product_id] = await catalog.get_product(product_id)

        return [o for o in orders if self._matches(o, request, products)]

    @staticmethod
    def _matches(
        order: ProductionOrder,
        request: ListOrdersRequest,
        products: dict[str, Product | None],
    ) -> bool:
        if request.late and not order.is_late:
            return False
        if request.wip_only and order.status not in WIP_STATUSES:
            return False
        if request.subcontractor and (order.subcontractor or "").lower() != request.subcontractor.lower():
            return False
        if request.start_from and (order.start_date is None or order.start_date < request.start_from):
            return False
        if request.start_to and (order.start_date is None or order.start_date > request.start_to):
            return False
        if request.cutting_bucket and cutting_bucket(order) != request.cutting_bucket:
            return False
        if request.cutter:
            cutter = request.cutter.lower()
            details = order.cutting_details
            names = []
            if details is not None:
                names = [details.cutter_name or ""] + [j.cutter_name for j in details.jobs]
            if not any(cutter == n.lower() for n in names):
                return False
        if request.search:
            term = request.search.strip().lower()
            product = products.get(order.product_id)
            haystack = [order.lot_number.lower()]
            if product is not None:
                haystack += [product.name.lower(), product.sku.lower()]
            if not any(term in text for text in haystack):
                return False
        return True

    def to_response(self, result: OrderListResult) -> OrderListResponse:
        return OrderListResponse(
            orders=[order_to_response(o) for o in result.orders],
            total=result.total,
        )


class GetOrderUseCase(OrderUseCase):
    async def execute(self, order_id: str) -> ProductionOrder:
        return await self._load_order(order_id)


def batch_to_response(view: BatchView) -> BatchResponse:
    return BatchResponse(**view.model_dump())


class ListBatchesUseCase(OrderUseCase):
    """Group the filtered order listing into read-only batch views."""

    async def execute(self, request: ListOrdersRequest) -> list[BatchView]:
        listing = ListOrdersUseCase(
            order_store=await self._get_order_store(),
            catalog=self._catalog,
        )
        return build_batch_views(await listing.matching(request))

    def to_response(self, views: list[BatchView]) -> BatchListResponse:
        return BatchListResponse(
            batches=[batch_to_response(v) for v in views],
            total=len(views),
        )


class GetBatchUseCase(OrderUseCase):
    """Batch view of every order sharing one batch key."""

    async def execute(self, key: str) -> BatchView:
        store = await self._get_order_store()
        orders = await store.list_by_batch_key(key)
        if not orders:
            raise NotFoundError("Batch", key, code="BATCH_NOT_FOUND")
        return build_batch_view(key, orders)
