"""Save Packing Use Case: complete an order and materialize its stock."""

from dataclasses import dataclass, field

from prodline.application.dto.requests import SavePackingRequest
from prodline.application.dto.responses import SavePackingResponse
from prodline.application.use_cases.base import (
    OrderUseCase,
    order_to_response,
    stock_to_response,
)
from prodline.config import get_logger, get_settings
from prodline.core.entities.order import PackingDetails, ProductionOrder
from prodline.core.entities.stock import FinishedProductStock
from prodline.core.services import lifecycle
from prodline.core.services.stock_materializer import StockMaterializer

logger = get_logger(__name__)


@dataclass
class SavePackingResult:
    order: ProductionOrder
    stock_records: list[FinishedProductStock] = field(default_factory=list)
    stock_created: bool = False


class SavePackingUseCase(OrderUseCase):
    """
    Finalize packing.

    Stock is created only on the edge into completed. Saving packing again
    on a completed order is a logged no-op. Price and stock rows are resolved
    before anything is written. The order is then saved first so the version
    check admits exactly one completion; if writing stock fails, the
    pre-completion document is restored.
    """

    async def execute(self, request: SavePackingRequest) -> SavePackingResult:
        user = self._actor(request.user)
        order = await self._load_order(request.order_id, request.expected_version)
        snapshot = order.model_copy(deep=True)

        packing = PackingDetails(
            total_boxes=request.total_boxes,
            packing_type=request.packing_type,
            items_per_box=request.items_per_box,
            items_packed=request.items_packed,
            warehouse=request.warehouse.strip(),
            packer_name=request.packer_name.strip(),
        )
        if not lifecycle.complete_packing(order, packing, user):
            return SavePackingResult(order=order, stock_created=False)

        # everything that can fail without writing runs before the save
        materializer = StockMaterializer(
            await self._get_stock_store(), get_settings().production.default_warehouse
        )
        records = materializer.build_records(order, await self._selling_price(order))

        store = await self._get_order_store()
        order = await store.save(order)
        try:
            records = await materializer.write(order, records)
        except Exception as e:
            logger.error("stock_materialization_failed", order_id=order.id, error=str(e))
            snapshot.version = order.version
            await store.save(snapshot)
            raise

        logger.info(
            "order_completed",
            order_id=order.id,
            lot_number=order.lot_number,
            packed=order.packing_details.total_packed_qty if order.packing_details else 0,
            stock_records=len(records),
        )
        return SavePackingResult(order=order, stock_records=records, stock_created=True)

    async def _selling_price(self, order: ProductionOrder) -> float:
        catalog = await self._get_catalog()
        product = await catalog.get_product(order.product_id)
        tech_pack = product.tech_pack(order.tech_pack_version) if product else None
        if tech_pack is None:
            logger.warning("stock_price_unavailable", order_id=order.id, product_id=order.product_id)
            return 0.0
        return tech_pack.selling_price

    def to_response(self, result: SavePackingResult) -> SavePackingResponse:
        return SavePackingResponse(
            order=order_to_response(result.order),
            stock_created=result.stock_created,
            stock_records=[stock_to_response(r) for r in result.stock_records],
        )
