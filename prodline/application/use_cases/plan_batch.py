"""Plan Batch Use Case: one production order per model under a shared lot."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from uuid import uuid4

from prodline.application.dto.requests import PlanBatchRequest, PlanModelRequest
from prodline.application.dto.responses import PlanBatchResponse
from prodline.application.use_cases.base import OrderUseCase, order_to_response
from prodline.config import get_logger, get_settings
from prodline.core.entities.catalog import Product, TechPack
from prodline.core.entities.order import (
    CuttingDetails,
    EventType,
    OrderStatus,
    PhaseDates,
    ProductionOrder,
)
from prodline.core.exceptions import (
    IllegalTransitionError,
    InvalidInputError,
    NotFoundError,
    ProductNotFoundError,
    TechPackNotFoundError,
)
from prodline.core.services.lot_grouping import (
    is_batch_editable,
    lot_numbers_for,
    next_batch_base,
)
from prodline.core.services.planning import derive_items

logger = get_logger(__name__)

PLANNABLE_STATUSES = (OrderStatus.DRAFT, OrderStatus.PLANNED)


@dataclass
class PlanBatchResult:
    """Result of a planning run."""

    batch_key: str
    orders: list[ProductionOrder] = field(default_factory=list)
    created: int = 0
    updated: int = 0


class PlanBatchUseCase(OrderUseCase):
    """Create a new batch, or re-plan an editable one, from product models."""

    async def execute(self, request: PlanBatchRequest) -> PlanBatchResult:
        if request.status not in PLANNABLE_STATUSES:
            raise InvalidInputError(
                "status", "orders are planned as draft or planned", request.status.value
            )
        user = self._actor(request.user)
        store = await self._get_order_store()
        settings = get_settings().production

        members: dict[str, ProductionOrder] = {}
        if request.batch_key:
            members = await self._editable_members(request.batch_key)
            base = request.batch_key
        else:
            year = date.today().year
            existing = await store.list_lot_numbers(f"{year}-")
            base = next_batch_base(existing, year, settings.lot_sequence_width)

        lot_numbers = lot_numbers_for(base, len(request.models))
        logger.info(
            "plan_batch_started",
            batch_key=base,
            models=len(request.models),
            replan=bool(request.batch_key),
        )

        referenced = {m.existing_order_id for m in request.models if m.existing_order_id}
        unknown = referenced - members.keys()
        if unknown:
            raise InvalidInputError(
                "existing_order_id", f"order does not belong to batch {base}", sorted(unknown)
            )
        missing = members.keys() - referenced
        if missing:
            raise InvalidInputError(
                "models",
                f"a re-plan must include every order of batch {base}",
                sorted(missing),
            )

        # Build everything in memory first so a bad model writes nothing
        planned: list[tuple[ProductionOrder, bool]] = []
        for model, lot_number in zip(request.models, lot_numbers):
            product, tech_pack = await self._resolve(model)
            if model.existing_order_id:
                order = members[model.existing_order_id]
                self._apply_plan(order, model, product, tech_pack, lot_number, request)
                order.record_event(
                    user,
                    "Plan updated",
                    f"Lot {lot_number} re-planned: {order.quantity_total} pieces",
                )
                planned.append((order, False))
            else:
                order = ProductionOrder(
                    id=f"op-{uuid4().hex[:12]}",
                    lot_number=lot_number,
                    product_id=product.id,
                )
                self._apply_plan(order, model, product, tech_pack, lot_number, request)
                order.record_event(
                    user,
                    "Order created",
                    f"Lot {lot_number}: {order.quantity_total} pieces of {product.sku}",
                    EventType.STATUS_CHANGE,
                )
                planned.append((order, True))

        result = PlanBatchResult(batch_key=base)
        for order, is_new in planned:
            if is_new:
                result.orders.append(await store.create(order))
                result.created += 1
            else:
                result.orders.append(await store.save(order))
                result.updated += 1

        logger.info(
            "plan_batch_complete",
            batch_key=base,
            created=result.created,
            updated=result.updated,
        )
        return result

    async def _editable_members(self, key: str) -> dict[str, ProductionOrder]:
        store = await self._get_order_store()
        orders = await store.list_by_batch_key(key)
        if not orders:
            raise NotFoundError("Batch", key, code="BATCH_NOT_FOUND")
        if not is_batch_editable(orders):
            blocking = next(o for o in orders if o.status not in PLANNABLE_STATUSES)
            raise IllegalTransitionError(
                blocking.id,
                blocking.status.value,
                "edit batch",
                f"batch {key} already has orders in production",
            )
        return {o.id: o for o in orders}

    async def _resolve(self, model: PlanModelRequest) -> tuple[Product, TechPack]:
        catalog = await self._get_catalog()
        product = await catalog.get_product(model.product_id)
        if product is None:
            raise ProductNotFoundError(model.product_id)
        if model.tech_pack_version is not None:
            tech_pack = product.tech_pack(model.tech_pack_version)
            if tech_pack is None:
                raise TechPackNotFoundError(product.id, model.tech_pack_version)
        elif product.tech_packs:
            tech_pack = max(product.tech_packs, key=lambda tp: tp.version)
        else:
            raise TechPackNotFoundError(product.id, 1)
        return product, tech_pack

    def _apply_plan(
        self,
        order: ProductionOrder,
        model: PlanModelRequest,
        product: Product,
        tech_pack: TechPack,
        lot_number: str,
        request: PlanBatchRequest,
    ) -> None:
        settings = get_settings().production
        phase_dates = request.phase_dates or PhaseDates()
        start = phase_dates.cutting_start or order.start_date or date.today()

        order.lot_number = lot_number
        order.product_id = product.id
        order.tech_pack_version = tech_pack.version
        order.items = derive_items(model.matrix, model.layers)
        order.quantity_total = order.items_total
        order.status = request.status
        order.start_date = start
        order.due_date = phase_dates.packing_end or start + timedelta(
            days=settings.default_due_days
        )
        order.phase_dates = phase_dates
        order.subcontractor = model.subcontractor
        order.cost_snapshot = tech_pack.total_cost
        order.cutting_details = CuttingDetails(
            planned_matrix=list(model.matrix),
            planned_layers=list(model.layers),
            cutter_name=model.cutter_name,
            jobs=order.cutting_details.jobs if order.cutting_details else [],
        )

    def to_response(self, result: PlanBatchResult) -> PlanBatchResponse:
        return PlanBatchResponse(
            batch_key=result.batch_key,
            orders=[order_to_response(o) for o in result.orders],
            created=result.created,
            updated=result.updated,
        )
