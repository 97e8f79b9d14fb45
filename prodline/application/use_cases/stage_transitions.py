"""
Stage transition use cases that touch only the order document.

Each loads the order, applies one lifecycle handler and saves it back with
a compare-and-swap on the order version.
"""

from prodline.application.dto.requests import (
    CancelOrderRequest,
    OrderActionRequest,
    SaveRevisionRequest,
)
from prodline.application.use_cases.base import OrderUseCase
from prodline.config import get_logger
from prodline.core.entities.order import ProductionOrder, RevisionDetails
from prodline.core.services import lifecycle

logger = get_logger(__name__)


class RestartCuttingUseCase(OrderUseCase):
    """Discard all cutting jobs and return the order to planned."""

    async def execute(self, request: OrderActionRequest) -> ProductionOrder:
        order = await self._load_order(request.order_id, request.expected_version)
        discarded = len(order.cutting_details.jobs) if order.cutting_details else 0
        lifecycle.restart_cutting(order, self._actor(request.user))
        store = await self._get_order_store()
        order = await store.save(order)
        logger.info("cutting_restarted", order_id=order.id, discarded_jobs=discarded)
        return order


class AdvanceToSewingUseCase(OrderUseCase):
    async def execute(self, request: OrderActionRequest) -> ProductionOrder:
        order = await self._load_order(request.order_id, request.expected_version)
        lifecycle.advance_to_sewing(order, self._actor(request.user))
        store = await self._get_order_store()
        return await store.save(order)


class SendToQualityControlUseCase(OrderUseCase):
    """Sewn pieces are back from the workshop and wait for revision."""

    async def execute(self, request: OrderActionRequest) -> ProductionOrder:
        order = await self._load_order(request.order_id, request.expected_version)
        lifecycle.send_to_quality_control(order, self._actor(request.user))
        store = await self._get_order_store()
        return await store.save(order)


class SaveRevisionUseCase(OrderUseCase):
    """Record quality-control results; the order moves on to packing."""

    async def execute(self, request: SaveRevisionRequest) -> ProductionOrder:
        order = await self._load_order(request.order_id, request.expected_version)
        revision = RevisionDetails(
            start_date=request.start_date,
            inspector_name=request.inspector_name.strip(),
            approved_qty=request.approved_qty,
            items_approved=request.items_approved,
            rework_qty=request.rework_qty,
            rejected_qty=request.rejected_qty,
            notes=request.notes,
        )
        lifecycle.complete_revision(order, revision, self._actor(request.user))
        store = await self._get_order_store()
        order = await store.save(order)
        logger.info(
            "revision_saved",
            order_id=order.id,
            approved=revision.approved_qty,
            rework=revision.rework_qty,
            rejected=revision.rejected_qty,
        )
        return order


class RevertPackingToRevisionUseCase(OrderUseCase):
    async def execute(self, request: OrderActionRequest) -> ProductionOrder:
        order = await self._load_order(request.order_id, request.expected_version)
        lifecycle.revert_packing_to_revision(order, self._actor(request.user))
        store = await self._get_order_store()
        return await store.save(order)


class RevertRevisionToSewingUseCase(OrderUseCase):
    async def execute(self, request: OrderActionRequest) -> ProductionOrder:
        order = await self._load_order(request.order_id, request.expected_version)
        lifecycle.revert_revision_to_sewing(order, self._actor(request.user))
        store = await self._get_order_store()
        return await store.save(order)


class CancelOrderUseCase(OrderUseCase):
    async def execute(self, request: CancelOrderRequest) -> ProductionOrder:
        order = await self._load_order(request.order_id, request.expected_version)
        lifecycle.cancel(order, self._actor(request.user), request.reason)
        store = await self._get_order_store()
        order = await store.save(order)
        logger.info("order_cancelled", order_id=order.id, reason=request.reason)
        return order
