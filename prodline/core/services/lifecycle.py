"""
Production order lifecycle.

Legal status edges and the in-memory side effects of every stage handler.
Handlers mutate the order they are given and append exactly one audit
event; persistence is left to the caller.

Edges:
    draft           -> planned, cutting, cancelled
    planned         -> cutting, cancelled
    cutting         -> planned (restart), sewing, cancelled
    sewing          -> quality_control (returned from workshop),
                       packing (revision completed), cancelled
    quality_control -> packing (revision completed), sewing (revert), cancelled
    packing         -> completed, quality_control (revert), cancelled
    completed       -> packing (stock reverted)
    cancelled       -> none

Saving a revision moves the order straight to packing, from sewing or from
quality_control. An order enters quality_control when the workshop returns
the sewn pieces or through the packing -> revision revert.
"""

from datetime import datetime

from prodline.config import get_logger
from prodline.core.entities.order import (
    EventType,
    OrderStatus,
    PackingDetails,
    ProductionOrder,
    RevisionDetails,
)
from prodline.core.exceptions import IllegalTransitionError, InvalidInputError

logger = get_logger(__name__)

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.DRAFT: frozenset(
        {OrderStatus.PLANNED, OrderStatus.CUTTING, OrderStatus.CANCELLED}
    ),
    OrderStatus.PLANNED: frozenset({OrderStatus.CUTTING, OrderStatus.CANCELLED}),
    OrderStatus.CUTTING: frozenset(
        {OrderStatus.PLANNED, OrderStatus.SEWING, OrderStatus.CANCELLED}
    ),
    OrderStatus.SEWING: frozenset(
        {OrderStatus.QUALITY_CONTROL, OrderStatus.PACKING, OrderStatus.CANCELLED}
    ),
    OrderStatus.QUALITY_CONTROL: frozenset(
        {OrderStatus.PACKING, OrderStatus.SEWING, OrderStatus.CANCELLED}
    ),
    OrderStatus.PACKING: frozenset(
        {OrderStatus.COMPLETED, OrderStatus.QUALITY_CONTROL, OrderStatus.CANCELLED}
    ),
    OrderStatus.COMPLETED: frozenset({OrderStatus.PACKING}),
    OrderStatus.CANCELLED: frozenset(),
}

# Orders whose plan can still be edited, alone or as a whole batch
EDITABLE_STATUSES = frozenset({OrderStatus.DRAFT, OrderStatus.PLANNED})

# Orders that accept cutting jobs
CUTTABLE_STATUSES = frozenset({OrderStatus.DRAFT, OrderStatus.PLANNED, OrderStatus.CUTTING})

# Restarting the cut here would destroy history with no correction path
PAST_CUTTING_STATUSES = frozenset(
    {
        OrderStatus.SEWING,
        OrderStatus.QUALITY_CONTROL,
        OrderStatus.PACKING,
        OrderStatus.COMPLETED,
    }
)

REVISABLE_STATUSES = frozenset({OrderStatus.SEWING, OrderStatus.QUALITY_CONTROL})

# Orders still consuming raw material (up to the sewing workshop)
PRE_REVISION_STATUSES = frozenset(
    {OrderStatus.DRAFT, OrderStatus.PLANNED, OrderStatus.CUTTING, OrderStatus.SEWING}
)

TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(
    order: ProductionOrder,
    target: OrderStatus,
    action: str,
    reason: str | None = None,
) -> None:
    """Raise IllegalTransitionError unless current -> target is an allowed edge."""
    if not can_transition(order.status, target):
        raise IllegalTransitionError(
            order.id,
            order.status.value,
            action,
            reason or f"no edge to '{target.value}'",
        )


def transition(
    order: ProductionOrder,
    target: OrderStatus,
    user: str,
    action: str,
    description: str,
) -> None:
    """Move the order to target and log a status_change event."""
    ensure_transition(order, target, action)
    previous = order.status
    order.status = target
    order.record_event(user, action, description, EventType.STATUS_CHANGE)
    logger.info(
        "order_status_changed",
        order_id=order.id,
        lot_number=order.lot_number,
        from_status=previous.value,
        to_status=target.value,
    )


def restart_cutting(order: ProductionOrder, user: str) -> None:
    """Reset the cut to zero and return the order to planned."""
    if order.status in PAST_CUTTING_STATUSES or order.status == OrderStatus.CANCELLED:
        raise IllegalTransitionError(
            order.id,
            order.status.value,
            "restart cutting",
            "order already progressed past cutting",
        )
    if order.cutting_details is None:
        raise InvalidInputError("cutting_details", "order has no cutting plan")

    discarded = len(order.cutting_details.jobs)
    order.cutting_details.jobs = []
    order.cutting_details.is_finalized = False
    description = f"Cutting restarted, {discarded} job(s) discarded"
    if order.status == OrderStatus.PLANNED:
        order.record_event(user, "Cutting restarted", description, EventType.ALERT)
    else:
        order.status = OrderStatus.PLANNED
        order.record_event(user, "Cutting restarted", description, EventType.STATUS_CHANGE)


def advance_to_sewing(order: ProductionOrder, user: str) -> None:
    """Hand a fully cut order to the sewing workshop."""
    ensure_transition(order, OrderStatus.SEWING, "send to sewing")
    if not order.is_cutting_complete:
        raise IllegalTransitionError(
            order.id,
            order.status.value,
            "send to sewing",
            f"only {order.total_cut} of {order.quantity_total} pieces cut",
        )
    if order.cutting_details is not None:
        order.cutting_details.is_finalized = True
    transition(
        order,
        OrderStatus.SEWING,
        user,
        "Sent to sewing",
        f"{order.total_cut} pieces handed to {order.subcontractor or 'workshop'}",
    )


def send_to_quality_control(order: ProductionOrder, user: str) -> None:
    """Record the workshop's return; the order waits for its revision."""
    transition(
        order,
        OrderStatus.QUALITY_CONTROL,
        user,
        "Returned from sewing",
        f"{order.total_cut} pieces back from {order.subcontractor or 'workshop'}",
    )


def complete_revision(
    order: ProductionOrder, revision: RevisionDetails, user: str
) -> None:
    """Record quality-control results. The order moves straight to packing."""
    if order.status not in REVISABLE_STATUSES:
        raise IllegalTransitionError(
            order.id, order.status.value, "save revision", "order is not in sewing or revision"
        )
    if not (revision.inspector_name or "").strip():
        raise InvalidInputError("inspector_name", "inspector name is required")

    if revision.items_approved:
        revision.approved_qty = sum(i.quantity for i in revision.items_approved)
    checked = revision.approved_qty + revision.rework_qty + revision.rejected_qty
    if checked > order.quantity_total:
        raise InvalidInputError(
            "approved_qty",
            f"checked total {checked} exceeds order total {order.quantity_total}",
            checked,
        )

    revision.is_finalized = True
    revision.end_date = datetime.utcnow()
    order.revision_details = revision
    transition(
        order,
        OrderStatus.PACKING,
        user,
        "Revision completed",
        f"Approved {revision.approved_qty}, rework {revision.rework_qty}, "
        f"rejected {revision.rejected_qty} (inspector {revision.inspector_name})",
    )


def complete_packing(
    order: ProductionOrder, packing: PackingDetails, user: str
) -> bool:
    """Finalize packing and complete the order.

    Returns False without touching the order when it is already completed,
    so the completion side effects only run on the edge into completed.
    """
    if order.status == OrderStatus.COMPLETED:
        logger.info("packing_already_completed", order_id=order.id)
        return False
    if order.status != OrderStatus.PACKING:
        raise IllegalTransitionError(
            order.id, order.status.value, "save packing", "order is not in packing"
        )
    if not (packing.warehouse or "").strip():
        raise InvalidInputError("warehouse", "destination warehouse is required")
    if not (packing.packer_name or "").strip():
        raise InvalidInputError("packer_name", "packer name is required")

    packing.total_packed_qty = sum(i.quantity for i in packing.items_packed)
    if packing.total_packed_qty == 0:
        logger.warning("packing_completed_empty", order_id=order.id)
    packing.is_finalized = True
    packing.packed_date = datetime.utcnow()
    order.packing_details = packing
    transition(
        order,
        OrderStatus.COMPLETED,
        user,
        "Production completed",
        f"{packing.total_packed_qty} pieces packed into {packing.total_boxes} box(es), "
        f"sent to {packing.warehouse}",
    )
    return True


def revert_packing_to_revision(order: ProductionOrder, user: str) -> None:
    """Reopen the revision stage and drop the packing data."""
    ensure_transition(order, OrderStatus.QUALITY_CONTROL, "revert packing")
    if order.revision_details is not None:
        order.revision_details.is_finalized = False
    order.packing_details = None
    transition(
        order,
        OrderStatus.QUALITY_CONTROL,
        user,
        "Reverted to revision",
        "Packing reverted, revision reopened",
    )


def revert_revision_to_sewing(order: ProductionOrder, user: str) -> None:
    """Send the order back to the sewing workshop and drop revision data."""
    if order.status != OrderStatus.QUALITY_CONTROL:
        raise IllegalTransitionError(
            order.id, order.status.value, "revert revision", "order is not in revision"
        )
    order.revision_details = None
    transition(
        order,
        OrderStatus.SEWING,
        user,
        "Reverted to sewing",
        "Revision reverted, order returned to workshop",
    )


def reopen_packing(order: ProductionOrder, user: str, removed_stock: int) -> None:
    """Return a completed order to packing after its stock was removed."""
    if order.status != OrderStatus.COMPLETED:
        raise IllegalTransitionError(
            order.id, order.status.value, "revert stock", "order is not completed"
        )
    if order.packing_details is not None:
        order.packing_details.is_finalized = False
    transition(
        order,
        OrderStatus.PACKING,
        user,
        "Stock reverted",
        f"{removed_stock} stock record(s) removed, order returned to packing",
    )


def cancel(order: ProductionOrder, user: str, reason: str | None = None) -> None:
    """Cancel a non-terminal order. Cancelled orders accept no further mutation."""
    if order.status in TERMINAL_STATUSES:
        raise IllegalTransitionError(
            order.id, order.status.value, "cancel", "order is already closed"
        )
    transition(
        order,
        OrderStatus.CANCELLED,
        user,
        "Cancelled",
        reason or "Order cancelled",
    )
