"""
Cutting accumulator.

Validates a candidate cutting job (taco) against the order's declared demand,
detects the (color, size) pairs it would push past demand, applies additive
overproduction adjustments when authorized and commits the job.

Per-pair arithmetic is always layers(color) x ratio(size); totals alone are
never enough to decide overproduction.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from uuid import uuid4

from prodline.config import get_logger
from prodline.core.entities.order import (
    CuttingDetails,
    CuttingJob,
    EventType,
    ExceedingPair,
    LayerDefinition,
    MatrixRatio,
    OrderItem,
    OrderStatus,
    OverproductionAuthorization,
    ProductionOrder,
)
from prodline.core.exceptions import (
    AuthorizationError,
    IllegalTransitionError,
    InvalidInputError,
    OverproductionPendingError,
)
from prodline.core.services.lifecycle import CUTTABLE_STATUSES, EDITABLE_STATUSES

logger = get_logger(__name__)


class CuttingBucket(str, Enum):
    """Cutting board column an order falls into."""

    PLANNING = "planning"
    ACTIVE = "active"
    DONE = "done"


@dataclass
class CuttingOutcome:
    """Result of a committed cutting job."""

    job: CuttingJob
    adjustments: list[ExceedingPair] = field(default_factory=list)
    total_cut: int = 0
    quantity_total: int = 0
    cutting_complete: bool = False


def _validate_axes(matrix: list[MatrixRatio], layers: list[LayerDefinition]) -> None:
    sizes = [m.size for m in matrix]
    if len(sizes) != len(set(sizes)):
        raise InvalidInputError("matrix", "duplicate size in cutting matrix", sizes)
    colors = [ld.color for ld in layers]
    if len(colors) != len(set(colors)):
        raise InvalidInputError("layers", "duplicate color in layer definition", colors)
    if any(not s.strip() for s in sizes) or any(not c.strip() for c in colors):
        raise InvalidInputError("matrix", "size and color labels must not be blank")


def cutting_bucket(order: ProductionOrder) -> CuttingBucket | None:
    """Classify an order for the cutting board, None when it is past cutting."""
    if order.status in EDITABLE_STATUSES:
        return CuttingBucket.PLANNING
    if order.status == OrderStatus.CUTTING:
        return CuttingBucket.DONE if order.is_cutting_complete else CuttingBucket.ACTIVE
    return None


class CuttingAccumulator:
    """
    Accumulates partial cutting jobs against an order's demand.

    Stateless apart from the floor defaults; orders are mutated in place
    and persisted by the caller.
    """

    def __init__(self, default_cutter: str = "unknown", default_cut_type: str = "main") -> None:
        self._default_cutter = default_cutter
        self._default_cut_type = default_cut_type

    def build_job(
        self,
        order: ProductionOrder,
        layers: list[LayerDefinition],
        matrix: list[MatrixRatio] | None = None,
        cutter_name: str | None = None,
        cut_type: str | None = None,
        cut_date: date | None = None,
        marker_width: float | None = None,
        marker_length: float | None = None,
        marker_weight: float | None = None,
        waste_weight: float | None = None,
        bundles: int | None = None,
    ) -> CuttingJob:
        """
        Build the candidate job for an order.

        The matrix defaults to the order's planned matrix. The taco number
        is the lot number followed by the 1-based job index.

        Raises:
            InvalidInputError: Malformed axes or a job producing no pieces.
        """
        details = order.cutting_details or CuttingDetails()
        matrix = list(matrix) if matrix else list(details.planned_matrix)
        _validate_axes(matrix, layers)

        job = CuttingJob(
            id=f"cut-{uuid4().hex[:12]}",
            taco_number=f"{order.lot_number}-{len(details.jobs) + 1}",
            cut_date=cut_date or date.today(),
            cutter_name=cutter_name or details.cutter_name or self._default_cutter,
            cut_type=cut_type or self._default_cut_type,
            marker_width=marker_width,
            marker_length=marker_length,
            marker_weight=marker_weight,
            waste_weight=waste_weight,
            bundles=bundles,
            matrix=matrix,
            layers=list(layers),
        )
        if job.total_pieces <= 0:
            raise InvalidInputError(
                "total_pieces", "cutting job must produce at least one piece", job.total_pieces
            )
        return job

    def find_exceeding_pairs(
        self, order: ProductionOrder, job: CuttingJob
    ) -> list[ExceedingPair]:
        """List every (color, size) pair the job would push past demand."""
        details = order.cutting_details or CuttingDetails()
        exceeding: list[ExceedingPair] = []
        for layer in job.layers:
            if layer.layers <= 0:
                continue
            for ratio in job.matrix:
                if ratio.ratio <= 0:
                    continue
                cutting = layer.layers * ratio.ratio
                current = details.cut_for(layer.color, ratio.size)
                planned = order.target_for(layer.color, ratio.size)
                if current + cutting > planned:
                    exceeding.append(
                        ExceedingPair(
                            color=layer.color,
                            size=ratio.size,
                            planned=planned,
                            current=current,
                            cutting=cutting,
                            diff=current + cutting - planned,
                        )
                    )
        return exceeding

    def commit(
        self,
        order: ProductionOrder,
        job: CuttingJob,
        user: str,
        authorization: OverproductionAuthorization | None = None,
    ) -> CuttingOutcome:
        """
        Validate and append a job to the order.

        Raises:
            IllegalTransitionError: Order does not accept cutting jobs.
            OverproductionPendingError: Job exceeds demand and no authorization given.
            AuthorizationError: Authorization given without an authorizer name.
        """
        if order.status not in CUTTABLE_STATUSES:
            raise IllegalTransitionError(
                order.id, order.status.value, "register cutting job", "order is not open for cutting"
            )
        if job.total_pieces <= 0:
            raise InvalidInputError("total_pieces", "cutting job must produce at least one piece")

        exceeding = self.find_exceeding_pairs(order, job)
        if exceeding:
            if authorization is None:
                logger.info(
                    "overproduction_pending",
                    order_id=order.id,
                    lot_number=order.lot_number,
                    pairs=len(exceeding),
                    excess=sum(p.diff for p in exceeding),
                )
                raise OverproductionPendingError(order.id, exceeding)
            if not authorization.authorizer.strip():
                raise AuthorizationError(order.id)
            self._apply_adjustments(order, exceeding, authorization, user)

        if order.cutting_details is None:
            order.cutting_details = CuttingDetails(
                planned_matrix=list(job.matrix), planned_layers=list(job.layers)
            )
        order.cutting_details.jobs.append(job)
        order.cutting_details.is_finalized = False
        order.quantity_total = order.items_total

        description = f"Taco {job.taco_number}: {job.total_pieces} pieces cut by {job.cutter_name}"
        if order.status == OrderStatus.CUTTING:
            order.record_event(user, "Cutting job registered", description)
        else:
            order.status = OrderStatus.CUTTING
            order.record_event(user, "Cutting started", description, EventType.STATUS_CHANGE)

        outcome = CuttingOutcome(
            job=job,
            adjustments=exceeding,
            total_cut=order.total_cut,
            quantity_total=order.quantity_total,
            cutting_complete=order.is_cutting_complete,
        )
        logger.info(
            "cutting_job_committed",
            order_id=order.id,
            taco_number=job.taco_number,
            pieces=job.total_pieces,
            total_cut=outcome.total_cut,
            quantity_total=outcome.quantity_total,
            complete=outcome.cutting_complete,
        )
        return outcome

    def _apply_adjustments(
        self,
        order: ProductionOrder,
        exceeding: list[ExceedingPair],
        authorization: OverproductionAuthorization,
        user: str,
    ) -> None:
        """Raise demand by each pair's excess. Demand only grows on this path."""
        for pair in exceeding:
            item = order.find_item(pair.color, pair.size)
            if item is None:
                order.items.append(
                    OrderItem(color=pair.color, size=pair.size, quantity=pair.diff)
                )
            else:
                item.quantity += pair.diff

        summary = ", ".join(f"{p.color}/{p.size} +{p.diff}" for p in exceeding)
        description = f"Authorized by {authorization.authorizer}: {summary}"
        if authorization.note:
            description += f" ({authorization.note})"
        order.record_event(user, "Quantity change (cutting)", description, EventType.ALERT)
        logger.info(
            "overproduction_authorized",
            order_id=order.id,
            authorizer=authorization.authorizer,
            excess=sum(p.diff for p in exceeding),
        )
