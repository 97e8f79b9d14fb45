"""Submit Cutting Job Use Case: accumulate a taco, gating overproduction."""

from dataclasses import dataclass, field

from prodline.application.dto.requests import SubmitCuttingJobRequest
from prodline.application.dto.responses import CuttingJobResponse
from prodline.application.use_cases.base import OrderUseCase, order_to_response
from prodline.config import get_logger, get_settings
from prodline.core.entities.order import (
    CuttingJob,
    ExceedingPair,
    OverproductionAuthorization,
    ProductionOrder,
)
from prodline.core.exceptions import AuthorizationError, OverproductionPendingError
from prodline.core.services.cutting import CuttingAccumulator

logger = get_logger(__name__)


@dataclass
class SubmitCuttingJobResult:
    """Either a committed job or the pairs awaiting authorization."""

    accepted: bool
    order: ProductionOrder | None = None
    job: CuttingJob | None = None
    exceeding_pairs: list[ExceedingPair] = field(default_factory=list)
    adjustments: list[ExceedingPair] = field(default_factory=list)
    cutting_complete: bool = False

    @property
    def requires_authorization(self) -> bool:
        return not self.accepted and bool(self.exceeding_pairs)


class SubmitCuttingJobUseCase(OrderUseCase):
    """
    Register one cutting job in a single call.

    Without an authorizer, a job exceeding demand is not committed and the
    result lists every exceeding pair. With an authorizer, demand is raised
    by each pair's excess and the job is committed on the same snapshot.
    """

    def __init__(self, *args, accumulator: CuttingAccumulator | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        if accumulator is None:
            settings = get_settings().production
            accumulator = CuttingAccumulator(
                default_cutter=settings.default_cutter,
                default_cut_type=settings.default_cut_type,
            )
        self._accumulator = accumulator

    async def execute(self, request: SubmitCuttingJobRequest) -> SubmitCuttingJobResult:
        user = self._actor(request.user)
        order = await self._load_order(request.order_id, request.expected_version)

        entry = request.job
        job = self._accumulator.build_job(
            order,
            layers=entry.layers,
            matrix=entry.matrix,
            cutter_name=entry.cutter_name,
            cut_type=entry.cut_type,
            cut_date=entry.cut_date,
            marker_width=entry.marker_width,
            marker_length=entry.marker_length,
            marker_weight=entry.marker_weight,
            waste_weight=entry.waste_weight,
            bundles=entry.bundles,
        )

        authorization = None
        if request.authorizer is not None:
            authorization = OverproductionAuthorization(
                authorizer=request.authorizer, note=request.authorization_note
            )

        try:
            outcome = self._accumulator.commit(order, job, user, authorization)
        except OverproductionPendingError as pending:
            return SubmitCuttingJobResult(
                accepted=False,
                job=job,
                exceeding_pairs=list(pending.exceeding_pairs),
            )

        store = await self._get_order_store()
        order = await store.save(order)
        return SubmitCuttingJobResult(
            accepted=True,
            order=order,
            job=outcome.job,
            adjustments=outcome.adjustments,
            cutting_complete=outcome.cutting_complete,
        )

    def to_response(self, result: SubmitCuttingJobResult) -> CuttingJobResponse:
        order = result.order
        return CuttingJobResponse(
            accepted=result.accepted,
            requires_authorization=result.requires_authorization,
            exceeding_pairs=result.exceeding_pairs,
            adjustments=result.adjustments,
            taco_number=result.job.taco_number if result.job and result.accepted else None,
            job_pieces=result.job.total_pieces if result.job else 0,
            total_cut=order.total_cut if order else 0,
            quantity_total=order.quantity_total if order else 0,
            cutting_complete=result.cutting_complete,
            order=order_to_response(order) if order else None,
        )


class AuthorizeAndCommitCuttingJobUseCase(SubmitCuttingJobUseCase):
    """Commit a cutting job with overproduction authorization mandatory."""

    async def execute(self, request: SubmitCuttingJobRequest) -> SubmitCuttingJobResult:
        if not (request.authorizer or "").strip():
            raise AuthorizationError(request.order_id)
        return await super().execute(request)
