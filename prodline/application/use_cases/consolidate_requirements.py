"""Consolidate Requirements Use Case: material needs across selected orders."""

from prodline.application.dto.requests import ConsolidateRequirementsRequest
from prodline.application.dto.responses import ConsolidationResponse, RequirementResponse
from prodline.application.use_cases.base import OrderUseCase
from prodline.config import get_logger
from prodline.core.entities.requirement import ConsolidatedRequirement, RequirementStatus
from prodline.core.services.material_consolidation import MaterialConsolidationEngine

logger = get_logger(__name__)


class ConsolidateRequirementsUseCase(OrderUseCase):
    """Recompute consolidated requirements on every call; nothing is cached."""

    async def execute(
        self, request: ConsolidateRequirementsRequest
    ) -> list[ConsolidatedRequirement]:
        engine = MaterialConsolidationEngine(
            await self._get_order_store(), await self._get_catalog()
        )
        return await engine.consolidate(request.order_ids)

    def to_response(
        self,
        request: ConsolidateRequirementsRequest,
        requirements: list[ConsolidatedRequirement],
    ) -> ConsolidationResponse:
        return ConsolidationResponse(
            requirements=[
                RequirementResponse(
                    material_id=r.material.id,
                    material_code=r.material.code,
                    material_name=r.material.name,
                    unit=r.material.unit.value,
                    required_qty=round(r.required_qty, 4),
                    stock_qty=r.stock_qty,
                    shortage=round(r.shortage, 4),
                    status=r.status.value,
                )
                for r in requirements
            ],
            critical_count=sum(1 for r in requirements if r.status == RequirementStatus.CRITICAL),
            order_count=len(set(request.order_ids)),
        )
