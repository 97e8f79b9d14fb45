"""Material requirement endpoints."""

from fastapi import APIRouter, Depends

from prodline.api.dependencies import get_consolidate_requirements_use_case
from prodline.application.dto.requests import ConsolidateRequirementsRequest
from prodline.application.dto.responses import ConsolidationResponse, ErrorResponse
from prodline.application.use_cases import ConsolidateRequirementsUseCase

router = APIRouter(prefix="/api/requirements", tags=["requirements"])


@router.post(
    "/consolidate",
    response_model=ConsolidationResponse,
    responses={404: {"model": ErrorResponse}},
)
async def consolidate_requirements(
    request: ConsolidateRequirementsRequest,
    use_case: ConsolidateRequirementsUseCase = Depends(get_consolidate_requirements_use_case),
) -> ConsolidationResponse:
    """Material still needed to finish cutting the selected orders."""
    requirements = await use_case.execute(request)
    return use_case.to_response(request, requirements)
