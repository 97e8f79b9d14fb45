"""Cutting floor endpoints."""

from fastapi import APIRouter, Depends

from prodline.api.dependencies import (
    get_authorize_cutting_job_use_case,
    get_restart_cutting_use_case,
    get_submit_cutting_job_use_case,
)
from prodline.application.dto.requests import OrderActionRequest, SubmitCuttingJobRequest
from prodline.application.dto.responses import (
    CuttingJobResponse,
    ErrorResponse,
    ProductionOrderResponse,
)
from prodline.application.use_cases import (
    AuthorizeAndCommitCuttingJobUseCase,
    RestartCuttingUseCase,
    SubmitCuttingJobUseCase,
)
from prodline.application.use_cases.base import order_to_response

router = APIRouter(prefix="/api/cutting", tags=["cutting"])

ERRORS = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.post("/jobs", response_model=CuttingJobResponse, responses=ERRORS)
async def submit_cutting_job(
    request: SubmitCuttingJobRequest,
    use_case: SubmitCuttingJobUseCase = Depends(get_submit_cutting_job_use_case),
) -> CuttingJobResponse:
    """
    Register a cutting job.

    A job that would exceed the planned quantities without an authorizer is
    not saved; the response has ``accepted=false`` and lists the exceeding
    color/size pairs.
    """
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post("/jobs/authorize", response_model=CuttingJobResponse, responses=ERRORS)
async def authorize_cutting_job(
    request: SubmitCuttingJobRequest,
    use_case: AuthorizeAndCommitCuttingJobUseCase = Depends(get_authorize_cutting_job_use_case),
) -> CuttingJobResponse:
    """Register a cutting job with the overproduction approved by ``authorizer``."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post("/restart", response_model=ProductionOrderResponse, responses=ERRORS)
async def restart_cutting(
    request: OrderActionRequest,
    use_case: RestartCuttingUseCase = Depends(get_restart_cutting_use_case),
) -> ProductionOrderResponse:
    order = await use_case.execute(request)
    return order_to_response(order)
