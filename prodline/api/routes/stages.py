"""Sewing, quality control, revision, packing and cancellation endpoints."""

from fastapi import APIRouter, Depends

from prodline.api.dependencies import (
    get_advance_to_sewing_use_case,
    get_cancel_order_use_case,
    get_revert_packing_use_case,
    get_revert_revision_use_case,
    get_save_packing_use_case,
    get_save_revision_use_case,
    get_send_to_quality_control_use_case,
)
from prodline.application.dto.requests import (
    CancelOrderRequest,
    OrderActionRequest,
    SavePackingRequest,
    SaveRevisionRequest,
)
from prodline.application.dto.responses import (
    ErrorResponse,
    ProductionOrderResponse,
    SavePackingResponse,
)
from prodline.application.use_cases import (
    AdvanceToSewingUseCase,
    CancelOrderUseCase,
    RevertPackingToRevisionUseCase,
    RevertRevisionToSewingUseCase,
    SavePackingUseCase,
    SaveRevisionUseCase,
    SendToQualityControlUseCase,
)
from prodline.application.use_cases.base import order_to_response

router = APIRouter(prefix="/api/stages", tags=["stages"])

ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.post("/sewing", response_model=ProductionOrderResponse, responses=ERRORS)
async def advance_to_sewing(
    request: OrderActionRequest,
    use_case: AdvanceToSewingUseCase = Depends(get_advance_to_sewing_use_case),
) -> ProductionOrderResponse:
    """Close cutting and hand the order to sewing."""
    return order_to_response(await use_case.execute(request))


@router.post("/quality-control", response_model=ProductionOrderResponse, responses=ERRORS)
async def send_to_quality_control(
    request: OrderActionRequest,
    use_case: SendToQualityControlUseCase = Depends(get_send_to_quality_control_use_case),
) -> ProductionOrderResponse:
    """Register the workshop's return of the sewn pieces."""
    return order_to_response(await use_case.execute(request))


@router.post("/revision", response_model=ProductionOrderResponse, responses=ERRORS)
async def save_revision(
    request: SaveRevisionRequest,
    use_case: SaveRevisionUseCase = Depends(get_save_revision_use_case),
) -> ProductionOrderResponse:
    """Record quality control results."""
    return order_to_response(await use_case.execute(request))


@router.post("/packing", response_model=SavePackingResponse, responses=ERRORS)
async def save_packing(
    request: SavePackingRequest,
    use_case: SavePackingUseCase = Depends(get_save_packing_use_case),
) -> SavePackingResponse:
    """Complete the order and create its finished-goods stock."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post("/packing/revert", response_model=ProductionOrderResponse, responses=ERRORS)
async def revert_packing(
    request: OrderActionRequest,
    use_case: RevertPackingToRevisionUseCase = Depends(get_revert_packing_use_case),
) -> ProductionOrderResponse:
    return order_to_response(await use_case.execute(request))


@router.post("/revision/revert", response_model=ProductionOrderResponse, responses=ERRORS)
async def revert_revision(
    request: OrderActionRequest,
    use_case: RevertRevisionToSewingUseCase = Depends(get_revert_revision_use_case),
) -> ProductionOrderResponse:
    return order_to_response(await use_case.execute(request))


@router.post("/cancel", response_model=ProductionOrderResponse, responses=ERRORS)
async def cancel_order(
    request: CancelOrderRequest,
    use_case: CancelOrderUseCase = Depends(get_cancel_order_use_case),
) -> ProductionOrderResponse:
    return order_to_response(await use_case.execute(request))
