"""Finished-goods stock endpoints."""

from fastapi import APIRouter, Depends, Query

from prodline.api.dependencies import (
    get_list_stock_use_case,
    get_mark_exported_use_case,
    get_revert_stock_use_case,
)
from prodline.application.dto.requests import (
    ListStockRequest,
    MarkStockExportedRequest,
    RevertStockRequest,
)
from prodline.application.dto.responses import (
    ErrorResponse,
    MarkExportedResponse,
    RevertStockResponse,
    StockListResponse,
)
from prodline.application.use_cases import (
    ListStockUseCase,
    MarkStockExportedUseCase,
    RevertCompletedStockUseCase,
)
from prodline.core.entities.stock import StockStatus

router = APIRouter(prefix="/api/stock", tags=["stock"])


@router.get("", response_model=StockListResponse)
async def list_stock(
    status: StockStatus | None = None,
    order_id: str | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    use_case: ListStockUseCase = Depends(get_list_stock_use_case),
) -> StockListResponse:
    records = await use_case.execute(
        ListStockRequest(status=status, order_id=order_id, limit=limit, offset=offset)
    )
    return use_case.to_response(records)


@router.post("/export", response_model=MarkExportedResponse)
async def mark_exported(
    request: MarkStockExportedRequest,
    use_case: MarkStockExportedUseCase = Depends(get_mark_exported_use_case),
) -> MarkExportedResponse:
    """Flag stock records as exported to the sales system."""
    updated = await use_case.execute(request)
    return use_case.to_response(request, updated)


@router.post(
    "/revert",
    response_model=RevertStockResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def revert_stock(
    request: RevertStockRequest,
    use_case: RevertCompletedStockUseCase = Depends(get_revert_stock_use_case),
) -> RevertStockResponse:
    """Remove a completed order's stock and send the order back to packing."""
    result = await use_case.execute(request)
    return use_case.to_response(result)
