"""Production order planning and listing endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from prodline.api.dependencies import (
    get_batch_use_case,
    get_list_batches_use_case,
    get_list_orders_use_case,
    get_order_use_case,
    get_plan_batch_use_case,
)
from prodline.application.dto.requests import ListOrdersRequest, PlanBatchRequest
from prodline.application.dto.responses import (
    BatchListResponse,
    BatchResponse,
    ErrorResponse,
    OrderListResponse,
    PlanBatchResponse,
    ProductionOrderResponse,
)
from prodline.application.use_cases import (
    GetBatchUseCase,
    GetOrderUseCase,
    ListBatchesUseCase,
    ListOrdersUseCase,
    PlanBatchUseCase,
)
from prodline.application.use_cases.base import order_to_response
from prodline.application.use_cases.query_orders import batch_to_response
from prodline.core.entities.order import OrderStatus
from prodline.core.services.cutting import CuttingBucket

router = APIRouter(prefix="/api/orders", tags=["orders"])


def list_filters(
    search: str | None = None,
    status: OrderStatus | None = None,
    late: bool = False,
    subcontractor: str | None = None,
    start_from: date | None = None,
    start_to: date | None = None,
    cutter: str | None = None,
    cutting_bucket: CuttingBucket | None = None,
    wip_only: bool = False,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
) -> ListOrdersRequest:
    return ListOrdersRequest(
        search=search,
        status=status,
        late=late,
        subcontractor=subcontractor,
        start_from=start_from,
        start_to=start_to,
        cutter=cutter,
        cutting_bucket=cutting_bucket,
        wip_only=wip_only,
        limit=limit,
        offset=offset,
    )


@router.post(
    "/plan",
    response_model=PlanBatchResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def plan_batch(
    request: PlanBatchRequest,
    use_case: PlanBatchUseCase = Depends(get_plan_batch_use_case),
) -> PlanBatchResponse:
    """Create one order per model under a new lot, or re-plan an editable batch."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    filters: ListOrdersRequest = Depends(list_filters),
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case),
) -> OrderListResponse:
    """List orders, newest first."""
    result = await use_case.execute(filters)
    return use_case.to_response(result)


@router.get("/batches", response_model=BatchListResponse)
async def list_batches(
    filters: ListOrdersRequest = Depends(list_filters),
    use_case: ListBatchesUseCase = Depends(get_list_batches_use_case),
) -> BatchListResponse:
    """Group the filtered orders into batches."""
    views = await use_case.execute(filters)
    return use_case.to_response(views)


@router.get(
    "/batches/{key}",
    response_model=BatchResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_batch(
    key: str,
    use_case: GetBatchUseCase = Depends(get_batch_use_case),
) -> BatchResponse:
    view = await use_case.execute(key)
    return batch_to_response(view)


@router.get(
    "/{order_id}",
    response_model=ProductionOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: str,
    use_case: GetOrderUseCase = Depends(get_order_use_case),
) -> ProductionOrderResponse:
    order = await use_case.execute(order_id)
    return order_to_response(order)
