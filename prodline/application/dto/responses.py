"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from prodline.core.entities.order import (
    CuttingDetails,
    ExceedingPair,
    OrderItem,
    PackingDetails,
    PhaseDates,
    ProductionEvent,
    RevisionDetails,
)


class ProductionOrderResponse(BaseModel):
    """Production order response DTO."""

    id: str
    lot_number: str
    batch_key: str
    product_id: str
    tech_pack_version: int
    status: str
    quantity_total: int
    total_cut: int
    cutting_complete: bool
    is_late: bool
    items: list[OrderItem]
    start_date: date | None = None
    due_date: date | None = None
    phase_dates: PhaseDates | None = None
    subcontractor: str | None = None
    cost_snapshot: float
    created_at: datetime
    version: int
    cutting_details: CuttingDetails | None = None
    revision_details: RevisionDetails | None = None
    packing_details: PackingDetails | None = None
    events: list[ProductionEvent] = Field(default_factory=list)


class OrderListResponse(BaseModel):
    orders: list[ProductionOrderResponse]
    total: int


class PlanBatchResponse(BaseModel):
    """Orders created or re-planned by one planning run."""

    batch_key: str
    orders: list[ProductionOrderResponse]
    created: int = 0
    updated: int = 0


class BatchResponse(BaseModel):
    """Read-only batch view. Carries no identifier of its own."""

    batch_key: str
    order_ids: list[str]
    lot_numbers: list[str]
    product_ids: list[str]
    quantity_total: int
    items: list[OrderItem]
    events: list[ProductionEvent]
    editable: bool


class BatchListResponse(BaseModel):
    batches: list[BatchResponse]
    total: int


class CuttingJobResponse(BaseModel):
    """Outcome of a cutting job submission.

    accepted=False with requires_authorization=True means nothing was
    committed; exceeding_pairs lists every pair above demand.
    """

    accepted: bool
    requires_authorization: bool = False
    exceeding_pairs: list[ExceedingPair] = Field(default_factory=list)
    adjustments: list[ExceedingPair] = Field(default_factory=list)
    taco_number: str | None = None
    job_pieces: int = 0
    total_cut: int = 0
    quantity_total: int = 0
    cutting_complete: bool = False
    order: ProductionOrderResponse | None = None


class StockRecordResponse(BaseModel):
    """Finished-goods stock record response DTO."""

    id: str
    product_id: str
    order_id: str
    warehouse: str
    quantity: int
    color: str
    size: str
    cost: float
    price: float
    total_cost: float
    date: datetime
    observation: str | None = None
    status: str


class StockListResponse(BaseModel):
    records: list[StockRecordResponse]
    total: int
    total_pieces: int


class SavePackingResponse(BaseModel):
    order: ProductionOrderResponse
    stock_created: bool
    stock_records: list[StockRecordResponse] = Field(default_factory=list)


class RevertStockResponse(BaseModel):
    order: ProductionOrderResponse
    removed_stock_ids: list[str]


class MarkExportedResponse(BaseModel):
    requested: int
    updated: int


class RequirementResponse(BaseModel):
    """Consolidated material requirement response DTO."""

    material_id: str
    material_code: str
    material_name: str
    unit: str
    required_qty: float
    stock_qty: float
    shortage: float
    status: str


class ConsolidationResponse(BaseModel):
    requirements: list[RequirementResponse]
    critical_count: int
    order_count: int


class PartnerResponse(BaseModel):
    id: str
    name: str
    type: str
    contract_type: str
    phone: str | None = None
    default_rate: float | None = None


class PartnerListResponse(BaseModel):
    partners: list[PartnerResponse]
    total: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    app_name: str
    version: str
    environment: str
    database: str = "unknown"
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ORDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    details: dict | None = Field(default=None, description="Structured error context")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
