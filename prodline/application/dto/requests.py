"""Request DTOs for API endpoints.

Pydantic v2 models for request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from prodline.core.entities.order import (
    LayerDefinition,
    MatrixRatio,
    OrderItem,
    OrderStatus,
    PackingType,
    PhaseDates,
)
from prodline.core.entities.stock import StockStatus
from prodline.core.services.cutting import CuttingBucket


class ActorRequest(BaseModel):
    """Base for requests that mutate state on behalf of a user."""

    user: str | None = Field(
        default=None,
        description="Acting user recorded in the audit log (defaults to the system user)",
    )


class OrderCommandRequest(ActorRequest):
    """Base for commands addressed to one production order."""

    order_id: str = Field(..., description="Production order ID")
    expected_version: int | None = Field(
        default=None,
        description="Version the caller last read; a mismatch aborts with a conflict",
    )


# --- Planning ---


class PlanModelRequest(BaseModel):
    """One product model of a planned batch."""

    product_id: str = Field(..., description="Catalog product ID")
    tech_pack_version: int | None = Field(
        default=None, description="Tech pack version (defaults to the latest)"
    )
    matrix: list[MatrixRatio] = Field(..., min_length=1, description="Planned size ratios")
    layers: list[LayerDefinition] = Field(..., min_length=1, description="Planned color layers")
    cutter_name: str | None = None
    subcontractor: str | None = None
    existing_order_id: str | None = Field(
        default=None, description="Order to re-plan when editing an existing batch"
    )


class PlanBatchRequest(ActorRequest):
    """Create (or re-plan) one order per model under a shared lot."""

    models: list[PlanModelRequest] = Field(..., min_length=1)
    status: OrderStatus = Field(
        default=OrderStatus.PLANNED, description="draft or planned"
    )
    phase_dates: PhaseDates | None = None
    batch_key: str | None = Field(
        default=None,
        description="Existing batch to re-plan; omitted for a new batch",
        examples=["2025-010"],
    )


# --- Queries ---


class ListOrdersRequest(BaseModel):
    """Filter for order listings."""

    search: str | None = Field(
        default=None, description="Matches lot number, product name or SKU"
    )
    status: OrderStatus | None = None
    late: bool = Field(default=False, description="Only orders past their due date")
    subcontractor: str | None = None
    start_from: date | None = None
    start_to: date | None = None
    cutter: str | None = None
    cutting_bucket: CuttingBucket | None = Field(
        default=None, description="Cutting board column", examples=["active"]
    )
    wip_only: bool = Field(default=False, description="Only orders on the shop floor")
    limit: int = Field(default=100, ge=1, le=1000)
    offset: int = Field(default=0, ge=0)


# --- Cutting ---


class CuttingJobRequest(BaseModel):
    """One physical cutting execution (taco) as entered on the floor."""

    layers: list[LayerDefinition] = Field(..., min_length=1)
    matrix: list[MatrixRatio] | None = Field(
        default=None, description="Actual ratios (defaults to the planned matrix)"
    )
    cutter_name: str | None = None
    cut_type: str | None = None
    cut_date: date | None = None
    marker_width: float | None = Field(default=None, ge=0)
    marker_length: float | None = Field(default=None, ge=0)
    marker_weight: float | None = Field(default=None, ge=0)
    waste_weight: float | None = Field(default=None, ge=0)
    bundles: int | None = Field(default=None, ge=0)


class SubmitCuttingJobRequest(OrderCommandRequest):
    """Submit a cutting job, optionally with an overproduction authorization."""

    job: CuttingJobRequest
    authorizer: str | None = Field(
        default=None,
        description="Name of the person authorizing overproduction; presence means authorized",
    )
    authorization_note: str | None = None


# --- Stages ---


class OrderActionRequest(OrderCommandRequest):
    """Stage command without payload (restart, send to sewing, reverts)."""


class CancelOrderRequest(OrderCommandRequest):
    reason: str | None = Field(default=None, max_length=500)


class SaveRevisionRequest(OrderCommandRequest):
    """Quality-control results for an order."""

    inspector_name: str = Field(default="", description="Inspector (required)")
    approved_qty: int = Field(default=0, ge=0)
    items_approved: list[OrderItem] = Field(default_factory=list)
    rework_qty: int = Field(default=0, ge=0)
    rejected_qty: int = Field(default=0, ge=0)
    start_date: datetime | None = None
    notes: str | None = None


class SavePackingRequest(OrderCommandRequest):
    """Packing results and destination warehouse."""

    warehouse: str = Field(default="", description="Destination warehouse (required)")
    packer_name: str = Field(default="", description="Packer (required)")
    total_boxes: int = Field(default=0, ge=0)
    packing_type: PackingType = PackingType.STANDARD_BOX
    items_per_box: int | None = Field(default=None, ge=0)
    items_packed: list[OrderItem] = Field(default_factory=list)


class RevertStockRequest(ActorRequest):
    """Revert a completed order to packing through one of its stock records."""

    stock_id: str = Field(..., description="Any stock record of the completed order")


# --- Stock ---


class ListStockRequest(BaseModel):
    status: StockStatus | None = None
    order_id: str | None = None
    limit: int = Field(default=100, ge=1, le=1000)
    offset: int = Field(default=0, ge=0)


class MarkStockExportedRequest(BaseModel):
    stock_ids: list[str] = Field(..., min_length=1)


# --- Requirements ---


class ConsolidateRequirementsRequest(BaseModel):
    """Orders whose remaining material needs are consolidated."""

    order_ids: list[str] = Field(..., min_length=1)
