"""Production order domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class OrderStatus(str, Enum):
    """Lifecycle states of a production order."""

    DRAFT = "draft"
    PLANNED = "planned"
    CUTTING = "cutting"
    SEWING = "sewing"
    QUALITY_CONTROL = "quality_control"
    PACKING = "packing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EventType(str, Enum):
    """Kinds of audit log entries."""

    STATUS_CHANGE = "status_change"
    UPDATE = "update"
    ALERT = "alert"


class PackingType(str, Enum):
    """How finished pieces are packed."""

    STANDARD_BOX = "standard_box"
    INDIVIDUAL_BAG = "individual_bag"
    HANGER = "hanger"


class OrderItem(BaseModel):
    """Demand for one (color, size) pair."""

    color: str
    size: str
    quantity: int = Field(ge=0)


class MatrixRatio(BaseModel):
    """Pieces of one size cut per fabric layer."""

    size: str
    ratio: int = Field(ge=0)


class LayerDefinition(BaseModel):
    """Fabric layers stacked for one color."""

    color: str
    layers: int = Field(ge=0)
    rolls_used: float | None = None


class CuttingJob(BaseModel):
    """A single physical cutting execution (taco).

    total_pieces is always derived from the job's own matrix and layers;
    any value supplied on construction is discarded.
    """

    id: str
    taco_number: str
    cut_date: date = Field(default_factory=date.today)
    cutter_name: str
    cut_type: str = "main"

    marker_width: float | None = None  # m
    marker_length: float | None = None  # m
    marker_weight: float | None = None  # kg
    waste_weight: float | None = None  # kg
    bundles: int | None = None

    matrix: list[MatrixRatio]
    layers: list[LayerDefinition]

    total_pieces: int = 0
    fabric_consumption: float = 0.0

    @model_validator(mode="after")
    def compute_totals(self) -> "CuttingJob":
        """Recompute total pieces as (sum of ratios) x (sum of layers)."""
        self.total_pieces = sum(m.ratio for m in self.matrix) * sum(
            layer.layers for layer in self.layers
        )
        self.fabric_consumption = self.marker_weight or 0.0
        return self

    def pieces_for(self, color: str, size: str) -> int:
        """Pieces of one (color, size) pair produced by this job."""
        layer = next((ld for ld in self.layers if ld.color == color), None)
        ratio = next((m for m in self.matrix if m.size == size), None)
        if layer is None or ratio is None:
            return 0
        return layer.layers * ratio.ratio


class CuttingDetails(BaseModel):
    """Cutting plan and its executed jobs."""

    planned_matrix: list[MatrixRatio] = Field(default_factory=list)
    planned_layers: list[LayerDefinition] = Field(default_factory=list)
    cutter_name: str | None = None
    jobs: list[CuttingJob] = Field(default_factory=list)
    is_finalized: bool = False

    @property
    def total_cut(self) -> int:
        """Cumulative pieces cut across all jobs."""
        return sum(job.total_pieces for job in self.jobs)

    def cut_for(self, color: str, size: str) -> int:
        """Cumulative pieces cut for one (color, size) pair."""
        return sum(job.pieces_for(color, size) for job in self.jobs)


class RevisionDetails(BaseModel):
    """Quality-control (revision) results."""

    start_date: datetime | None = None
    end_date: datetime | None = None
    inspector_name: str | None = None
    approved_qty: int = 0  # first quality
    items_approved: list[OrderItem] = Field(default_factory=list)
    rework_qty: int = 0  # second quality
    rejected_qty: int = 0  # loss
    notes: str | None = None
    is_finalized: bool = False


class PackingDetails(BaseModel):
    """Packing results and stock destination."""

    packed_date: datetime | None = None
    total_boxes: int = 0
    packing_type: PackingType = PackingType.STANDARD_BOX
    items_per_box: int | None = None
    total_packed_qty: int = 0
    items_packed: list[OrderItem] = Field(default_factory=list)
    warehouse: str | None = None
    packer_name: str | None = None
    is_finalized: bool = False


class PhaseDates(BaseModel):
    """Planned start/end dates of each production phase."""

    cutting_start: date | None = None
    cutting_end: date | None = None
    sewing_start: date | None = None
    sewing_end: date | None = None
    revision_start: date | None = None
    revision_end: date | None = None
    packing_start: date | None = None
    packing_end: date | None = None


class ProductionEvent(BaseModel):
    """Audit log entry."""

    date: datetime = Field(default_factory=datetime.utcnow)
    user: str
    action: str
    description: str
    type: EventType = EventType.UPDATE


class ProductionOrder(BaseModel):
    """Aggregate root: one production order (OP)."""

    id: str
    lot_number: str
    product_id: str
    tech_pack_version: int = 1

    quantity_total: int = 0
    items: list[OrderItem] = Field(default_factory=list)

    status: OrderStatus = OrderStatus.DRAFT
    start_date: date | None = None
    due_date: date | None = None
    phase_dates: PhaseDates | None = None

    subcontractor: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    cost_snapshot: float = 0.0

    cutting_details: CuttingDetails | None = None
    revision_details: RevisionDetails | None = None
    packing_details: PackingDetails | None = None

    events: list[ProductionEvent] = Field(default_factory=list)

    # Optimistic concurrency token, bumped by the store on every save
    version: int = 0

    @property
    def items_total(self) -> int:
        """Sum of item quantities."""
        return sum(item.quantity for item in self.items)

    @property
    def total_cut(self) -> int:
        """Cumulative pieces cut so far."""
        return self.cutting_details.total_cut if self.cutting_details else 0

    @property
    def is_cutting_complete(self) -> bool:
        return self.total_cut >= self.quantity_total

    @property
    def is_late(self) -> bool:
        if self.due_date is None:
            return False
        return self.due_date < date.today() and self.status not in (
            OrderStatus.COMPLETED,
            OrderStatus.CANCELLED,
        )

    def find_item(self, color: str, size: str) -> OrderItem | None:
        return next(
            (i for i in self.items if i.color == color and i.size == size), None
        )

    def target_for(self, color: str, size: str) -> int:
        """Declared demand for a (color, size) pair, 0 when undeclared."""
        item = self.find_item(color, size)
        return item.quantity if item else 0

    def record_event(
        self,
        user: str,
        action: str,
        description: str,
        event_type: EventType = EventType.UPDATE,
    ) -> ProductionEvent:
        """Append an entry to the audit log."""
        event = ProductionEvent(
            user=user,
            action=action,
            description=description,
            type=event_type,
        )
        self.events.append(event)
        return event


class ExceedingPair(BaseModel):
    """A (color, size) pair a cutting job would push past declared demand."""

    color: str
    size: str
    planned: int  # declared demand
    current: int  # already cut by previous jobs
    cutting: int  # cut by the candidate job
    diff: int  # pieces above demand


class OverproductionAuthorization(BaseModel):
    """Approval to raise demand by the exceeding amounts.

    Adjustments are additive only; demand never decreases through this path.
    """

    authorizer: str
    note: str | None = None
