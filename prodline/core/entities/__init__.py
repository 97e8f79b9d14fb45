"""Core domain entities."""

from prodline.core.entities.batch import BatchView
from prodline.core.entities.catalog import (
    BOMItem,
    Material,
    MaterialType,
    Partner,
    PartnerType,
    Product,
    TechPack,
    TechPackStatus,
    UnitOfMeasure,
)
from prodline.core.entities.order import (
    CuttingDetails,
    CuttingJob,
    EventType,
    ExceedingPair,
    LayerDefinition,
    MatrixRatio,
    OrderItem,
    OrderStatus,
    OverproductionAuthorization,
    PackingDetails,
    PackingType,
    PhaseDates,
    ProductionEvent,
    ProductionOrder,
    RevisionDetails,
)
from prodline.core.entities.requirement import ConsolidatedRequirement, RequirementStatus
from prodline.core.entities.stock import FinishedProductStock, StockStatus

__all__ = [
    # Order entities
    "ProductionOrder",
    "OrderStatus",
    "OrderItem",
    "EventType",
    "ProductionEvent",
    "PhaseDates",
    "CuttingDetails",
    "CuttingJob",
    "MatrixRatio",
    "LayerDefinition",
    "ExceedingPair",
    "OverproductionAuthorization",
    "RevisionDetails",
    "PackingDetails",
    "PackingType",
    # Stock entities
    "FinishedProductStock",
    "StockStatus",
    # Catalog entities
    "Product",
    "TechPack",
    "TechPackStatus",
    "BOMItem",
    "Material",
    "MaterialType",
    "UnitOfMeasure",
    "Partner",
    "PartnerType",
    # Derived views
    "BatchView",
    "ConsolidatedRequirement",
    "RequirementStatus",
]
