"""Core domain services."""

from prodline.core.services import lifecycle
from prodline.core.services.cutting import (
    CuttingAccumulator,
    CuttingBucket,
    CuttingOutcome,
    cutting_bucket,
)
from prodline.core.services.lot_grouping import (
    BATCH_ID_PREFIX,
    batch_key,
    build_batch_view,
    build_batch_views,
    group_by_lot,
    is_batch_editable,
    is_batch_identifier,
    lot_numbers_for,
    next_batch_base,
)
from prodline.core.services.material_consolidation import (
    MaterialConsolidationEngine,
    remaining_to_cut,
)
from prodline.core.services.planning import derive_items
from prodline.core.services.stock_materializer import StockMaterializer

__all__ = [
    "lifecycle",
    "CuttingAccumulator",
    "CuttingBucket",
    "CuttingOutcome",
    "cutting_bucket",
    "BATCH_ID_PREFIX",
    "batch_key",
    "build_batch_view",
    "build_batch_views",
    "group_by_lot",
    "is_batch_editable",
    "is_batch_identifier",
    "lot_numbers_for",
    "next_batch_base",
    "MaterialConsolidationEngine",
    "remaining_to_cut",
    "derive_items",
    "StockMaterializer",
]
