"""Application use cases."""

from prodline.application.use_cases.consolidate_requirements import (
    ConsolidateRequirementsUseCase,
)
from prodline.application.use_cases.finished_stock import (
    ListStockUseCase,
    MarkStockExportedUseCase,
    RevertCompletedStockUseCase,
    RevertStockResult,
)
from prodline.application.use_cases.list_partners import ListPartnersUseCase
from prodline.application.use_cases.plan_batch import PlanBatchResult, PlanBatchUseCase
from prodline.application.use_cases.query_orders import (
    GetBatchUseCase,
    GetOrderUseCase,
    ListBatchesUseCase,
    ListOrdersUseCase,
    OrderListResult,
)
from prodline.application.use_cases.save_packing import SavePackingResult, SavePackingUseCase
from prodline.application.use_cases.stage_transitions import (
    AdvanceToSewingUseCase,
    CancelOrderUseCase,
    RestartCuttingUseCase,
    RevertPackingToRevisionUseCase,
    RevertRevisionToSewingUseCase,
    SaveRevisionUseCase,
    SendToQualityControlUseCase,
)
from prodline.application.use_cases.submit_cutting_job import (
    AuthorizeAndCommitCuttingJobUseCase,
    SubmitCuttingJobResult,
    SubmitCuttingJobUseCase,
)

__all__ = [
    "PlanBatchUseCase",
    "PlanBatchResult",
    "ListOrdersUseCase",
    "OrderListResult",
    "GetOrderUseCase",
    "ListBatchesUseCase",
    "GetBatchUseCase",
    "SubmitCuttingJobUseCase",
    "AuthorizeAndCommitCuttingJobUseCase",
    "SubmitCuttingJobResult",
    "RestartCuttingUseCase",
    "AdvanceToSewingUseCase",
    "SendToQualityControlUseCase",
    "SaveRevisionUseCase",
    "SavePackingUseCase",
    "SavePackingResult",
    "RevertPackingToRevisionUseCase",
    "RevertRevisionToSewingUseCase",
    "RevertCompletedStockUseCase",
    "RevertStockResult",
    "CancelOrderUseCase",
    "ListStockUseCase",
    "MarkStockExportedUseCase",
    "ConsolidateRequirementsUseCase",
    "ListPartnersUseCase",
]
