"""
Dependency injection for FastAPI.

Provides use case instances to route handlers. Tests replace these through
``app.dependency_overrides``.
"""

from functools import lru_cache

from prodline.application.use_cases import (
    AdvanceToSewingUseCase,
    AuthorizeAndCommitCuttingJobUseCase,
    CancelOrderUseCase,
    ConsolidateRequirementsUseCase,
    GetBatchUseCase,
    GetOrderUseCase,
    ListBatchesUseCase,
    ListOrdersUseCase,
    ListPartnersUseCase,
    ListStockUseCase,
    MarkStockExportedUseCase,
    PlanBatchUseCase,
    RestartCuttingUseCase,
    RevertCompletedStockUseCase,
    RevertPackingToRevisionUseCase,
    RevertRevisionToSewingUseCase,
    SavePackingUseCase,
    SaveRevisionUseCase,
    SendToQualityControlUseCase,
    SubmitCuttingJobUseCase,
)
from prodline.config import Settings, get_settings


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Orders and batches
def get_plan_batch_use_case() -> PlanBatchUseCase:
    return PlanBatchUseCase()


def get_list_orders_use_case() -> ListOrdersUseCase:
    return ListOrdersUseCase()


def get_order_use_case() -> GetOrderUseCase:
    return GetOrderUseCase()


def get_list_batches_use_case() -> ListBatchesUseCase:
    return ListBatchesUseCase()


def get_batch_use_case() -> GetBatchUseCase:
    return GetBatchUseCase()


# Cutting
def get_submit_cutting_job_use_case() -> SubmitCuttingJobUseCase:
    return SubmitCuttingJobUseCase()


def get_authorize_cutting_job_use_case() -> AuthorizeAndCommitCuttingJobUseCase:
    return AuthorizeAndCommitCuttingJobUseCase()


def get_restart_cutting_use_case() -> RestartCuttingUseCase:
    return RestartCuttingUseCase()


# Stage transitions
def get_advance_to_sewing_use_case() -> AdvanceToSewingUseCase:
    return AdvanceToSewingUseCase()


def get_send_to_quality_control_use_case() -> SendToQualityControlUseCase:
    return SendToQualityControlUseCase()


def get_save_revision_use_case() -> SaveRevisionUseCase:
    return SaveRevisionUseCase()


def get_save_packing_use_case() -> SavePackingUseCase:
    return SavePackingUseCase()


def get_revert_packing_use_case() -> RevertPackingToRevisionUseCase:
    return RevertPackingToRevisionUseCase()


def get_revert_revision_use_case() -> RevertRevisionToSewingUseCase:
    return RevertRevisionToSewingUseCase()


def get_cancel_order_use_case() -> CancelOrderUseCase:
    return CancelOrderUseCase()


# Finished stock
def get_list_stock_use_case() -> ListStockUseCase:
    return ListStockUseCase()


def get_mark_exported_use_case() -> MarkStockExportedUseCase:
    return MarkStockExportedUseCase()


def get_revert_stock_use_case() -> RevertCompletedStockUseCase:
    return RevertCompletedStockUseCase()


# Catalog-backed reads
def get_consolidate_requirements_use_case() -> ConsolidateRequirementsUseCase:
    return ConsolidateRequirementsUseCase()


def get_list_partners_use_case() -> ListPartnersUseCase:
    return ListPartnersUseCase()
