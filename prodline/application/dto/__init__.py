"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from prodline.application.dto.requests import (
    CancelOrderRequest,
    ConsolidateRequirementsRequest,
    CuttingJobRequest,
    ListOrdersRequest,
    ListStockRequest,
    MarkStockExportedRequest,
    OrderActionRequest,
    PlanBatchRequest,
    PlanModelRequest,
    RevertStockRequest,
    SavePackingRequest,
    SaveRevisionRequest,
    SubmitCuttingJobRequest,
)
from prodline.application.dto.responses import (
    BatchListResponse,
    BatchResponse,
    ConsolidationResponse,
    CuttingJobResponse,
    ErrorResponse,
    HealthResponse,
    MarkExportedResponse,
    OrderListResponse,
    PartnerListResponse,
    PartnerResponse,
    PlanBatchResponse,
    ProductionOrderResponse,
    RequirementResponse,
    RevertStockResponse,
    SavePackingResponse,
    StockListResponse,
    StockRecordResponse,
)

__all__ = [
    # Requests
    "PlanBatchRequest",
    "PlanModelRequest",
    "ListOrdersRequest",
    "CuttingJobRequest",
    "SubmitCuttingJobRequest",
    "OrderActionRequest",
    "CancelOrderRequest",
    "SaveRevisionRequest",
    "SavePackingRequest",
    "RevertStockRequest",
    "ListStockRequest",
    "MarkStockExportedRequest",
    "ConsolidateRequirementsRequest",
    # Responses
    "ProductionOrderResponse",
    "OrderListResponse",
    "PlanBatchResponse",
    "BatchResponse",
    "BatchListResponse",
    "CuttingJobResponse",
    "StockRecordResponse",
    "StockListResponse",
    "SavePackingResponse",
    "RevertStockResponse",
    "MarkExportedResponse",
    "RequirementResponse",
    "ConsolidationResponse",
    "PartnerResponse",
    "PartnerListResponse",
    "HealthResponse",
    "ErrorResponse",
]
