"""
Error handling middleware.

Every API error body carries:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
- details: structured context from the domain exception
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from prodline.application.dto.responses import ErrorResponse
from prodline.config import get_logger
from prodline.core.exceptions import (
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    IllegalTransitionError,
    InvalidInputError,
    NotFoundError,
    OverproductionPendingError,
    ProdlineError,
    StorageError,
)

logger = get_logger(__name__)


# Checked in order; subclasses come before their bases.
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    IllegalTransitionError: status.HTTP_409_CONFLICT,
    OverproductionPendingError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

HINT_MAP: dict[str, str] = {
    "ORDER_NOT_FOUND": "Check the order ID and try GET /api/orders to list orders.",
    "BATCH_NOT_FOUND": "Check the batch key and try GET /api/orders/batches to list batches.",
    "STOCK_NOT_FOUND": "Check the stock ID and try GET /api/stock to list stock records.",
    "PRODUCT_NOT_FOUND": "The product is missing from the catalog.",
    "TECH_PACK_NOT_FOUND": "Pick an existing tech pack version or omit it to use the latest.",
    "MATERIAL_NOT_FOUND": "A bill-of-materials row references a material missing from the catalog.",
    "INVALID_INPUT": "Check the request values against the order's current quantities.",
    "AUTHORIZATION_REQUIRED": "Provide the name of the person authorizing overproduction.",
    "OVERPRODUCTION_PENDING": "Re-submit the job with an authorizer to accept the extra pieces.",
    "ILLEGAL_TRANSITION": "Reload the order and check which actions its status allows.",
    "CONFLICT": "The order changed since you loaded it. Reload and retry.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    "VALIDATION_ERROR": "Check the request body fields and types.",
    "ValueError": "A parameter value is invalid. Check the request.",
}

STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    403: "The action needs an explicit authorization.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current state of the order.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert an exception into the standard JSON error body."""
    status_code = status_for(exc)

    if isinstance(exc, ProdlineError):
        error_code = exc.code
        details = exc.details or None
    else:
        error_code = exc.__class__.__name__
        details = None

    request_id = getattr(request.state, "request_id", None)
    log_fields = dict(
        request_id=request_id,
        path=request.url.path,
        error_type=error_code,
        error=str(exc),
    )
    if isinstance(exc, OverproductionPendingError):
        # Expected outcome awaiting a supervisor, not a fault
        logger.info("overproduction_pending", **log_fields)
    elif status_code >= 500:
        logger.error("unhandled_exception", traceback=traceback.format_exc(), **log_fields)
    else:
        logger.warning("request_rejected", **log_fields)

    body = ErrorResponse(
        error_code=error_code,
        message=str(exc),
        hint=_get_hint(error_code, status_code),
        details=details,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions to standardized JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(ProdlineError)
    async def domain_exception_handler(request: Request, exc: ProdlineError) -> JSONResponse:
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint=HINT_MAP["VALIDATION_ERROR"],
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        error_code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
        )
