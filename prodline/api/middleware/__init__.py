"""API middleware."""

from prodline.api.middleware.error_handler import ErrorHandlerMiddleware
from prodline.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
