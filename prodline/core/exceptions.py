"""
Domain exceptions for the production engine.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class ProdlineError(Exception):
    """Base exception for all production engine errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Input Exceptions
class InvalidInputError(ProdlineError):
    """Input data is malformed or violates a derived-quantity rule."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Invalid input for '{field}': {message}",
            code="INVALID_INPUT",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class AuthorizationError(InvalidInputError):
    """Overproduction authorization is missing its authorizer."""

    def __init__(self, order_id: str):
        super().__init__(
            field="authorizer",
            message="an authorizer name is required to approve overproduction",
        )
        self.code = "AUTHORIZATION_REQUIRED"
        self.details["order_id"] = order_id


# Lifecycle Exceptions
class OverproductionPendingError(ProdlineError):
    """A cutting job exceeds declared demand and awaits authorization.

    Expected control flow rather than a fault: callers catch it, show the
    exceeding pairs and re-submit with an authorization.
    """

    def __init__(self, order_id: str, exceeding_pairs: list[Any]):
        super().__init__(
            f"Cutting job for order {order_id} exceeds planned quantities "
            f"in {len(exceeding_pairs)} color/size pair(s)",
            code="OVERPRODUCTION_PENDING",
            details={
                "order_id": order_id,
                "exceeding_pairs": [
                    p.model_dump() if hasattr(p, "model_dump") else p
                    for p in exceeding_pairs
                ],
            },
        )
        self.order_id = order_id
        self.exceeding_pairs = exceeding_pairs


class IllegalTransitionError(ProdlineError):
    """Lifecycle transition not allowed from the order's current status."""

    def __init__(self, order_id: str, current_status: str, action: str, reason: str | None = None):
        super().__init__(
            f"Cannot {action} order {order_id} in status '{current_status}'"
            + (f": {reason}" if reason else ""),
            code="ILLEGAL_TRANSITION",
            details={
                "order_id": order_id,
                "current_status": current_status,
                "action": action,
                "reason": reason,
            },
        )


class ConflictError(ProdlineError):
    """Persisted order changed since the snapshot used by the caller."""

    def __init__(self, order_id: str, expected_version: int, actual_version: int | None):
        super().__init__(
            f"Order {order_id} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})",
            code="CONFLICT",
            details={
                "order_id": order_id,
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )


# Lookup Exceptions
class NotFoundError(ProdlineError):
    """Referenced entity is absent."""

    def __init__(self, entity: str, entity_id: Any, code: str | None = None):
        super().__init__(
            f"{entity} not found: {entity_id}",
            code=code or "NOT_FOUND",
            details={"entity": entity, "id": entity_id},
        )


class OrderNotFoundError(NotFoundError):
    """Production order not found."""

    def __init__(self, order_id: str):
        super().__init__("Production order", order_id, code="ORDER_NOT_FOUND")


class StockNotFoundError(NotFoundError):
    """Finished-goods stock record not found."""

    def __init__(self, stock_id: str):
        super().__init__("Stock record", stock_id, code="STOCK_NOT_FOUND")


class ProductNotFoundError(NotFoundError):
    """Product not found in the catalog."""

    def __init__(self, product_id: str):
        super().__init__("Product", product_id, code="PRODUCT_NOT_FOUND")


class TechPackNotFoundError(NotFoundError):
    """Tech pack version not found for a product."""

    def __init__(self, product_id: str, version: int):
        super().__init__(
            "Tech pack",
            f"{product_id} v{version}",
            code="TECH_PACK_NOT_FOUND",
        )
        self.details.update({"product_id": product_id, "version": version})


class MaterialNotFoundError(NotFoundError):
    """Material not found in the catalog."""

    def __init__(self, material_id: str):
        super().__init__("Material", material_id, code="MATERIAL_NOT_FOUND")


# Storage Exceptions
class StorageError(ProdlineError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(ProdlineError):
    """Configuration error."""

    pass
