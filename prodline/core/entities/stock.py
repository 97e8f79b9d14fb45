"""Finished-goods stock entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class StockStatus(str, Enum):
    """Availability of a finished-goods record."""

    AVAILABLE = "available"
    EXPORTED = "exported"


class FinishedProductStock(BaseModel):
    """One (order, color, size) unit of finished goods created at completion."""

    id: str
    product_id: str
    order_id: str
    warehouse: str
    quantity: int
    color: str
    size: str
    cost: float = 0.0  # unit cost snapshot of the order
    price: float = 0.0
    date: datetime = Field(default_factory=datetime.utcnow)
    observation: str | None = None
    status: StockStatus = StockStatus.AVAILABLE

    @property
    def total_cost(self) -> float:
        return self.quantity * self.cost
