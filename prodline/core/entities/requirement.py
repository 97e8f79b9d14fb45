"""Material requirement consolidation entities."""

from enum import Enum

from pydantic import BaseModel

from prodline.core.entities.catalog import Material


class RequirementStatus(str, Enum):
    OK = "ok"
    CRITICAL = "critical"


class ConsolidatedRequirement(BaseModel):
    """Material needed by a set of orders compared with current stock."""

    material: Material
    required_qty: float
    stock_qty: float
    status: RequirementStatus

    @property
    def shortage(self) -> float:
        return max(0.0, self.required_qty - self.stock_qty)
