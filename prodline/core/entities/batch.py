"""Virtual lot batch view."""

from pydantic import BaseModel, ConfigDict, Field

from prodline.core.entities.order import OrderItem, ProductionEvent


class BatchView(BaseModel):
    """Read-only aggregate of the sibling orders sharing a lot prefix.

    Recomputed on every read and never persisted; it deliberately has no id.
    """

    model_config = ConfigDict(frozen=True)

    batch_key: str
    order_ids: list[str] = Field(default_factory=list)
    lot_numbers: list[str] = Field(default_factory=list)
    product_ids: list[str] = Field(default_factory=list)
    quantity_total: int = 0
    items: list[OrderItem] = Field(default_factory=list)
    events: list[ProductionEvent] = Field(default_factory=list)
    editable: bool = False
