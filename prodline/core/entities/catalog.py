"""Catalog entities supplied by the read-only catalog collaborator."""

from enum import Enum

from pydantic import BaseModel, Field


class UnitOfMeasure(str, Enum):
    METER = "m"
    KG = "kg"
    UNIT = "un"
    ROLL = "roll"
    PACK = "pack"


class MaterialType(str, Enum):
    FABRIC = "fabric"
    TRIM = "trim"
    PACKAGING = "packaging"
    LABEL = "label"


class PartnerType(str, Enum):
    SUBCONTRACTOR = "subcontractor"
    CUTTER = "cutter"
    REVISION = "revision"
    PACKING = "packing"
    OTHER = "other"


class TechPackStatus(str, Enum):
    DRAFT = "draft"
    APPROVED = "approved"
    OBSOLETE = "obsolete"


class BOMItem(BaseModel):
    """Per-piece usage of one material."""

    material_id: str
    usage_per_piece: float
    waste_margin: float = 0.0  # fraction, 0.1 = 10%
    color_variant: str | None = None  # row applies to this product color only
    notes: str | None = None


class TechPack(BaseModel):
    """Versioned bill of materials and costing of a product."""

    version: int
    status: TechPackStatus = TechPackStatus.DRAFT
    materials: list[BOMItem] = Field(default_factory=list)
    active_sizes: list[str] = Field(default_factory=list)
    total_cost: float = 0.0
    suggested_price: float = 0.0
    current_price: float | None = None

    @property
    def selling_price(self) -> float:
        return self.current_price if self.current_price is not None else self.suggested_price


class Product(BaseModel):
    """Catalog product with its tech packs."""

    id: str
    sku: str
    name: str
    collection: str | None = None
    sizes: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    tech_packs: list[TechPack] = Field(default_factory=list)

    def tech_pack(self, version: int) -> TechPack | None:
        return next((tp for tp in self.tech_packs if tp.version == version), None)


class Material(BaseModel):
    """Raw material or trim with its current stock."""

    id: str
    code: str
    name: str
    type: MaterialType = MaterialType.FABRIC
    unit: UnitOfMeasure = UnitOfMeasure.METER
    current_stock: float = 0.0
    cost_unit: float = 0.0
    supplier: str | None = None


class Partner(BaseModel):
    """Workshop, cutter or other production partner."""

    id: str
    name: str
    type: PartnerType
    contract_type: str = "PJ"
    phone: str | None = None
    default_rate: float | None = None
