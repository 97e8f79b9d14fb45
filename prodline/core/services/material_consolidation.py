"""
Material consolidation engine.

Sums the BOM-derived material needs of a set of orders for the pieces still
to be cut, nets them against current material stock and flags shortages.
Results are recomputed on every call.
"""

from prodline.config import get_logger
from prodline.core.entities.catalog import BOMItem, Material
from prodline.core.entities.order import ProductionOrder
from prodline.core.entities.requirement import ConsolidatedRequirement, RequirementStatus
from prodline.core.exceptions import (
    MaterialNotFoundError,
    OrderNotFoundError,
    ProductNotFoundError,
    TechPackNotFoundError,
)
from prodline.core.interfaces.catalog import ICatalog
from prodline.core.interfaces.order_store import IOrderStore
from prodline.core.services.lifecycle import PRE_REVISION_STATUSES

logger = get_logger(__name__)


def remaining_to_cut(order: ProductionOrder, color: str | None = None) -> int:
    """Pieces not yet cut, overall or for one color."""
    if color is None:
        return max(0, order.quantity_total - order.total_cut)
    target = sum(i.quantity for i in order.items if i.color == color)
    details = order.cutting_details
    cut = 0
    if details is not None:
        cut = sum(
            job.pieces_for(color, ratio.size) for job in details.jobs for ratio in job.matrix
        )
    return max(0, target - cut)


def line_requirement(bom: BOMItem, remaining: int) -> float:
    return bom.usage_per_piece * remaining * (1 + bom.waste_margin)


class MaterialConsolidationEngine:
    """Consolidates material requirements across in-flight orders."""

    def __init__(self, order_store: IOrderStore, catalog: ICatalog) -> None:
        self._order_store = order_store
        self._catalog = catalog

    async def consolidate(self, order_ids: list[str]) -> list[ConsolidatedRequirement]:
        """
        Compute consolidated requirements for the given orders.

        Args:
            order_ids: Orders to include; duplicates are counted once.

        Returns:
            One requirement per material, ordered by first appearance.

        Raises:
            OrderNotFoundError, ProductNotFoundError, TechPackNotFoundError,
            MaterialNotFoundError: A referenced entity is missing.
        """
        needed: dict[str, float] = {}
        for order_id in dict.fromkeys(order_ids):
            order = await self._order_store.get(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)
            if order.status not in PRE_REVISION_STATUSES:
                logger.warning(
                    "consolidation_order_past_sewing",
                    order_id=order.id,
                    status=order.status.value,
                )
            await self._accumulate(order, needed)

        requirements = []
        for material_id, required in needed.items():
            material = await self._catalog.get_material(material_id)
            if material is None:
                raise MaterialNotFoundError(material_id)
            requirements.append(self._classify(material, required))

        logger.info(
            "requirements_consolidated",
            orders=len(order_ids),
            materials=len(requirements),
            critical=sum(1 for r in requirements if r.status == RequirementStatus.CRITICAL),
        )
        return requirements

    async def _accumulate(self, order: ProductionOrder, needed: dict[str, float]) -> None:
        product = await self._catalog.get_product(order.product_id)
        if product is None:
            raise ProductNotFoundError(order.product_id)
        tech_pack = product.tech_pack(order.tech_pack_version)
        if tech_pack is None:
            raise TechPackNotFoundError(order.product_id, order.tech_pack_version)

        overall = remaining_to_cut(order)
        for bom in tech_pack.materials:
            remaining = overall if bom.color_variant is None else remaining_to_cut(order, bom.color_variant)
            if remaining == 0:
                continue
            needed[bom.material_id] = needed.get(bom.material_id, 0.0) + line_requirement(
                bom, remaining
            )

    @staticmethod
    def _classify(material: Material, required: float) -> ConsolidatedRequirement:
        status = (
            RequirementStatus.CRITICAL
            if required > material.current_stock
            else RequirementStatus.OK
        )
        return ConsolidatedRequirement(
            material=material,
            required_qty=required,
            stock_qty=material.current_stock,
            status=status,
        )
