"""Abstract interface for the read-only catalog collaborator."""

from abc import ABC, abstractmethod

from prodline.core.entities.catalog import Material, Partner, PartnerType, Product


class ICatalog(ABC):
    """Product, material and partner registries.

    Read-only from the engine's point of view.
    """

    @abstractmethod
    async def get_product(self, product_id: str) -> Product | None:
        """Get product (with tech packs) by ID."""
        pass

    @abstractmethod
    async def get_material(self, material_id: str) -> Material | None:
        """Get material by ID."""
        pass

    @abstractmethod
    async def list_partners(self, partner_type: PartnerType | None = None) -> list[Partner]:
        """List partners, optionally filtered by type."""
        pass
