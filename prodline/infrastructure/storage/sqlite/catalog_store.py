"""
SQLite implementation of the catalog collaborator.

The engine only reads the catalog; the ``upsert_*`` helpers exist for
loading catalog data from the surrounding application and for seeding.
"""

import aiosqlite

from prodline.config import get_logger
from prodline.core.entities.catalog import Material, MaterialType, Partner, PartnerType, Product, UnitOfMeasure
from prodline.core.exceptions import DatabaseError
from prodline.core.interfaces.catalog import ICatalog
from prodline.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteCatalog(ICatalog):
    """SQLite implementation of the read-only catalog."""

    async def get_product(self, product_id: str) -> Product | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT document FROM products WHERE id = ?", (product_id,)
            )
            row = await cursor.fetchone()
        return Product.model_validate_json(row["document"]) if row else None

    async def get_material(self, material_id: str) -> Material | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM materials WHERE id = ?", (material_id,))
            row = await cursor.fetchone()
        return self._row_to_material(row) if row else None

    async def list_partners(self, partner_type: PartnerType | None = None) -> list[Partner]:
        async with get_connection() as conn:
            if partner_type is not None:
                cursor = await conn.execute(
                    "SELECT * FROM partners WHERE type = ? ORDER BY name",
                    (partner_type.value,),
                )
            else:
                cursor = await conn.execute("SELECT * FROM partners ORDER BY name")
            rows = await cursor.fetchall()
        return [self._row_to_partner(row) for row in rows]

    async def upsert_product(self, product: Product) -> Product:
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO products (id, sku, name, document) VALUES (?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        sku = excluded.sku, name = excluded.name, document = excluded.document
                    """,
                    (product.id, product.sku, product.name, product.model_dump_json()),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("upsert product", str(e)) from e
        logger.info("product_upserted", product_id=product.id, sku=product.sku)
        return product

    async def upsert_material(self, material: Material) -> Material:
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO materials (
                        id, code, name, type, unit, current_stock, cost_unit, supplier
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        code = excluded.code, name = excluded.name, type = excluded.type,
                        unit = excluded.unit, current_stock = excluded.current_stock,
                        cost_unit = excluded.cost_unit, supplier = excluded.supplier
                    """,
                    (
                        material.id,
                        material.code,
                        material.name,
                        material.type.value,
                        material.unit.value,
                        material.current_stock,
                        material.cost_unit,
                        material.supplier,
                    ),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("upsert material", str(e)) from e
        logger.info("material_upserted", material_id=material.id, code=material.code)
        return material

    async def upsert_partner(self, partner: Partner) -> Partner:
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO partners (id, name, type, contract_type, phone, default_rate)
                    VALUES (?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        name = excluded.name, type = excluded.type,
                        contract_type = excluded.contract_type, phone = excluded.phone,
                        default_rate = excluded.default_rate
                    """,
                    (
                        partner.id,
                        partner.name,
                        partner.type.value,
                        partner.contract_type,
                        partner.phone,
                        partner.default_rate,
                    ),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("upsert partner", str(e)) from e
        logger.info("partner_upserted", partner_id=partner.id)
        return partner

    def _row_to_material(self, row: aiosqlite.Row) -> Material:
        return Material(
            id=row["id"],
            code=row["code"],
            name=row["name"],
            type=MaterialType(row["type"]),
            unit=UnitOfMeasure(row["unit"]),
            current_stock=row["current_stock"],
            cost_unit=row["cost_unit"],
            supplier=row["supplier"],
        )

    def _row_to_partner(self, row: aiosqlite.Row) -> Partner:
        return Partner(
            id=row["id"],
            name=row["name"],
            type=PartnerType(row["type"]),
            contract_type=row["contract_type"],
            phone=row["phone"],
            default_rate=row["default_rate"],
        )
