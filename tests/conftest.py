"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from datetime import date, timedelta
from pathlib import Path

import pytest

from prodline.config import reset_settings
from prodline.core.entities import (
    BOMItem,
    CuttingDetails,
    LayerDefinition,
    Material,
    MatrixRatio,
    OrderStatus,
    Product,
    ProductionOrder,
    TechPack,
)
from prodline.core.services.planning import derive_items


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point storage at a per-test directory and rebuild settings."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("PRODUCTION_SYSTEM_USER", "system")
    reset_settings()
    yield
    reset_settings()


def make_order(
    order_id: str = "op-1",
    lot_number: str = "2025-001",
    status: OrderStatus = OrderStatus.PLANNED,
    matrix: list[MatrixRatio] | None = None,
    layers: list[LayerDefinition] | None = None,
    product_id: str = "prod-1",
    version: int = 1,
    **kwargs,
) -> ProductionOrder:
    """Planned order whose items are derived from its cutting plan."""
    matrix = matrix or [MatrixRatio(size="M", ratio=1)]
    layers = layers or [LayerDefinition(color="Blue", layers=100)]
    items = derive_items(matrix, layers)
    return ProductionOrder(
        id=order_id,
        lot_number=lot_number,
        product_id=product_id,
        items=items,
        quantity_total=sum(i.quantity for i in items),
        status=status,
        start_date=kwargs.pop("start_date", date.today()),
        due_date=kwargs.pop("due_date", date.today() + timedelta(days=30)),
        cost_snapshot=kwargs.pop("cost_snapshot", 12.5),
        cutting_details=CuttingDetails(planned_matrix=matrix, planned_layers=layers),
        version=version,
        **kwargs,
    )


@pytest.fixture
def order() -> ProductionOrder:
    return make_order()


@pytest.fixture
def product() -> Product:
    return Product(
        id="prod-1",
        sku="TS-01",
        name="Basic Tee",
        sizes=["S", "M"],
        colors=["Blue", "Red"],
        tech_packs=[
            TechPack(
                version=1,
                materials=[BOMItem(material_id="mat-1", usage_per_piece=1.0, waste_margin=0.1)],
                total_cost=12.5,
                suggested_price=30.0,
            )
        ],
    )


@pytest.fixture
def material() -> Material:
    return Material(id="mat-1", code="FAB-01", name="Cotton jersey", current_stock=300.0)


@pytest.fixture
async def sqlite_db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated temporary database bound to the global connection pool."""
    from prodline.infrastructure.storage.sqlite import close_pool, open_pool
    from prodline.infrastructure.storage.sqlite.migrations import initialize_database

    db_path = tmp_path / "test.db"
    await initialize_database(db_path, create_backup_before=False)
    await open_pool(db_path)
    yield db_path
    await close_pool()


@pytest.fixture
def order_factory():
    return make_order
