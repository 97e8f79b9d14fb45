"""End-to-end order lifecycle against a temporary SQLite database."""

import pytest

from prodline.application.dto.requests import (
    ConsolidateRequirementsRequest,
    CuttingJobRequest,
    ListOrdersRequest,
    ListStockRequest,
    OrderActionRequest,
    PlanBatchRequest,
    PlanModelRequest,
    RevertStockRequest,
    SavePackingRequest,
    SaveRevisionRequest,
    SubmitCuttingJobRequest,
)
from prodline.application.use_cases import (
    AdvanceToSewingUseCase,
    ConsolidateRequirementsUseCase,
    GetBatchUseCase,
    GetOrderUseCase,
    ListOrdersUseCase,
    ListStockUseCase,
    PlanBatchUseCase,
    RevertCompletedStockUseCase,
    SavePackingUseCase,
    SaveRevisionUseCase,
    SubmitCuttingJobUseCase,
)
from prodline.core.entities import LayerDefinition, MatrixRatio, OrderItem, OrderStatus
from prodline.core.exceptions import ConflictError
from prodline.core.services.cutting import CuttingBucket
from prodline.infrastructure.storage.sqlite import SQLiteCatalog


@pytest.fixture
async def seeded(sqlite_db, product, material):
    catalog = SQLiteCatalog()
    await catalog.upsert_product(product)
    await catalog.upsert_material(material)
    return sqlite_db


def _model(blue: int = 30, **overrides) -> PlanModelRequest:
    data = dict(
        product_id="prod-1",
        matrix=[MatrixRatio(size="S", ratio=1), MatrixRatio(size="M", ratio=1)],
        layers=[LayerDefinition(color="Blue", layers=blue)],
        cutter_name="Ana",
    )
    data.update(overrides)
    return PlanModelRequest(**data)


async def _plan(blue: int = 30) -> str:
    result = await PlanBatchUseCase().execute(PlanBatchRequest(models=[_model(blue)], user="planner"))
    return result.orders[0].id


async def _cut(order_id: str, blue: int, **kwargs):
    return await SubmitCuttingJobUseCase().execute(
        SubmitCuttingJobRequest(
            order_id=order_id,
            job=CuttingJobRequest(layers=[LayerDefinition(color="Blue", layers=blue)]),
            **kwargs,
        )
    )


async def _pack(order_id: str):
    return await SavePackingUseCase().execute(
        SavePackingRequest(
            order_id=order_id,
            warehouse="Main",
            packer_name="Lia",
            total_boxes=2,
            items_packed=[
                OrderItem(color="Blue", size="S", quantity=30),
                OrderItem(color="Blue", size="M", quantity=30),
            ],
        )
    )


async def _stock(order_id: str):
    return await ListStockUseCase().execute(ListStockRequest(order_id=order_id))


class TestProductionFlow:
    async def test_full_lifecycle_materializes_stock_once(self, seeded):
        order_id = await _plan()

        cut = await _cut(order_id, 30)
        assert cut.accepted and cut.cutting_complete
        await AdvanceToSewingUseCase().execute(OrderActionRequest(order_id=order_id))
        await SaveRevisionUseCase().execute(
            SaveRevisionRequest(order_id=order_id, inspector_name="Rui", approved_qty=60)
        )

        first = await _pack(order_id)
        assert first.stock_created
        assert first.order.status == OrderStatus.COMPLETED
        records = await _stock(order_id)
        assert sum(r.quantity for r in records) == 60
        assert {r.price for r in records} == {30.0}

        second = await _pack(order_id)
        assert not second.stock_created
        assert len(await _stock(order_id)) == len(records)

    async def test_stock_revert_reopens_packing(self, seeded):
        order_id = await _plan()
        await _cut(order_id, 30)
        await AdvanceToSewingUseCase().execute(OrderActionRequest(order_id=order_id))
        await SaveRevisionUseCase().execute(
            SaveRevisionRequest(order_id=order_id, inspector_name="Rui", approved_qty=60)
        )
        packed = await _pack(order_id)

        reverted = await RevertCompletedStockUseCase().execute(
            RevertStockRequest(stock_id=packed.stock_records[0].id)
        )

        assert reverted.order.status == OrderStatus.PACKING
        assert len(reverted.removed) == 2
        assert await _stock(order_id) == []

        again = await _pack(order_id)
        assert again.stock_created
        assert len(await _stock(order_id)) == 2

    async def test_pending_overproduction_is_not_persisted(self, seeded):
        order_id = await _plan()
        before = await GetOrderUseCase().execute(order_id)

        pending = await _cut(order_id, 31)

        assert not pending.accepted
        assert {(p.size, p.diff) for p in pending.exceeding_pairs} == {("S", 1), ("M", 1)}
        after = await GetOrderUseCase().execute(order_id)
        assert after.version == before.version
        assert after.total_cut == 0

        approved = await _cut(order_id, 31, authorizer="Supervisor")
        assert approved.order.quantity_total == 62

    async def test_stale_snapshot_conflicts(self, seeded):
        order_id = await _plan()
        order = await GetOrderUseCase().execute(order_id)

        first = await _cut(order_id, 10, expected_version=order.version)
        committed = await GetOrderUseCase().execute(order_id)
        with pytest.raises(ConflictError):
            await _cut(order_id, 10, expected_version=order.version)

        after = await GetOrderUseCase().execute(order_id)
        assert after.version == committed.version
        # 10 layers over the S and M ratios
        assert after.total_cut == committed.total_cut == first.order.total_cut == 20

    async def test_cutting_board_and_requirements(self, seeded):
        active = await _plan()
        idle = await _plan(100)
        await _cut(active, 10)

        listing = await ListOrdersUseCase().execute(
            ListOrdersRequest(cutting_bucket=CuttingBucket.ACTIVE)
        )
        assert [o.id for o in listing.orders] == [active]

        requirements = await ConsolidateRequirementsUseCase().execute(
            ConsolidateRequirementsRequest(order_ids=[active, idle])
        )
        (req,) = requirements
        # (40 + 200) remaining pieces x 1.0 m x 1.1 waste
        assert req.required_qty == pytest.approx(264.0)
        assert req.status.value == "ok"

    async def test_mixed_batch_view(self, seeded):
        result = await PlanBatchUseCase().execute(
            PlanBatchRequest(models=[_model(10), _model(20)])
        )
        view = await GetBatchUseCase().execute(result.batch_key)
        assert len(view.order_ids) == 2
        assert view.quantity_total == 60
        assert view.editable
