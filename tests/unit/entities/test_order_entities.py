"""Tests for production order entities and domain exceptions."""

from datetime import date, timedelta

from prodline.core.entities import (
    CuttingDetails,
    CuttingJob,
    LayerDefinition,
    MatrixRatio,
    OrderStatus,
    ProductionOrder,
)
from prodline.core.entities.catalog import TechPack
from prodline.core.entities.order import ExceedingPair
from prodline.core.entities.stock import FinishedProductStock
from prodline.core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidInputError,
    OrderNotFoundError,
    OverproductionPendingError,
)


def _job(**overrides) -> CuttingJob:
    data = dict(
        id="cut-1",
        taco_number="2025-001-1",
        cutter_name="Ana",
        matrix=[MatrixRatio(size="S", ratio=2), MatrixRatio(size="M", ratio=1)],
        layers=[LayerDefinition(color="Red", layers=10), LayerDefinition(color="Blue", layers=5)],
    )
    data.update(overrides)
    return CuttingJob(**data)


class TestCuttingJob:
    def test_total_pieces_is_ratio_sum_times_layer_sum(self):
        assert _job().total_pieces == 3 * 15

    def test_supplied_total_is_discarded(self):
        assert _job(total_pieces=999).total_pieces == 45

    def test_pieces_for_pair(self):
        job = _job()
        assert job.pieces_for("Red", "S") == 20
        assert job.pieces_for("Blue", "M") == 5

    def test_pieces_for_unknown_pair_is_zero(self):
        assert _job().pieces_for("Green", "S") == 0
        assert _job().pieces_for("Red", "XL") == 0

    def test_fabric_consumption_follows_marker_weight(self):
        assert _job(marker_weight=4.2).fabric_consumption == 4.2


class TestProductionOrder:
    def test_cut_totals_accumulate_across_jobs(self, order_factory):
        order = order_factory()
        order.cutting_details = CuttingDetails(
            jobs=[
                _job(matrix=[MatrixRatio(size="M", ratio=1)], layers=[LayerDefinition(color="Blue", layers=40)]),
                _job(id="cut-2", matrix=[MatrixRatio(size="M", ratio=1)], layers=[LayerDefinition(color="Blue", layers=60)]),
            ]
        )
        assert order.total_cut == 100
        assert order.cutting_details.cut_for("Blue", "M") == 100
        assert order.is_cutting_complete

    def test_target_for_undeclared_pair_is_zero(self, order_factory):
        order = order_factory()
        assert order.target_for("Blue", "M") == 100
        assert order.target_for("Red", "M") == 0

    def test_is_late(self, order_factory):
        order = order_factory(due_date=date.today() - timedelta(days=1))
        assert order.is_late
        order.status = OrderStatus.COMPLETED
        assert not order.is_late

    def test_no_due_date_is_never_late(self):
        assert not ProductionOrder(id="op-x", lot_number="2025-001", product_id="p").is_late

    def test_document_round_trip_keeps_jobs(self, order_factory):
        order = order_factory()
        order.cutting_details.jobs.append(_job())
        restored = ProductionOrder.model_validate_json(order.model_dump_json())
        assert restored.total_cut == order.total_cut
        assert restored.cutting_details.jobs[0].taco_number == "2025-001-1"


class TestCatalogAndStock:
    def test_selling_price_prefers_current_price(self):
        assert TechPack(version=1, suggested_price=30.0).selling_price == 30.0
        assert TechPack(version=1, suggested_price=30.0, current_price=27.5).selling_price == 27.5

    def test_stock_total_cost(self):
        record = FinishedProductStock(
            id="STOCK-1", product_id="p", order_id="op-1", warehouse="W",
            quantity=4, color="Blue", size="M", cost=2.5,
        )
        assert record.total_cost == 10.0


class TestExceptions:
    def test_codes(self):
        assert OrderNotFoundError("op-1").code == "ORDER_NOT_FOUND"
        assert ConflictError("op-1", 1, 2).code == "CONFLICT"
        assert AuthorizationError("op-1").code == "AUTHORIZATION_REQUIRED"

    def test_authorization_error_is_invalid_input(self):
        assert isinstance(AuthorizationError("op-1"), InvalidInputError)

    def test_overproduction_details_list_pairs(self):
        pair = ExceedingPair(color="Blue", size="M", planned=100, current=0, cutting=101, diff=1)
        error = OverproductionPendingError("op-1", [pair])
        payload = error.to_dict()
        assert payload["error"] == "OVERPRODUCTION_PENDING"
        assert payload["details"]["exceeding_pairs"][0]["diff"] == 1
        assert error.exceeding_pairs == [pair]
