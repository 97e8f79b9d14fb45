"""Tests for the cutting accumulator and its overproduction gate."""

import pytest

from prodline.core.entities import (
    EventType,
    LayerDefinition,
    MatrixRatio,
    OrderStatus,
    OverproductionAuthorization,
)
from prodline.core.exceptions import (
    AuthorizationError,
    IllegalTransitionError,
    InvalidInputError,
    OverproductionPendingError,
)
from prodline.core.services.cutting import CuttingAccumulator, CuttingBucket, cutting_bucket


@pytest.fixture
def accumulator() -> CuttingAccumulator:
    return CuttingAccumulator(default_cutter="floor", default_cut_type="main")


def _layers(blue: int) -> list[LayerDefinition]:
    return [LayerDefinition(color="Blue", layers=blue)]


class TestBuildJob:
    def test_defaults_to_planned_matrix(self, accumulator, order):
        job = accumulator.build_job(order, _layers(40))
        assert job.matrix == order.cutting_details.planned_matrix
        assert job.total_pieces == 40

    def test_taco_number_counts_jobs(self, accumulator, order):
        first = accumulator.build_job(order, _layers(40))
        accumulator.commit(order, first, "ana")
        second = accumulator.build_job(order, _layers(10))
        assert first.taco_number == "2025-001-1"
        assert second.taco_number == "2025-001-2"

    def test_cutter_falls_back_to_default(self, accumulator, order):
        assert accumulator.build_job(order, _layers(1)).cutter_name == "floor"
        assert accumulator.build_job(order, _layers(1), cutter_name="Ana").cutter_name == "Ana"

    def test_zero_piece_job_rejected(self, accumulator, order):
        with pytest.raises(InvalidInputError):
            accumulator.build_job(order, _layers(0))

    def test_duplicate_size_rejected(self, accumulator, order):
        matrix = [MatrixRatio(size="M", ratio=1), MatrixRatio(size="M", ratio=2)]
        with pytest.raises(InvalidInputError):
            accumulator.build_job(order, _layers(10), matrix=matrix)

    def test_duplicate_color_rejected(self, accumulator, order):
        layers = [LayerDefinition(color="Blue", layers=1), LayerDefinition(color="Blue", layers=2)]
        with pytest.raises(InvalidInputError):
            accumulator.build_job(order, layers)


class TestOverproductionGate:
    def test_job_within_demand_commits(self, accumulator, order):
        outcome = accumulator.commit(order, accumulator.build_job(order, _layers(100)), "ana")
        assert outcome.adjustments == []
        assert outcome.cutting_complete
        assert order.status == OrderStatus.CUTTING
        assert order.quantity_total == 100

    def test_one_piece_over_is_pending(self, accumulator, order):
        job = accumulator.build_job(order, _layers(101))
        with pytest.raises(OverproductionPendingError) as exc_info:
            accumulator.commit(order, job, "ana")
        pair = exc_info.value.exceeding_pairs[0]
        assert (pair.color, pair.size, pair.planned, pair.current, pair.cutting, pair.diff) == (
            "Blue", "M", 100, 0, 101, 1,
        )
        assert order.total_cut == 0
        assert order.status == OrderStatus.PLANNED

    def test_excess_counts_previous_jobs(self, accumulator, order):
        accumulator.commit(order, accumulator.build_job(order, _layers(50)), "ana")
        pairs = accumulator.find_exceeding_pairs(order, accumulator.build_job(order, _layers(60)))
        assert [(p.current, p.cutting, p.diff) for p in pairs] == [(50, 60, 10)]

    def test_undeclared_pair_exceeds_from_zero(self, accumulator, order):
        matrix = [MatrixRatio(size="M", ratio=1), MatrixRatio(size="L", ratio=1)]
        pairs = accumulator.find_exceeding_pairs(
            order, accumulator.build_job(order, _layers(10), matrix=matrix)
        )
        assert [(p.size, p.planned, p.diff) for p in pairs] == [("L", 0, 10)]

    def test_authorized_excess_raises_demand(self, accumulator, order):
        job = accumulator.build_job(order, _layers(101))
        outcome = accumulator.commit(
            order, job, "ana", OverproductionAuthorization(authorizer="Supervisor", note="extra roll")
        )
        assert order.target_for("Blue", "M") == 101
        assert order.quantity_total == 101
        assert outcome.quantity_total == 101
        assert outcome.cutting_complete
        alert = next(e for e in order.events if e.type == EventType.ALERT)
        assert alert.action == "Quantity change (cutting)"
        assert "Supervisor" in alert.description

    def test_authorized_undeclared_pair_is_added(self, accumulator, order):
        matrix = [MatrixRatio(size="M", ratio=1), MatrixRatio(size="L", ratio=1)]
        job = accumulator.build_job(order, _layers(10), matrix=matrix)
        accumulator.commit(order, job, "ana", OverproductionAuthorization(authorizer="Sup"))
        assert order.target_for("Blue", "L") == 10
        assert order.target_for("Blue", "M") == 100
        assert order.quantity_total == 110

    def test_blank_authorizer_rejected(self, accumulator, order):
        job = accumulator.build_job(order, _layers(101))
        with pytest.raises(AuthorizationError):
            accumulator.commit(order, job, "ana", OverproductionAuthorization(authorizer="  "))
        assert order.target_for("Blue", "M") == 100
        assert order.total_cut == 0

    def test_authorization_ignored_without_excess(self, accumulator, order):
        job = accumulator.build_job(order, _layers(10))
        outcome = accumulator.commit(order, job, "ana", OverproductionAuthorization(authorizer=""))
        assert outcome.adjustments == []

    def test_refused_after_cutting(self, accumulator, order_factory):
        order = order_factory(status=OrderStatus.SEWING)
        job = accumulator.build_job(order, _layers(1))
        with pytest.raises(IllegalTransitionError):
            accumulator.commit(order, job, "ana")

    def test_first_job_logs_status_change(self, accumulator, order):
        accumulator.commit(order, accumulator.build_job(order, _layers(10)), "ana")
        accumulator.commit(order, accumulator.build_job(order, _layers(10)), "ana")
        assert [e.action for e in order.events] == ["Cutting started", "Cutting job registered"]
        assert order.events[0].type == EventType.STATUS_CHANGE


class TestCuttingBucket:
    def test_buckets(self, accumulator, order_factory):
        planned = order_factory()
        assert cutting_bucket(planned) == CuttingBucket.PLANNING

        active = order_factory()
        accumulator.commit(active, accumulator.build_job(active, _layers(30)), "ana")
        assert cutting_bucket(active) == CuttingBucket.ACTIVE

        done = order_factory()
        accumulator.commit(done, accumulator.build_job(done, _layers(100)), "ana")
        assert cutting_bucket(done) == CuttingBucket.DONE

        assert cutting_bucket(order_factory(status=OrderStatus.SEWING)) is None
