"""Tests for lot numbering and batch views."""

from datetime import datetime

import pytest

from prodline.core.entities import OrderStatus, ProductionEvent
from prodline.core.exceptions import InvalidInputError
from prodline.core.services.lot_grouping import (
    batch_key,
    build_batch_view,
    build_batch_views,
    group_by_lot,
    is_batch_identifier,
    lot_numbers_for,
    next_batch_base,
)


class TestBatchKey:
    @pytest.mark.parametrize(
        "lot,key",
        [
            ("2025-010-A", "2025-010"),
            ("2025-010-B", "2025-010"),
            ("2025-010", "2025-010"),
            ("LEGACY", "LEGACY"),
        ],
    )
    def test_batch_key(self, lot, key):
        assert batch_key(lot) == key

    def test_group_by_lot(self, order_factory):
        orders = [
            order_factory(order_id="a", lot_number="2025-010-A"),
            order_factory(order_id="b", lot_number="2025-011"),
            order_factory(order_id="c", lot_number="2025-010-B"),
        ]
        groups = group_by_lot(orders)
        assert list(groups) == ["2025-010", "2025-011"]
        assert [o.id for o in groups["2025-010"]] == ["a", "c"]


class TestLotNumbers:
    def test_next_base_after_highest_in_year(self):
        lots = ["2025-009", "2025-010-A", "2025-010-B", "2024-120"]
        assert next_batch_base(lots, 2025) == "2025-011"

    def test_next_base_first_of_year(self):
        assert next_batch_base(["2024-120"], 2025) == "2025-001"

    def test_next_base_width(self):
        assert next_batch_base([], 2025, width=4) == "2025-0001"

    def test_single_model_has_no_suffix(self):
        assert lot_numbers_for("2025-011", 1) == ["2025-011"]

    def test_mixed_batch_suffixes(self):
        assert lot_numbers_for("2025-011", 3) == ["2025-011-A", "2025-011-B", "2025-011-C"]

    def test_too_many_models(self):
        with pytest.raises(InvalidInputError):
            lot_numbers_for("2025-011", 27)

    def test_batch_identifier(self):
        assert is_batch_identifier("BATCH-2025-010")
        assert is_batch_identifier("batch-2025-010")
        assert not is_batch_identifier("op-123")


class TestBatchView:
    def test_aggregates_members(self, order_factory):
        a = order_factory(order_id="a", lot_number="2025-010-A")
        b = order_factory(order_id="b", lot_number="2025-010-B", product_id="prod-2")
        a.events.append(ProductionEvent(date=datetime(2025, 3, 2), user="u", action="later", description=""))
        b.events.append(ProductionEvent(date=datetime(2025, 3, 1), user="u", action="earlier", description=""))

        view = build_batch_view("2025-010", [a, b])
        assert view.order_ids == ["a", "b"]
        assert view.product_ids == ["prod-1", "prod-2"]
        assert view.quantity_total == 200
        assert len(view.items) == 2
        assert [e.action for e in view.events] == ["earlier", "later"]
        assert view.editable

    def test_not_editable_once_a_member_is_cutting(self, order_factory):
        orders = [
            order_factory(order_id="a", lot_number="2025-010-A"),
            order_factory(order_id="b", lot_number="2025-010-B", status=OrderStatus.CUTTING),
        ]
        (view,) = build_batch_views(orders)
        assert not view.editable

    def test_view_is_a_copy(self, order_factory):
        order = order_factory()
        view = build_batch_view("2025-001", [order])
        view.items[0].quantity = 1
        assert order.items[0].quantity == 100
