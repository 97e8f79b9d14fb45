"""Tests for the stage transition use cases."""

import pytest

from prodline.application.dto.requests import (
    CancelOrderRequest,
    OrderActionRequest,
    SaveRevisionRequest,
)
from prodline.application.use_cases.stage_transitions import (
    AdvanceToSewingUseCase,
    CancelOrderUseCase,
    RestartCuttingUseCase,
    RevertRevisionToSewingUseCase,
    SaveRevisionUseCase,
    SendToQualityControlUseCase,
)
from prodline.core.entities import CuttingJob, LayerDefinition, MatrixRatio, OrderStatus
from prodline.core.exceptions import IllegalTransitionError, InvalidInputError


def _with_cut(order, layers: int = 100):
    order.cutting_details.jobs.append(
        CuttingJob(
            id="cut-1",
            taco_number="2025-001-1",
            cutter_name="Ana",
            matrix=[MatrixRatio(size="M", ratio=1)],
            layers=[LayerDefinition(color="Blue", layers=layers)],
        )
    )
    return order


class TestRestartCutting:
    async def test_restart_from_cutting(self, mock_order_store, order_factory):
        order = _with_cut(order_factory(status=OrderStatus.CUTTING), 40)
        mock_order_store.get.return_value = order
        result = await RestartCuttingUseCase(order_store=mock_order_store).execute(
            OrderActionRequest(order_id="op-1")
        )
        assert result.status == OrderStatus.PLANNED
        assert result.total_cut == 0
        assert result.events[-1].user == "system"

    async def test_restart_refused_in_sewing(self, mock_order_store, order_factory):
        order = _with_cut(order_factory(status=OrderStatus.SEWING))
        mock_order_store.get.return_value = order
        with pytest.raises(IllegalTransitionError):
            await RestartCuttingUseCase(order_store=mock_order_store).execute(
                OrderActionRequest(order_id="op-1")
            )
        mock_order_store.save.assert_not_awaited()
        assert order.total_cut == 100


class TestStageFlow:
    async def test_sewing_then_revision(self, mock_order_store, order_factory):
        order = _with_cut(order_factory(status=OrderStatus.CUTTING))
        mock_order_store.get.return_value = order

        order = await AdvanceToSewingUseCase(order_store=mock_order_store).execute(
            OrderActionRequest(order_id="op-1", user="ana")
        )
        assert order.status == OrderStatus.SEWING

        order = await SaveRevisionUseCase(order_store=mock_order_store).execute(
            SaveRevisionRequest(order_id="op-1", inspector_name=" Rui ", approved_qty=98, rejected_qty=2)
        )
        assert order.status == OrderStatus.PACKING
        assert order.revision_details.inspector_name == "Rui"

    async def test_workshop_return_then_revision(self, mock_order_store, order_factory):
        mock_order_store.get.return_value = _with_cut(order_factory(status=OrderStatus.SEWING))

        order = await SendToQualityControlUseCase(order_store=mock_order_store).execute(
            OrderActionRequest(order_id="op-1", user="ana", expected_version=1)
        )
        assert order.status == OrderStatus.QUALITY_CONTROL
        assert order.version == 2

        order = await SaveRevisionUseCase(order_store=mock_order_store).execute(
            SaveRevisionRequest(order_id="op-1", inspector_name="Rui", approved_qty=100)
        )
        assert order.status == OrderStatus.PACKING

    async def test_revision_over_total_rejected(self, mock_order_store, order_factory):
        mock_order_store.get.return_value = _with_cut(order_factory(status=OrderStatus.SEWING))
        with pytest.raises(InvalidInputError):
            await SaveRevisionUseCase(order_store=mock_order_store).execute(
                SaveRevisionRequest(order_id="op-1", inspector_name="Rui", approved_qty=101)
            )

    async def test_revert_revision(self, mock_order_store, order_factory):
        mock_order_store.get.return_value = order_factory(status=OrderStatus.QUALITY_CONTROL)
        order = await RevertRevisionToSewingUseCase(order_store=mock_order_store).execute(
            OrderActionRequest(order_id="op-1")
        )
        assert order.status == OrderStatus.SEWING

    async def test_cancel(self, mock_order_store, order_factory):
        mock_order_store.get.return_value = order_factory()
        order = await CancelOrderUseCase(order_store=mock_order_store).execute(
            CancelOrderRequest(order_id="op-1", reason="fabric defect")
        )
        assert order.status == OrderStatus.CANCELLED
