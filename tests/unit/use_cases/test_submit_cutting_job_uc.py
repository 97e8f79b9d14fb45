"""Tests for the cutting job use cases."""

import pytest

from prodline.application.dto.requests import CuttingJobRequest, SubmitCuttingJobRequest
from prodline.application.use_cases.submit_cutting_job import (
    AuthorizeAndCommitCuttingJobUseCase,
    SubmitCuttingJobUseCase,
)
from prodline.core.entities import LayerDefinition, OrderStatus
from prodline.core.exceptions import AuthorizationError, ConflictError, OrderNotFoundError


def _request(layers: int, **overrides) -> SubmitCuttingJobRequest:
    data = dict(
        order_id="op-1",
        job=CuttingJobRequest(layers=[LayerDefinition(color="Blue", layers=layers)]),
    )
    data.update(overrides)
    return SubmitCuttingJobRequest(**data)


@pytest.fixture
def use_case(mock_order_store):
    return SubmitCuttingJobUseCase(order_store=mock_order_store)


class TestSubmitCuttingJob:
    async def test_within_demand_is_saved(self, use_case, mock_order_store, order):
        mock_order_store.get.return_value = order
        result = await use_case.execute(_request(40))
        assert result.accepted
        assert result.order.total_cut == 40
        assert result.order.status == OrderStatus.CUTTING
        assert not result.cutting_complete
        mock_order_store.save.assert_awaited_once()

    async def test_excess_without_authorizer_is_not_saved(self, use_case, mock_order_store, order):
        mock_order_store.get.return_value = order
        result = await use_case.execute(_request(101))
        assert not result.accepted
        assert result.requires_authorization
        assert [p.diff for p in result.exceeding_pairs] == [1]
        mock_order_store.save.assert_not_awaited()

        response = use_case.to_response(result)
        assert response.accepted is False
        assert response.taco_number is None
        assert response.job_pieces == 101

    async def test_excess_with_authorizer_raises_demand(self, use_case, mock_order_store, order):
        mock_order_store.get.return_value = order
        result = await use_case.execute(_request(101, authorizer="Supervisor"))
        assert result.accepted
        assert result.order.quantity_total == 101
        assert result.cutting_complete
        assert [p.diff for p in result.adjustments] == [1]

    async def test_stale_version_conflicts(self, use_case, mock_order_store, order):
        mock_order_store.get.return_value = order
        with pytest.raises(ConflictError):
            await use_case.execute(_request(10, expected_version=order.version + 1))

    async def test_missing_order(self, use_case, mock_order_store):
        mock_order_store.get.return_value = None
        with pytest.raises(OrderNotFoundError):
            await use_case.execute(_request(10))


class TestAuthorizeAndCommit:
    async def test_blank_authorizer_rejected(self, mock_order_store, order):
        mock_order_store.get.return_value = order
        use_case = AuthorizeAndCommitCuttingJobUseCase(order_store=mock_order_store)
        with pytest.raises(AuthorizationError):
            await use_case.execute(_request(101, authorizer=" "))
        mock_order_store.save.assert_not_awaited()

    async def test_commits_with_authorizer(self, mock_order_store, order):
        mock_order_store.get.return_value = order
        use_case = AuthorizeAndCommitCuttingJobUseCase(order_store=mock_order_store)
        result = await use_case.execute(_request(120, authorizer="Supervisor"))
        assert result.order.quantity_total == 120
