"""Fixtures for use case tests: in-memory AsyncMock stores."""

from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def mock_order_store():
    store = AsyncMock()

    def _save(order):
        order.version += 1
        return order

    store.save.side_effect = _save
    store.create.side_effect = lambda order: order
    store.list_orders.return_value = []
    store.list_by_batch_key.return_value = []
    store.list_lot_numbers.return_value = []
    return store


@pytest.fixture
def mock_stock_store():
    store = AsyncMock()
    store.add_batch.side_effect = lambda records: records
    store.list_stock.return_value = []
    return store


@pytest.fixture
def mock_catalog(product, material):
    catalog = AsyncMock()
    catalog.get_product.return_value = product
    catalog.get_material.return_value = material
    return catalog
