"""Fixtures for API tests."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from prodline.api.main import app
from prodline.infrastructure.storage.sqlite import SQLiteCatalog


@pytest.fixture
async def client(sqlite_db, product, material) -> AsyncGenerator[AsyncClient, None]:
    """Client bound to a migrated temporary database with a seeded catalog."""
    catalog = SQLiteCatalog()
    await catalog.upsert_product(product)
    await catalog.upsert_material(material)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
