"""Fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from tally.core.database import Base, get_db
from tally.main import app


@pytest.fixture
def client(tmp_path):
    """Create a test client backed by a fresh SQLite file."""
    db_path = tmp_path / "api.db"

    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    # NullPool: every request opens its own connection on the client's loop
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def get_test_db():
        async with async_session() as session:
            yield session

    app.dependency_overrides[get_db] = get_test_db

    yield TestClient(app)

    # Clean up
    app.dependency_overrides = {}


@pytest.fixture
def material(client):
    response = client.post(
        "/api/materials/",
        json={"name": "Gildan T-Shirt", "sku": "GT-RED-M", "variant": "Red / M", "on_hand": 13, "reorder_point": 20},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def product(client, material):
    response = client.post(
        "/api/products/",
        json={"name": "Red Tee", "sku": "P-RED-M", "bom": [{"materialId": material["id"], "qty": 2}]},
    )
    assert response.status_code == 201
    return response.json()
