"""Shared fixtures: an in-memory database per test and repositories on it."""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from tally.core.database import Base
from tally.repositories import MaterialRepository, OrderRepository, ProductRepository

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as session:
        yield session


@pytest.fixture
def material_repo(test_session):
    return MaterialRepository(test_session)


@pytest.fixture
def product_repo(test_session):
    return ProductRepository(test_session)


@pytest.fixture
def order_repo(test_session):
    return OrderRepository(test_session)


@pytest.fixture
def failing_commit(test_session, monkeypatch):
    """Make the next commits fail the way a dropped connection would."""

    async def commit():
        raise OperationalError("COMMIT", {}, Exception("connection lost"))

    def install():
        monkeypatch.setattr(test_session, "commit", commit)

    return install
