"""Tests for table creation and sample data seeding."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import tally.core.init_db as init_db_module
from tally.models import Material


async def test_seed_sample_materials_once(test_engine, monkeypatch):
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(init_db_module, "engine", test_engine)
    monkeypatch.setattr(init_db_module, "async_session", session_factory)

    await init_db_module.init_db(seed=True)
    await init_db_module.init_db(seed=True)

    async with session_factory() as session:
        materials = (await session.execute(select(Material))).scalars().all()

    assert len(materials) == len(init_db_module.SAMPLE_MATERIALS)
    low = {m.sku for m in materials if m.is_low_stock}
    assert low == {"GT-RED-M"}


async def test_no_seed_by_default(test_engine, monkeypatch):
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(init_db_module, "engine", test_engine)
    monkeypatch.setattr(init_db_module, "async_session", session_factory)

    await init_db_module.init_db(seed=False)

    async with session_factory() as session:
        assert (await session.execute(select(Material))).first() is None
