# tally/core/init_db.py
import asyncio
import logging
from sqlalchemy import select
from tally.core.config import settings
from tally.core.database import async_session, engine, Base
# Import all models to register them with Base
from tally.models import Material

logger = logging.getLogger(__name__)

# name, variant, sku, on_hand, reorder_point
SAMPLE_MATERIALS = [
    ("Gildan T-Shirt", "Red / M", "GT-RED-M", 13, 20),
    ("Gildan T-Shirt", "Red / L", "GT-RED-L", 46, 24),
    ("Gildan T-Shirt", "Black / S", "GT-BLACK-S", 21, 20),
    ("Gildan T-Shirt", "Black / M", "GT-BLACK-M", 34, 24),
    ("Gildan T-Shirt", "Black / L", "GT-BLACK-L", 27, 24),
    ("Gildan T-Shirt", "White / S", "GT-WHITE-S", 34, 24),
    ("Gildan T-Shirt", "White / M", "GT-WHITE-M", 51, 24),
    ("Gildan T-Shirt", "White / L", "GT-WHITE-L", 29, 24),
]


async def init_db(seed: bool | None = None):
    """Create tables and, if asked, the sample materials."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not (settings.SEED_SAMPLE_DATA if seed is None else seed):
        return

    async with async_session() as session:
        result = await session.execute(select(Material.id).limit(1))
        if result.first() is not None:
            logger.info("Materials already present, skipping sample data")
            return

        for name, variant, sku, on_hand, reorder_point in SAMPLE_MATERIALS:
            session.add(
                Material(
                    name=name,
                    variant=variant,
                    sku=sku,
                    on_hand=on_hand,
                    reorder_point=reorder_point,
                )
            )
        await session.commit()
        logger.info(f"Seeded {len(SAMPLE_MATERIALS)} sample materials")


if __name__ == "__main__":
    asyncio.run(init_db(seed=True))
