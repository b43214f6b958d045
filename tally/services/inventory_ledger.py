"""Inventory ledger for material stock levels.

The ledger is the only place material quantities change. Orders never
touch stock: shipping an order does not consume materials.
"""

import logging
from decimal import Decimal
from typing import Any

from tally.core.exceptions import ValidationError
from tally.domain.stock import clamp_quantity, is_low_stock
from tally.models.material import Material
from tally.repositories.material_repository import MaterialRepository

logger = logging.getLogger(__name__)


class InventoryLedger:
    """Stock adjustments and material bookkeeping.

    Two ways to change a quantity are offered:

    - ``adjust_quantity`` writes an absolute value, typically computed by a
      client from a value it read earlier (last writer wins).
    - ``adjust_by`` applies a delta inside the database, so concurrent
      sessions cannot lose each other's changes.
    """

    def __init__(self, materials: MaterialRepository):
        """Initialize the ledger.

        Args:
            materials: MaterialRepository bound to the current session
        """
        self.materials = materials

    async def adjust_quantity(self, material_id: str, new_quantity: int) -> Material:
        """Set a material's on-hand quantity.

        Args:
            material_id: Material ID
            new_quantity: New on-hand value; callers clamp decrements at 0

        Returns:
            Material as stored

        Raises:
            ValidationError: If new_quantity is negative
            NotFoundError: If the material does not exist
            PersistenceError: If the write fails; the stored value is unchanged
        """
        if new_quantity < 0:
            raise ValidationError("Quantity cannot be negative")
        material = await self.materials.set_quantity(material_id, new_quantity)
        logger.info(f"Material {material.sku} on hand set to {material.on_hand}")
        return material

    async def adjust_by(self, material_id: str, delta: int) -> Material:
        """Atomically change on-hand by delta, never going below zero."""
        material = await self.materials.adjust_quantity_by(material_id, delta)
        logger.info(f"Material {material.sku} adjusted by {delta:+d} to {material.on_hand}")
        return material

    async def increment(self, material_id: str, amount: int = 1) -> Material:
        return await self.adjust_by(material_id, abs(amount))

    async def decrement(self, material_id: str, amount: int = 1) -> Material:
        return await self.adjust_by(material_id, -abs(amount))

    @staticmethod
    def is_low_stock(material: Any) -> bool:
        return is_low_stock(material)

    @staticmethod
    def clamp(quantity: int) -> int:
        return clamp_quantity(quantity)

    async def add_material(
        self,
        name: str,
        sku: str,
        variant: str | None = None,
        on_hand: int = 0,
        reorder_point: int = 0,
        cost: Decimal | None = None,
    ) -> Material:
        """Register a new material.

        Raises:
            ValidationError: If name or SKU is blank, or a quantity is negative
            UniqueConstraintError: If the SKU already exists
        """
        name = (name or "").strip()
        sku = (sku or "").strip()
        if not name or not sku:
            raise ValidationError("Name and SKU are required")
        if on_hand < 0 or reorder_point < 0:
            raise ValidationError("Quantities cannot be negative")

        material = await self.materials.create(
            name=name,
            sku=sku,
            variant=(variant or "").strip() or None,
            on_hand=on_hand,
            reorder_point=reorder_point,
            cost=cost,
        )
        logger.info(f"Added material {material.sku}")
        return material

    async def list_materials(self, archived: bool = False, search: str | None = None) -> list[Material]:
        return await self.materials.list_all(archived=archived, search=search)

    async def low_stock_materials(self) -> list[Material]:
        """Active materials whose on-hand is below their reorder point."""
        materials = await self.materials.list_all()
        return [material for material in materials if is_low_stock(material)]

    async def archive_material(self, material_id: str) -> Material:
        return await self.materials.archive(material_id)
