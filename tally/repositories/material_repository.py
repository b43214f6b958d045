"""Repository for material database operations."""

from decimal import Decimal
from typing import List, Optional
from sqlalchemy import case, func, or_, select, update

from tally.core.exceptions import NotFoundError, TallyError, ValidationError
from tally.models.material import Material
from tally.repositories.base import BaseRepository


class MaterialRepository(BaseRepository):
    """Repository for Material database operations.

    Owns the authoritative on-hand quantities.
    """

    async def create(
        self,
        name: str,
        sku: str,
        variant: Optional[str] = None,
        on_hand: int = 0,
        reorder_point: int = 0,
        cost: Optional[Decimal] = None,
    ) -> Material:
        """Create a new material.

        Args:
            name: Material name (e.g., "Gildan T-Shirt")
            sku: Unique stock keeping unit
            variant: Optional variant label (e.g., "Red / M")
            on_hand: Starting quantity
            reorder_point: Low-stock threshold
            cost: Optional unit cost

        Returns:
            Created Material instance

        Raises:
            UniqueConstraintError: If the SKU is taken
        """
        material = Material(
            name=name,
            sku=sku,
            variant=variant,
            on_hand=on_hand,
            reorder_point=reorder_point,
            cost=cost,
        )
        self.session.add(material)
        await self._commit(unique_message="SKU already exists")
        await self.session.refresh(material)
        return material

    async def get_by_id(self, material_id: str) -> Optional[Material]:
        result = await self._execute(
            select(Material).where(Material.id == material_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self, archived: bool = False, search: Optional[str] = None) -> List[Material]:
        """List materials, newest first.

        Args:
            archived: Whether to list archived instead of active materials
            search: Optional case-insensitive match on name, SKU or variant;
                `%` and `_` match themselves

        Returns:
            List of Material instances
        """
        statement = select(Material).where(Material.archived == archived)
        term = (search or "").strip().lower()
        if term:
            statement = statement.where(
                or_(
                    func.lower(Material.name).contains(term, autoescape=True),
                    func.lower(Material.sku).contains(term, autoescape=True),
                    func.lower(Material.variant).contains(term, autoescape=True),
                )
            )
        result = await self._execute(statement.order_by(Material.created_at.desc()))
        return list(result.scalars().all())

    async def set_quantity(self, material_id: str, quantity: int) -> Material:
        """Set the on-hand quantity to an absolute value.

        Args:
            material_id: Material ID
            quantity: New on-hand quantity, must not be negative

        Returns:
            Updated Material

        Raises:
            ValidationError: If quantity is negative
            NotFoundError: If the material does not exist
            PersistenceError: If the write fails; the stored value is unchanged
        """
        if quantity < 0:
            raise ValidationError("Quantity cannot be negative")

        material = await self._require(material_id)
        material.on_hand = quantity
        try:
            await self._commit()
        except TallyError:
            await self._reload(material_id)
            raise
        return material

    async def adjust_quantity_by(self, material_id: str, delta: int) -> Material:
        """Atomically add delta to on-hand, stopping at zero.

        The arithmetic happens in a single UPDATE statement, so concurrent
        adjustments do not overwrite each other.

        Args:
            material_id: Material ID
            delta: Signed change to apply

        Returns:
            Material with the stored quantity

        Raises:
            NotFoundError: If the material does not exist
            PersistenceError: If the write fails
        """
        new_value = Material.on_hand + delta
        result = await self._execute(
            update(Material)
            .where(Material.id == material_id)
            .values(on_hand=case((new_value < 0, 0), else_=new_value))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self.session.rollback()
            raise NotFoundError(f"Material {material_id} not found")
        await self._commit()
        return await self._reload(material_id)

    async def archive(self, material_id: str) -> Material:
        material = await self._require(material_id)
        material.archived = True
        await self._commit()
        return material

    async def _require(self, material_id: str) -> Material:
        material = await self.get_by_id(material_id)
        if material is None:
            raise NotFoundError(f"Material {material_id} not found")
        return material

    async def _reload(self, material_id: str) -> Material:
        """Read the stored row again, overwriting any in-memory changes."""
        result = await self._execute(
            select(Material)
            .where(Material.id == material_id)
            .execution_options(populate_existing=True)
        )
        material = result.scalar_one_or_none()
        if material is None:
            raise NotFoundError(f"Material {material_id} not found")
        return material
