"""Repository for product database operations."""

from decimal import Decimal
from typing import Any, List, Optional, Sequence
from sqlalchemy import select

from tally.core.exceptions import NotFoundError, TallyError
from tally.models.product import Product
from tally.repositories.base import BaseRepository

_UPDATABLE_FIELDS = {"name", "variant", "sku", "price", "bom"}


class ProductRepository(BaseRepository):
    """Repository for Product database operations."""

    async def create(
        self,
        name: str,
        sku: str,
        variant: Optional[str] = None,
        price: Optional[Decimal] = None,
        bom: Optional[list[dict[str, Any]]] = None,
    ) -> Product:
        """Create a new product.

        Args:
            name: Product name
            sku: Unique SKU
            variant: Optional variant label
            price: Optional unit price
            bom: Bill of materials as [{"materialId": ..., "qty": ...}]

        Returns:
            Created Product instance

        Raises:
            UniqueConstraintError: If the SKU is taken
        """
        product = Product(name=name, sku=sku, variant=variant, price=price, bom=bom)
        self.session.add(product)
        await self._commit(unique_message="SKU already exists")
        await self.session.refresh(product)
        return product

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        result = await self._execute(
            select(Product).where(Product.id == product_id)
        )
        return result.scalar_one_or_none()

    async def get_by_ids(self, product_ids: Sequence[str]) -> List[Product]:
        if not product_ids:
            return []
        result = await self._execute(
            select(Product).where(Product.id.in_(list(product_ids)))
        )
        return list(result.scalars().all())

    async def get_by_skus(self, skus: Sequence[str], archived: bool = False) -> List[Product]:
        """Find products by SKU.

        Args:
            skus: SKUs to look up; unknown ones are simply absent from the result
            archived: Whether to match archived instead of active products

        Returns:
            List of matching Product instances
        """
        if not skus:
            return []
        result = await self._execute(
            select(Product).where(
                Product.sku.in_(list(skus)),
                Product.archived == archived,
            )
        )
        return list(result.scalars().all())

    async def list_all(self, archived: bool = False) -> List[Product]:
        """List products, newest first."""
        result = await self._execute(
            select(Product)
            .where(Product.archived == archived)
            .order_by(Product.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(self, product_id: str, **fields: Any) -> Product:
        """Update product fields.

        Args:
            product_id: Product ID
            **fields: Any of name, variant, sku, price, bom

        Returns:
            Updated Product

        Raises:
            NotFoundError: If the product does not exist
            UniqueConstraintError: If the new SKU is taken
        """
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update product fields: {', '.join(sorted(unknown))}")

        product = await self.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")

        for name, value in fields.items():
            setattr(product, name, value)
        try:
            await self._commit(unique_message="SKU already exists")
        except TallyError:
            await self._reload(product_id)
            raise
        return product

    async def archive(self, product_id: str) -> Product:
        product = await self.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")
        product.archived = True
        await self._commit()
        return product

    async def _reload(self, product_id: str) -> Optional[Product]:
        result = await self._execute(
            select(Product)
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
