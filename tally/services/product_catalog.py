"""Product catalog with sellable quantities."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from tally.core.exceptions import NotFoundError, ValidationError
from tally.domain.bom import BOMLine, build_stock_lookup, calculate_sellable, parse_bom
from tally.models.product import Product
from tally.repositories.material_repository import MaterialRepository
from tally.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass
class ProductAvailability:
    """A product and how many units current stock can build.

    Attributes:
        product: The product
        sellable: Buildable units, or None when the product has no BOM
    """

    product: Product
    sellable: int | None


class ProductCatalog:
    """Create, edit and list products."""

    def __init__(self, products: ProductRepository, materials: MaterialRepository):
        self.products = products
        self.materials = materials

    async def add_product(
        self,
        name: str,
        sku: str,
        variant: str | None = None,
        price: Decimal | None = None,
        bom: Iterable[BOMLine | dict[str, Any]] | None = None,
    ) -> Product:
        """Add a product.

        Raises:
            ValidationError: If name or SKU is blank or the BOM is malformed
            UniqueConstraintError: If the SKU already exists
        """
        name, sku = self._require_name_and_sku(name, sku)
        product = await self.products.create(
            name=name,
            sku=sku,
            variant=(variant or "").strip() or None,
            price=price,
            bom=self._serialize_bom(bom),
        )
        logger.info(f"Added product {product.sku}")
        return product

    async def update_product(
        self,
        product_id: str,
        name: str,
        sku: str,
        variant: str | None = None,
        price: Decimal | None = None,
        bom: Iterable[BOMLine | dict[str, Any]] | None = None,
    ) -> Product:
        """Replace a product's editable fields.

        Raises:
            ValidationError: If name or SKU is blank or the BOM is malformed
            NotFoundError: If the product does not exist
            UniqueConstraintError: If the new SKU already exists
        """
        name, sku = self._require_name_and_sku(name, sku)
        return await self.products.update(
            product_id,
            name=name,
            sku=sku,
            variant=(variant or "").strip() or None,
            price=price,
            bom=self._serialize_bom(bom),
        )

    async def archive_product(self, product_id: str) -> Product:
        return await self.products.archive(product_id)

    async def list_with_availability(self, archived: bool = False) -> list[ProductAvailability]:
        """List products with their sellable quantity from active materials."""
        products = await self.products.list_all(archived=archived)
        stock = build_stock_lookup(await self.materials.list_all())
        return [
            ProductAvailability(product=product, sellable=calculate_sellable(product.bom, stock))
            for product in products
        ]

    async def sellable_quantity(self, product_id: str) -> int | None:
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")
        stock = build_stock_lookup(await self.materials.list_all())
        return calculate_sellable(product.bom, stock)

    @staticmethod
    def _require_name_and_sku(name: str, sku: str) -> tuple[str, str]:
        name = (name or "").strip()
        sku = (sku or "").strip()
        if not name or not sku:
            raise ValidationError("Name and SKU are required")
        return name, sku

    @staticmethod
    def _serialize_bom(bom: Iterable[BOMLine | dict[str, Any]] | None) -> list[dict[str, Any]] | None:
        lines = parse_bom(list(bom) if bom is not None else None)
        if not lines:
            return None
        return [line.to_json() for line in lines]
