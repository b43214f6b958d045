"""Bulk order import from CSV exports.

Each group of rows sharing channel and external id becomes one order. The
import is best effort: groups are handled one at a time, a failing group is
reported and skipped, and groups already imported are left alone.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from tally.core.exceptions import TallyError
from tally.domain.csv_orders import ImportGroup, parse_order_csv
from tally.domain.order_code import generate_order_code
from tally.domain.order_status import OrderStatus
from tally.repositories.order_repository import OrderRepository
from tally.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass
class ImportedOrderRef:
    code: str | None
    external_id: str
    channel: str


@dataclass
class ImportResult:
    """Summary of one import run.

    Attributes:
        success: True when no group failed
        new_orders: Orders created by this run
        existing_orders: Groups that matched an order imported earlier
        errors: One message per failed group
    """

    success: bool = True
    new_orders: list[ImportedOrderRef] = field(default_factory=list)
    existing_orders: list[ImportedOrderRef] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class OrderImporter:
    """Reconciles imported order groups with stored orders."""

    def __init__(self, orders: OrderRepository, products: ProductRepository):
        self.orders = orders
        self.products = products

    async def import_csv(self, text: str, today: date | None = None) -> ImportResult:
        """Parse CSV text and import its orders.

        Raises:
            ValidationError: If the CSV cannot be parsed or lacks a required
                column; nothing is written in that case
        """
        groups = parse_order_csv(text)
        logger.info(f"Importing {len(groups)} orders from CSV")
        return await self.import_groups(groups, today=today)

    async def import_groups(self, groups: list[ImportGroup], today: date | None = None) -> ImportResult:
        """Import grouped orders one after another."""
        result = ImportResult()

        for group in groups:
            try:
                await self._import_group(group, result, today)
            except TallyError as e:
                logger.warning(f"Error importing order {group.external_id}: {e}")
                result.errors.append(f"Failed to import order {group.external_id}: {e}")

        result.success = not result.errors
        logger.info(
            f"Import finished: {len(result.new_orders)} new, "
            f"{len(result.existing_orders)} existing, {len(result.errors)} errors"
        )
        return result

    async def _import_group(self, group: ImportGroup, result: ImportResult, today: date | None) -> None:
        existing = await self.orders.get_by_channel_and_external_id(group.channel, group.external_id)
        if existing is not None:
            result.existing_orders.append(
                ImportedOrderRef(code=existing.code, external_id=group.external_id, channel=group.channel)
            )
            return

        skus = list(dict.fromkeys(line.sku for line in group.lines))
        products = {product.sku: product.id for product in await self.products.get_by_skus(skus)}
        if not products:
            result.errors.append(f"No products found for order {group.external_id}")
            return

        # SKUs not in the catalog are dropped, the rest of the order is kept
        lines = [(products[line.sku], line.qty) for line in group.lines if line.sku in products]

        code = generate_order_code(today=today)
        await self.orders.create_with_lines(
            lines,
            code=code,
            channel=group.channel,
            external_id=group.external_id,
            customer_name=group.customer_name or None,
            status=OrderStatus.PENDING.value,
        )
        result.new_orders.append(
            ImportedOrderRef(code=code, external_id=group.external_id, channel=group.channel)
        )
