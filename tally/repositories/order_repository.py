"""Repository for order and order line database operations."""

import logging
from typing import Any, List, Optional, Sequence
from sqlalchemy import select

from tally.core.exceptions import NotFoundError, TallyError
from tally.domain.order_status import OrderStatus
from tally.models.order import Order, OrderLine
from tally.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

_STATUS_PATCH_FIELDS = {"status", "carrier", "tracking"}


class OrderRepository(BaseRepository):
    """Repository for Order database operations.

    Orders are always loaded with their lines and the lines' products.
    """

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        result = await self._execute(
            select(Order).where(Order.id == order_id)
        )
        return result.scalar_one_or_none()

    async def get_by_code(self, code: str) -> Optional[Order]:
        result = await self._execute(
            select(Order).where(Order.code == code)
        )
        return result.scalar_one_or_none()

    async def get_by_channel_and_external_id(
        self, channel: str, external_id: str
    ) -> Optional[Order]:
        """Find the order imported from a channel under an external id."""
        result = await self._execute(
            select(Order).where(
                Order.channel == channel,
                Order.external_id == external_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_all(self, status: Optional[str] = None) -> List[Order]:
        """List orders newest first, optionally filtered by status."""
        statement = select(Order)
        if status is not None:
            statement = statement.where(Order.status == OrderStatus.parse(status).value)
        result = await self._execute(statement.order_by(Order.created_at.desc()))
        return list(result.scalars().all())

    async def create_with_lines(
        self,
        lines: Sequence[tuple[str, int]],
        order_id: Optional[str] = None,
        code: Optional[str] = None,
        channel: str = "MANUAL",
        external_id: Optional[str] = None,
        customer_name: Optional[str] = None,
        status: str = OrderStatus.PENDING.value,
    ) -> Order:
        """Create an order together with its lines in one transaction.

        Args:
            lines: (product_id, qty) pairs
            order_id: Optional pre-generated order ID
            code: Short order code
            channel: Sales channel tag
            external_id: Order id in the source system, for imports
            customer_name: Customer name
            status: Initial status

        Returns:
            Created Order with its lines

        Raises:
            UniqueConstraintError: If the code or (channel, external_id) is taken
            PersistenceError: If the write fails; nothing is stored
        """
        order_fields: dict[str, Any] = {
            "code": code,
            "channel": channel,
            "external_id": external_id,
            "customer_name": customer_name,
            "status": status,
        }
        if order_id is not None:
            order_fields["id"] = order_id
        order = Order(**order_fields)
        order.lines = [
            OrderLine(order_id=order.id, product_id=product_id, qty=qty)
            for product_id, qty in lines
        ]
        self.session.add(order)
        await self._commit(unique_message="Order already exists")

        # Load line products for the caller
        return await self._reload(order.id)

    async def update_status(self, order_id: str, patch: dict[str, Any]) -> Order:
        """Write status, carrier and tracking in one atomic update.

        Only the keys present in ``patch`` are written. If the write fails
        the order is reloaded, so the returned/visible state stays the last
        persisted one.

        Args:
            order_id: Order ID
            patch: Subset of {"status", "carrier", "tracking"}

        Returns:
            Updated Order

        Raises:
            NotFoundError: If the order does not exist
            PersistenceError: If the write fails
        """
        unknown = set(patch) - _STATUS_PATCH_FIELDS
        if unknown:
            raise ValueError(f"Cannot patch order fields: {', '.join(sorted(unknown))}")

        order = await self.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")

        for name, value in patch.items():
            setattr(order, name, value)
        try:
            await self._commit()
        except TallyError:
            logger.warning(f"Status update of order {order_id} failed, reloading stored state")
            await self._reload(order_id)
            raise
        return order

    async def _reload(self, order_id: str) -> Order:
        result = await self._execute(
            select(Order)
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        order = result.scalar_one_or_none()
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")
        return order
