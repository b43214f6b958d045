"""Order creation, lookup and status changes."""

import logging
from datetime import date
from typing import Iterable

from tally.core.config import settings
from tally.core.exceptions import NotFoundError, ValidationError
from tally.domain.order_code import generate_order_code, normalize_order_code
from tally.domain.order_status import OrderStateMachine, OrderStatus
from tally.models.material import new_id
from tally.models.order import Order
from tally.repositories.order_repository import OrderRepository
from tally.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class OrderService:
    """Manual orders and the order status workflow.

    Status changes go through OrderStateMachine before anything is written,
    and are stored as a single update of status, carrier and tracking.
    """

    def __init__(self, orders: OrderRepository, products: ProductRepository):
        """Initialize the service.

        Args:
            orders: OrderRepository bound to the current session
            products: ProductRepository used to check order lines
        """
        self.orders = orders
        self.products = products

    async def create_order(
        self,
        customer_name: str,
        lines: Iterable[tuple[str, int]],
        channel: str | None = None,
        today: date | None = None,
    ) -> Order:
        """Create a manual order.

        The short code is derived from the new order's id.

        Args:
            customer_name: Customer name, required
            lines: (product_id, qty) pairs, at least one
            channel: Channel tag, defaults to settings.DEFAULT_CHANNEL
            today: Date used for the code's year

        Returns:
            Created Order with lines

        Raises:
            ValidationError: If the customer is blank, there are no lines, a
                quantity is not positive or a product does not exist
        """
        customer_name = (customer_name or "").strip()
        if not customer_name:
            raise ValidationError("Customer name is required")

        lines = list(lines)
        if not lines:
            raise ValidationError("At least one product is required")
        for product_id, qty in lines:
            if qty <= 0:
                raise ValidationError("Line quantities must be at least 1")

        product_ids = {product_id for product_id, _ in lines}
        found = {product.id for product in await self.products.get_by_ids(list(product_ids))}
        missing = product_ids - found
        if missing:
            raise ValidationError(f"Unknown products: {', '.join(sorted(missing))}")

        order_id = new_id()
        order = await self.orders.create_with_lines(
            lines,
            order_id=order_id,
            code=generate_order_code(order_id, today),
            channel=channel or settings.DEFAULT_CHANNEL,
            customer_name=customer_name,
        )
        logger.info(f"Order {order.code} created with {len(order.lines)} lines")
        return order

    async def get_order(self, order_id: str) -> Order:
        order = await self.orders.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")
        return order

    async def find_by_code(self, code: str) -> Order:
        """Look up an order by its short code, as typed by a user.

        Raises:
            ValidationError: If the code is blank
            NotFoundError: If no order has this code
        """
        code = normalize_order_code(code or "")
        if not code:
            raise ValidationError("Order code is required")
        order = await self.orders.get_by_code(code)
        if order is None:
            raise NotFoundError("Order not found")
        return order

    async def list_orders(self, status: str | None = None) -> list[Order]:
        return await self.orders.list_all(status=status)

    async def update_status(
        self,
        order_id: str,
        status: str,
        carrier: str | None = None,
        tracking: str | None = None,
    ) -> Order:
        """Move an order to a new status.

        Carrier and tracking are written with the status when moving to
        SHIPPED; a value left as None keeps what is stored.

        Raises:
            NotFoundError: If the order does not exist
            InvalidTransitionError: If the move is not allowed
            PersistenceError: If the write fails; the order keeps its
                previous stored state
        """
        target = OrderStatus.parse(status)
        order = await self.get_order(order_id)
        OrderStateMachine.validate_transition(order.status, target)

        patch: dict[str, str] = {"status": target.value}
        if OrderStateMachine.captures_shipping(target):
            if carrier is not None:
                patch["carrier"] = carrier.strip()
            if tracking is not None:
                patch["tracking"] = tracking.strip()
        elif carrier is not None or tracking is not None:
            raise ValidationError("Carrier and tracking can only be set when shipping")

        previous = order.status
        order = await self.orders.update_status(order_id, patch)
        logger.info(f"Order {order.code} moved from {previous} to {order.status}")
        return order

    async def start_progress(self, order_id: str) -> Order:
        return await self.update_status(order_id, OrderStatus.IN_PROGRESS)

    async def mark_shipped(
        self, order_id: str, carrier: str | None = None, tracking: str | None = None
    ) -> Order:
        return await self.update_status(order_id, OrderStatus.SHIPPED, carrier=carrier, tracking=tracking)
