"""
Order lifecycle

PENDING -> IN_PROGRESS -> SHIPPED, with PENDING -> SHIPPED allowed too.
DELIVERED and CANCELLED exist as labels set outside this core; nothing
moves out of them, or out of SHIPPED.
"""

from enum import Enum
from typing import Dict, Set

from tally.core.exceptions import InvalidTransitionError, ValidationError


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, value: "str | OrderStatus") -> "OrderStatus":
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"Unknown order status: {value}") from None


class OrderStateMachine:
    """Valid order status transitions."""

    TERMINAL_STATES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED}

    TRANSITIONS: Dict[OrderStatus, Set[OrderStatus]] = {
        OrderStatus.PENDING: {OrderStatus.IN_PROGRESS, OrderStatus.SHIPPED},
        OrderStatus.IN_PROGRESS: {OrderStatus.SHIPPED},
    }

    # Transitions that record carrier and tracking with the status
    SHIPPING_STATES = {OrderStatus.SHIPPED}

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        from_status = OrderStatus.parse(from_status)
        to_status = OrderStatus.parse(to_status)
        if from_status in cls.TERMINAL_STATES:
            return False
        return to_status in cls.TRANSITIONS.get(from_status, set())

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """
        Raises:
            InvalidTransitionError: If the transition is not allowed
        """
        if not cls.can_transition(from_status, to_status):
            raise InvalidTransitionError(
                f"Invalid order status transition: {OrderStatus.parse(from_status).value} -> "
                f"{OrderStatus.parse(to_status).value}"
            )

    @classmethod
    def captures_shipping(cls, to_status: str) -> bool:
        return OrderStatus.parse(to_status) in cls.SHIPPING_STATES
