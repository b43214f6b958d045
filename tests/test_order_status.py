"""Tests for the order status state machine."""

import pytest

from tally.core.exceptions import InvalidTransitionError, ValidationError
from tally.domain.order_status import OrderStateMachine, OrderStatus


class TestOrderStateMachine:

    @pytest.mark.parametrize(
        "from_status,to_status",
        [
            (OrderStatus.PENDING, OrderStatus.IN_PROGRESS),
            (OrderStatus.PENDING, OrderStatus.SHIPPED),
            (OrderStatus.IN_PROGRESS, OrderStatus.SHIPPED),
        ],
    )
    def test_allowed(self, from_status, to_status):
        assert OrderStateMachine.can_transition(from_status, to_status)
        OrderStateMachine.validate_transition(from_status, to_status)

    @pytest.mark.parametrize(
        "from_status,to_status",
        [
            (OrderStatus.IN_PROGRESS, OrderStatus.PENDING),
            (OrderStatus.SHIPPED, OrderStatus.IN_PROGRESS),
            (OrderStatus.SHIPPED, OrderStatus.PENDING),
            (OrderStatus.PENDING, OrderStatus.DELIVERED),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.DELIVERED, OrderStatus.SHIPPED),
            (OrderStatus.CANCELLED, OrderStatus.PENDING),
            (OrderStatus.PENDING, OrderStatus.PENDING),
        ],
    )
    def test_rejected(self, from_status, to_status):
        assert not OrderStateMachine.can_transition(from_status, to_status)
        with pytest.raises(InvalidTransitionError):
            OrderStateMachine.validate_transition(from_status, to_status)

    def test_accepts_plain_strings(self):
        assert OrderStateMachine.can_transition("PENDING", "SHIPPED")

    def test_only_shipping_captures_carrier(self):
        assert OrderStateMachine.captures_shipping(OrderStatus.SHIPPED)
        assert not OrderStateMachine.captures_shipping(OrderStatus.IN_PROGRESS)

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            OrderStatus.parse("LOST")
        assert issubclass(InvalidTransitionError, ValidationError)
