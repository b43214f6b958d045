"""Stock level rules."""

from typing import Any


def is_low_stock(material: Any) -> bool:
    """True when on-hand has dropped below the reorder point."""
    return material.on_hand < material.reorder_point


def clamp_quantity(quantity: int) -> int:
    """Quantities never go below zero."""
    return max(0, quantity)
