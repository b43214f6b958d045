# Database models
from tally.models.material import Material
from tally.models.product import Product
from tally.models.order import Order, OrderLine

__all__ = [
    "Material",
    "Product",
    "Order",
    "OrderLine",
]
