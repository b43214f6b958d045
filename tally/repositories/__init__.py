"""Repository layer for database operations.

Each repository wraps an AsyncSession and is handed to the services that
need it, so tests can run them against an in-memory database.
"""

from tally.repositories.material_repository import MaterialRepository
from tally.repositories.order_repository import OrderRepository
from tally.repositories.product_repository import ProductRepository

__all__ = [
    "MaterialRepository",
    "OrderRepository",
    "ProductRepository",
]
