from tally.services.inventory_ledger import InventoryLedger
from tally.services.order_importer import ImportedOrderRef, ImportResult, OrderImporter
from tally.services.order_service import OrderService
from tally.services.product_catalog import ProductAvailability, ProductCatalog

__all__ = [
    "InventoryLedger",
    "ImportedOrderRef",
    "ImportResult",
    "OrderImporter",
    "OrderService",
    "ProductAvailability",
    "ProductCatalog",
]
