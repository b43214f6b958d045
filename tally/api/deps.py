"""FastAPI dependencies wiring services to the request's session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tally.core.database import get_db
from tally.repositories import MaterialRepository, OrderRepository, ProductRepository
from tally.services import InventoryLedger, OrderImporter, OrderService, ProductCatalog


def get_ledger(db: AsyncSession = Depends(get_db)) -> InventoryLedger:
    return InventoryLedger(MaterialRepository(db))


def get_catalog(db: AsyncSession = Depends(get_db)) -> ProductCatalog:
    return ProductCatalog(ProductRepository(db), MaterialRepository(db))


def get_order_service(db: AsyncSession = Depends(get_db)) -> OrderService:
    return OrderService(OrderRepository(db), ProductRepository(db))


def get_order_importer(db: AsyncSession = Depends(get_db)) -> OrderImporter:
    return OrderImporter(OrderRepository(db), ProductRepository(db))
