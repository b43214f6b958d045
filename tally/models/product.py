# tally/models/product.py
from datetime import datetime
from decimal import Decimal
from typing import Any
from sqlalchemy import JSON, Boolean, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from tally.core.database import Base
from tally.models.material import new_id, utcnow


class Product(Base):
    """Sellable item built from materials through its bill of materials."""
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    variant: Mapped[str | None] = mapped_column(Text, nullable=True)
    sku: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    bom: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)  # [{"materialId": ..., "qty": ...}]
    archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __init__(self, **kwargs):
        kwargs.setdefault("id", new_id())
        kwargs.setdefault("archived", False)
        kwargs.setdefault("created_at", utcnow())
        super().__init__(**kwargs)
