# tally/models/material.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from tally.core.database import Base
from tally.domain.stock import is_low_stock


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Material(Base):
    """Raw stock item tracked by on-hand quantity."""
    __tablename__ = "materials"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    variant: Mapped[str | None] = mapped_column(Text, nullable=True)  # e.g. "Red / M"
    sku: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    on_hand: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    reorder_point: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        CheckConstraint("on_hand >= 0", name="ck_materials_on_hand_non_negative"),
        CheckConstraint("reorder_point >= 0", name="ck_materials_reorder_point_non_negative"),
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("id", new_id())
        kwargs.setdefault("on_hand", 0)
        kwargs.setdefault("reorder_point", 0)
        kwargs.setdefault("archived", False)
        kwargs.setdefault("created_at", utcnow())
        super().__init__(**kwargs)

    @property
    def is_low_stock(self) -> bool:
        return is_low_stock(self)
