# tally/models/order.py
from datetime import datetime
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from tally.core.database import Base
from tally.domain.order_status import OrderStatus
from tally.models.material import new_id, utcnow
from tally.models.product import Product


class Order(Base):
    """Customer order tracked through its shipping status."""
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    code: Mapped[str | None] = mapped_column(String(20), unique=True, nullable=True, index=True)  # e.g. "25-9P7C"
    channel: Mapped[str] = mapped_column(String(50), default="MANUAL", nullable=False)
    external_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    customer_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=OrderStatus.PENDING.value, nullable=False, index=True)
    carrier: Mapped[str | None] = mapped_column(Text, nullable=True)
    tracking: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    lines: Mapped[list["OrderLine"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        # imports are deduplicated on (channel, external_id)
        Index(
            "idx_orders_channel_external_id",
            "channel",
            "external_id",
            unique=True,
            postgresql_where=text("external_id IS NOT NULL"),
            sqlite_where=text("external_id IS NOT NULL"),
        ),
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("id", new_id())
        kwargs.setdefault("channel", "MANUAL")
        kwargs.setdefault("status", OrderStatus.PENDING.value)
        kwargs.setdefault("created_at", utcnow())
        super().__init__(**kwargs)


class OrderLine(Base):
    """One product line of an order. Never edited after creation."""
    __tablename__ = "order_lines"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    order_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[str] = mapped_column(String(36), ForeignKey("products.id"), nullable=False)
    qty: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped[Order] = relationship(back_populates="lines")
    product: Mapped[Product] = relationship(lazy="selectin")

    __table_args__ = (
        CheckConstraint("qty > 0", name="ck_order_lines_qty_positive"),
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("id", new_id())
        super().__init__(**kwargs)
