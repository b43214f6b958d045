# tally/schemas/orders.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from tally.domain.order_status import OrderStatus


class OrderLineRequest(BaseModel):
    product_id: str
    qty: int = Field(default=1, gt=0)


class OrderCreateRequest(BaseModel):
    customer_name: str
    lines: list[OrderLineRequest]
    channel: str | None = None


class StatusUpdateRequest(BaseModel):
    status: OrderStatus
    carrier: str | None = None
    tracking: str | None = None


class ShipRequest(BaseModel):
    carrier: str | None = None
    tracking: str | None = None


class OrderLineProduct(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    variant: str | None
    sku: str


class OrderLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str
    qty: int
    product: OrderLineProduct | None = None


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str | None
    channel: str
    external_id: str | None
    customer_name: str | None
    status: str
    carrier: str | None
    tracking: str | None
    created_at: datetime
    lines: list[OrderLineResponse] = []


class ImportedOrderInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str | None
    external_id: str
    channel: str


class ImportResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    new_orders: list[ImportedOrderInfo]
    existing_orders: list[ImportedOrderInfo]
    errors: list[str]
