# tally/schemas/inventory.py
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field


class MaterialCreateRequest(BaseModel):
    name: str
    sku: str
    variant: str | None = None
    on_hand: int = Field(default=0, ge=0)
    reorder_point: int = Field(default=0, ge=0)
    cost: Decimal | None = None


class QuantityRequest(BaseModel):
    on_hand: int = Field(..., description="New absolute on-hand quantity")


class AdjustRequest(BaseModel):
    delta: int = Field(..., description="Signed change; the result never drops below 0")


class MaterialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    variant: str | None
    sku: str
    on_hand: int
    reorder_point: int
    cost: Decimal | None
    archived: bool
    is_low_stock: bool
    created_at: datetime


class BOMItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    material_id: str = Field(..., alias="materialId")
    qty: int = Field(..., gt=0)


class ProductRequest(BaseModel):
    name: str
    sku: str
    variant: str | None = None
    price: Decimal | None = None
    bom: list[BOMItem] | None = None


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    variant: str | None
    sku: str
    price: Decimal | None
    bom: list[dict] | None
    archived: bool
    created_at: datetime
    # None when the product has no bill of materials
    sellable: int | None = None
