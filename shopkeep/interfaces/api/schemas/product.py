"""Schemas for products and stock levels."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    sku: str | None = Field(None, max_length=64)
    price: Decimal = Field(Decimal("0"), ge=0)
    quantity: int = Field(0, ge=0)
    reorder_point: int = Field(0, ge=0)


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    shop_id: int
    name: str
    sku: str | None = None
    price: Decimal
    quantity: int
    reorder_point: int
    created_at: datetime | None = None


class StockUpdate(BaseModel):
    quantity: int = Field(..., ge=0, description="New stock level of the product")


class InventoryItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: int
    product_name: str
    sku: str | None = None
    quantity: int
    reorder_point: int
    is_low_stock: bool


class LowStockScanResponse(BaseModel):
    alerts_emitted: int
