"""Domain entities for the shop (tenant) and its catalog."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Shop:
    """A tenant: every activity, product and user belongs to exactly one shop."""

    id: int | None
    name: str
    created_at: datetime | None


@dataclass
class Product:
    """Catalog entry together with its current stock settings."""

    id: int | None
    shop_id: int
    name: str
    sku: str | None
    price: Decimal
    quantity: int
    reorder_point: int
    created_at: datetime | None


__all__ = ["Product", "Shop"]
