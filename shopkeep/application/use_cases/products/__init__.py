"""Catalog and stock use cases that feed the activity log."""

from .adjust_stock import adjust_stock
from .create_product import create_product
from .delete_product import delete_product
from .errors import ProductNotFoundError

__all__ = [
    "ProductNotFoundError",
    "adjust_stock",
    "create_product",
    "delete_product",
]
