"""Filtering dimensions available when reading the activity log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ActivityCategory(str, Enum):
    LOGIN = "login"
    PRODUCTS = "products"
    CATEGORIES = "categories"
    SUPPLIERS = "suppliers"
    POS = "pos"
    ORDERS = "orders"
    CUSTOMERS = "customers"
    INVENTORY = "inventory"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    ActivityCategory.LOGIN: "Login/Logout",
    ActivityCategory.PRODUCTS: "Products",
    ActivityCategory.CATEGORIES: "Categories",
    ActivityCategory.SUPPLIERS: "Suppliers",
    ActivityCategory.POS: "POS",
    ActivityCategory.ORDERS: "Orders",
    ActivityCategory.CUSTOMERS: "Customers",
    ActivityCategory.INVENTORY: "Inventory",
}


@dataclass(frozen=True)
class CategoryRule:
    """An event belongs to a category when either tuple matches."""

    tables: tuple[str, ...]
    action_keywords: tuple[str, ...]


CATEGORY_RULES: dict[ActivityCategory, CategoryRule] = {
    ActivityCategory.LOGIN: CategoryRule(
        tables=("staff_login_sessions",), action_keywords=("login", "logout")
    ),
    ActivityCategory.PRODUCTS: CategoryRule(
        tables=("products",), action_keywords=("product",)
    ),
    ActivityCategory.CATEGORIES: CategoryRule(
        tables=("categories",), action_keywords=("category",)
    ),
    ActivityCategory.SUPPLIERS: CategoryRule(
        tables=("suppliers",), action_keywords=("supplier",)
    ),
    ActivityCategory.POS: CategoryRule(
        tables=("pos_transactions",),
        action_keywords=("sale", "payment", "transaction"),
    ),
    ActivityCategory.ORDERS: CategoryRule(
        tables=("orders",), action_keywords=("order",)
    ),
    ActivityCategory.CUSTOMERS: CategoryRule(
        tables=("customers",), action_keywords=("customer",)
    ),
    ActivityCategory.INVENTORY: CategoryRule(
        tables=("inventory",), action_keywords=("inventory", "stock")
    ),
}

# Precedence used when an event must be reported under a single category.
CATEGORY_PRECEDENCE: tuple[ActivityCategory, ...] = (
    ActivityCategory.LOGIN,
    ActivityCategory.INVENTORY,
    ActivityCategory.POS,
    ActivityCategory.PRODUCTS,
    ActivityCategory.CATEGORIES,
    ActivityCategory.SUPPLIERS,
    ActivityCategory.ORDERS,
    ActivityCategory.CUSTOMERS,
)


class ActivityWindow(str, Enum):
    LAST_DAY = "1d"
    LAST_WEEK = "7d"
    LAST_MONTH = "30d"
    ALL = "all"

    @property
    def days(self) -> int | None:
        return {
            ActivityWindow.LAST_DAY: 1,
            ActivityWindow.LAST_WEEK: 7,
            ActivityWindow.LAST_MONTH: 30,
        }.get(self)


@dataclass(frozen=True)
class ActivityFilters:
    """Conjunctive filters applied to activity queries."""

    category: ActivityCategory | None = None
    exclude_category: ActivityCategory | None = None
    window: ActivityWindow = ActivityWindow.ALL
    actor_id: int | None = None
    now: datetime | None = None


__all__ = [
    "ActivityCategory",
    "ActivityFilters",
    "ActivityWindow",
    "CATEGORY_PRECEDENCE",
    "CATEGORY_RULES",
    "CategoryRule",
]
