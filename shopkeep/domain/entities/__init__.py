"""Domain entities exposed by the application."""

from .activity_action import (
    ActivityAction,
    CatalogAction,
    CatalogVerb,
    InventoryAction,
    LOW_STOCK_ALERT,
    STOCK_CHANGE_ACTIONS,
    SaleAction,
    SessionAction,
    SettingsAction,
    UnrecognizedAction,
    parse_action,
)
from .activity_event import ActivityEvent, ActivityEventInput, coerce_metadata
from .activity_filters import (
    ActivityCategory,
    ActivityFilters,
    ActivityWindow,
    CATEGORY_PRECEDENCE,
    CATEGORY_RULES,
    CategoryRule,
)
from .inventory_item import InventoryItem
from .login_session import LoginSession
from .notification import Notification, NotificationPage, NotificationSeverity
from .shop import Product, Shop
from .user import ROLE_SHOP_ADMIN, ROLE_STAFF, User

__all__ = [
    "ActivityAction",
    "ActivityCategory",
    "ActivityEvent",
    "ActivityEventInput",
    "ActivityFilters",
    "ActivityWindow",
    "CATEGORY_PRECEDENCE",
    "CATEGORY_RULES",
    "CatalogAction",
    "CatalogVerb",
    "CategoryRule",
    "InventoryAction",
    "InventoryItem",
    "LOW_STOCK_ALERT",
    "LoginSession",
    "Notification",
    "NotificationPage",
    "NotificationSeverity",
    "Product",
    "ROLE_SHOP_ADMIN",
    "ROLE_STAFF",
    "STOCK_CHANGE_ACTIONS",
    "SaleAction",
    "SessionAction",
    "SettingsAction",
    "Shop",
    "UnrecognizedAction",
    "User",
    "coerce_metadata",
    "parse_action",
]
