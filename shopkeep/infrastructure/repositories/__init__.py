"""Repository implementations for infrastructure layer."""

from .activity_event_repository import ActivityEventRepository, category_clause
from .inventory_repository import InventoryRepository
from .login_session_repository import LoginSessionRepository
from .product_repository import ProductRepository
from .user_repository import ShopRepository, UserRepository

__all__ = [
    "ActivityEventRepository",
    "InventoryRepository",
    "LoginSessionRepository",
    "ProductRepository",
    "ShopRepository",
    "UserRepository",
    "category_clause",
]
