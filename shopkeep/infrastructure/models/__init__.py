"""ORM models used by the application infrastructure."""

from .activity_event import ActivityEventModel
from .login_session import LoginSessionModel
from .shop import InventoryModel, ProductModel, ShopModel
from .user import UserModel

__all__ = [
    "ActivityEventModel",
    "InventoryModel",
    "LoginSessionModel",
    "ProductModel",
    "ShopModel",
    "UserModel",
]
