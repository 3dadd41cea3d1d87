"""User related use cases."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .create_user import ALLOWED_ROLES, create_shop_with_owner, create_user
from .record_login import record_login

__all__ = [
    "ALLOWED_ROLES",
    "AuthenticationStatus",
    "authenticate_user",
    "create_shop_with_owner",
    "create_user",
    "record_login",
]
