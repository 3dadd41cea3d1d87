"""Domain entity representing a shop member."""

from dataclasses import dataclass
from datetime import datetime

ROLE_SHOP_ADMIN = "shop_admin"
ROLE_STAFF = "staff"


@dataclass
class User:
    """Core attributes describing an owner or staff member of a shop."""

    id: int | None
    shop_id: int
    first_name: str
    last_name: str
    email: str
    password: str
    role: str
    is_active: bool
    last_login: datetime | None
    created_at: datetime | None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_shop_admin(self) -> bool:
        """Return ``True`` when the user owns or administers the shop."""

        return self.has_role(ROLE_SHOP_ADMIN)


__all__ = ["ROLE_SHOP_ADMIN", "ROLE_STAFF", "User"]
