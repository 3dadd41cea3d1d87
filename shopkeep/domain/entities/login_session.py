"""Domain entity representing a staff login session."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class LoginSession:
    """Bracket between a staff member's login and logout."""

    id: int | None
    shop_id: int
    actor_id: int
    login_at: datetime
    logout_at: datetime | None = None
    duration_minutes: int | None = None
    ip_address: str | None = None
    user_agent: str | None = None

    @property
    def is_active(self) -> bool:
        """Return ``True`` while the session has not been closed."""

        return self.logout_at is None


__all__ = ["LoginSession"]
