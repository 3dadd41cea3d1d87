"""Schemas for staff login sessions."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class LoginSessionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    shop_id: int
    actor_id: int
    login_at: datetime
    logout_at: datetime | None = None
    duration_minutes: int | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    is_active: bool
