"""Schemas describing dashboard notifications."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    action: str
    title: str
    message: str
    severity: str
    created_at: datetime | None = None
    entity_table: str | None = None
    entity_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class NotificationPageRead(BaseModel):
    items: list[NotificationRead]
    total_count: int
    page: int
    page_size: int
    total_pages: int
