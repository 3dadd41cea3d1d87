"""Domain entities for dashboard notifications derived from the activity log."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """Alert-worthy activity rendered for the dashboard widget."""

    id: int
    action: str
    title: str
    message: str
    severity: NotificationSeverity
    created_at: datetime | None
    entity_table: str | None = None
    entity_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NotificationPage:
    """One page of notifications plus the size of the full filtered set."""

    items: list[Notification]
    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)


__all__ = ["Notification", "NotificationPage", "NotificationSeverity"]
