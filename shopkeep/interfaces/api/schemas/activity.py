"""Pydantic schemas for activity feed endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActivityEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Store assigned identifier, also the insertion order")
    action: str = Field(..., description="Action tag recorded by the writer")
    description: str = Field(..., description="Human readable sentence for the action")
    category: str | None = Field(None, description="Category the event is reported under")
    category_label: str = Field(..., description="Display label of the category")
    actor_id: int | None = None
    actor_name: str
    actor_role: str | None = None
    entity_table: str | None = None
    entity_id: str | None = None
    occurred_at: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    old_values: dict[str, Any] | None = Field(None, description="Record state before the change")
    new_values: dict[str, Any] | None = Field(None, description="Record state after the change")


class ActivityDiagnosticsRead(BaseModel):
    write_failures: int
    query_failures: int
    publish_failures: int
    last_error: str | None = None
    last_error_at: datetime | None = None


__all__ = ["ActivityDiagnosticsRead", "ActivityEntryRead"]
