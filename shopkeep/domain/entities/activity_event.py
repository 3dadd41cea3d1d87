"""Domain entities describing entries of the shop activity log."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ActivityEvent:
    """Immutable record of something that happened inside a shop."""

    id: int | None
    shop_id: int
    actor_id: int | None
    action: str
    entity_table: str | None
    entity_id: str | None
    metadata: dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime | None = None
    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None


@dataclass(frozen=True)
class ActivityEventInput:
    """Values supplied by a feature when it records an activity.

    ``occurred_at`` is normally left empty so the writer stamps the event with
    the current time; it is only set explicitly when backfilling.
    ``old_values`` and ``new_values`` hold the state of the affected record
    before and after a mutation when the caller knows it.
    """

    shop_id: int | None
    action: str | None
    actor_id: int | None = None
    entity_table: str | None = None
    entity_id: str | int | None = None
    metadata: dict[str, Any] | None = None
    occurred_at: datetime | None = None
    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None


def coerce_metadata(raw: Any) -> dict[str, Any]:
    """Return ``raw`` as a metadata mapping.

    Older writers stored the payload as a JSON encoded string. Anything that
    cannot be decoded into an object is treated as an empty payload.
    """

    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return {}
    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return parsed if isinstance(parsed, dict) else {}
    return {}


__all__ = ["ActivityEvent", "ActivityEventInput", "coerce_metadata"]
