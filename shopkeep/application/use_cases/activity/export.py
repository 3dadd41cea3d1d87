"""CSV rendering of the staff activity log."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Iterable
from datetime import date

from shopkeep.domain.entities import ActivityCategory
from shopkeep.utils import isoformat_or_none, now_in_app_timezone

from .classification import category_label
from .feed import ActivityFeedEntry

CSV_HEADER = (
    "Date",
    "Type",
    "Staff Name",
    "Role",
    "Action",
    "Description",
    "Table",
    "Record ID",
    "Metadata",
)


def export_activity_csv(entries: Iterable[ActivityFeedEntry]) -> str:
    """Return ``entries`` as CSV text, leaving out login and logout rows."""

    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADER)
    for entry in entries:
        if entry.category is ActivityCategory.LOGIN:
            continue
        event = entry.event
        writer.writerow(
            (
                isoformat_or_none(event.occurred_at) or "",
                category_label(entry.category),
                entry.actor_name,
                entry.actor_role or "",
                event.action,
                entry.description,
                event.entity_table or "",
                event.entity_id or "",
                json.dumps(event.metadata or {}, sort_keys=True, default=str),
            )
        )
    return buffer.getvalue()


def csv_filename(shop_name: str, on: date | None = None) -> str:
    """Download name such as ``staff_activity_log_corner_store_2024-05-01.csv``."""

    day = on or now_in_app_timezone().date()
    slug = "_".join(shop_name.lower().split()) or "shop"
    return f"staff_activity_log_{slug}_{day.isoformat()}.csv"


__all__ = ["CSV_HEADER", "csv_filename", "export_activity_csv"]
