"""Tests for the CSV export of the activity log."""

from __future__ import annotations

import csv
import io
import json
from datetime import date, datetime, timezone

from shopkeep.application.use_cases.activity import (
    CSV_HEADER,
    ActivityFeedEntry,
    csv_filename,
    export_activity_csv,
)
from shopkeep.domain.entities import ActivityCategory, ActivityEvent


def _entry(action, description, category, *, metadata=None, actor="Sam Staff", role="staff"):
    return ActivityFeedEntry(
        event=ActivityEvent(
            id=1,
            shop_id=1,
            actor_id=2,
            action=action,
            entity_table="products",
            entity_id="41",
            metadata=metadata or {},
            occurred_at=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
        ),
        description=description,
        category=category,
        actor_name=actor,
        actor_role=role,
    )


def _rows(text):
    return list(csv.reader(io.StringIO(text)))


def test_export_writes_header_and_rows():
    rows = _rows(
        export_activity_csv(
            [
                _entry(
                    "create_product",
                    'Created new product: Milk, "organic"',
                    ActivityCategory.PRODUCTS,
                    metadata={"name": 'Milk, "organic"'},
                )
            ]
        )
    )

    assert tuple(rows[0]) == CSV_HEADER
    assert rows[1] == [
        "2024-05-01T09:30:00+00:00",
        "Products",
        "Sam Staff",
        "staff",
        "create_product",
        'Created new product: Milk, "organic"',
        "products",
        "41",
        json.dumps({"name": 'Milk, "organic"'}),
    ]


def test_export_skips_login_rows_and_labels_unclassified():
    rows = _rows(
        export_activity_csv(
            [
                _entry("user_login", "Logged in to the system.", ActivityCategory.LOGIN),
                _entry("update_shop_settings", "Updated shop settings", None, actor="System", role=None),
            ]
        )
    )

    assert len(rows) == 2
    assert rows[1][1] == "Activity"
    assert rows[1][2:4] == ["System", ""]


def test_export_of_nothing_is_only_the_header():
    assert _rows(export_activity_csv([])) == [list(CSV_HEADER)]


def test_csv_filename():
    assert csv_filename("Corner Store", on=date(2024, 5, 1)) == (
        "staff_activity_log_corner_store_2024-05-01.csv"
    )
