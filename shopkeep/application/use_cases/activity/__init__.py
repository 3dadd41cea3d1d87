"""Use cases for recording and reading the shop activity log."""

from .classification import (
    category_label,
    classify,
    describe,
    matches_category,
)
from .export import CSV_HEADER, csv_filename, export_activity_csv
from .feed import (
    SYSTEM_ACTOR,
    UNKNOWN_ACTOR,
    ActivityFeedEntry,
    build_activity_feed,
    query_recent,
    report_query_failure,
)
from .logger import ActivityLogger, WriteResult
from .sessions import list_active_sessions, list_login_sessions

__all__ = [
    "ActivityFeedEntry",
    "ActivityLogger",
    "CSV_HEADER",
    "SYSTEM_ACTOR",
    "UNKNOWN_ACTOR",
    "WriteResult",
    "build_activity_feed",
    "category_label",
    "classify",
    "csv_filename",
    "describe",
    "export_activity_csv",
    "list_active_sessions",
    "list_login_sessions",
    "matches_category",
    "query_recent",
    "report_query_failure",
]
