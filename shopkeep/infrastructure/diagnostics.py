"""Counters for activity log failures that are otherwise invisible to callers.

Writes to the activity log are best effort: a failure never reaches the
business operation that triggered it. Every such failure is counted here and
logged on the ``shopkeep.activity.diagnostics`` logger so operators can alert
on it.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime

from shopkeep.utils import now_in_app_timezone

logger = logging.getLogger("shopkeep.activity.diagnostics")


@dataclass(frozen=True)
class DiagnosticsSnapshot:
    write_failures: int
    query_failures: int
    publish_failures: int
    last_error: str | None
    last_error_at: datetime | None


class ActivityDiagnostics:
    """Thread-safe failure counters shared by the activity components."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._write_failures = 0
        self._query_failures = 0
        self._publish_failures = 0
        self._last_error: str | None = None
        self._last_error_at: datetime | None = None

    def record_write_failure(self, action: str | None, error: BaseException | str) -> None:
        with self._lock:
            self._write_failures += 1
            self._remember(error)
        logger.error("Activity write failed for action %r: %s", action, error)

    def record_query_failure(self, shop_id: int | None, error: BaseException | str) -> None:
        with self._lock:
            self._query_failures += 1
            self._remember(error)
        logger.error("Activity query failed for shop %s: %s", shop_id, error)

    def record_publish_failure(self, shop_id: int | None, error: BaseException | str) -> None:
        with self._lock:
            self._publish_failures += 1
            self._remember(error)
        logger.warning("Activity signal not delivered for shop %s: %s", shop_id, error)

    def snapshot(self) -> DiagnosticsSnapshot:
        with self._lock:
            return DiagnosticsSnapshot(
                write_failures=self._write_failures,
                query_failures=self._query_failures,
                publish_failures=self._publish_failures,
                last_error=self._last_error,
                last_error_at=self._last_error_at,
            )

    def _remember(self, error: BaseException | str) -> None:
        self._last_error = str(error) or error.__class__.__name__
        self._last_error_at = now_in_app_timezone()


__all__ = ["ActivityDiagnostics", "DiagnosticsSnapshot"]
