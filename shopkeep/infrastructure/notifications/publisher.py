"""Broadcast "activity created" signals to the websocket channel of a shop."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from shopkeep.domain.entities import ActivityEvent
from shopkeep.infrastructure.diagnostics import ActivityDiagnostics
from shopkeep.utils import isoformat_or_none

from .manager import NotificationConnectionManager

ACTIVITY_CREATED = "activity.created"

logger = logging.getLogger(__name__)


class ActivitySignalPublisher:
    """Tell subscribers of a shop that new activity is available.

    The message only carries enough to let clients decide whether to
    re-fetch; the feed itself is always read back through the API.
    """

    def __init__(
        self,
        manager: NotificationConnectionManager,
        diagnostics: ActivityDiagnostics | None = None,
    ) -> None:
        self._manager = manager
        self._diagnostics = diagnostics

    def dispatch(self, event: ActivityEvent) -> None:
        """Schedule the signal for ``event`` on its shop channel.

        Inside the event loop the send is queued as a task. From a worker
        thread (sync endpoints) the call blocks until the loop has delivered
        the message.
        """

        message = {"type": ACTIVITY_CREATED, "data": serialize_activity_event(event)}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.send_to_shop, event.shop_id, message)
            except RuntimeError as exc:
                # Called outside the event loop and outside an anyio worker thread.
                if self._diagnostics is not None:
                    self._diagnostics.record_publish_failure(event.shop_id, exc)
                else:
                    logger.warning(
                        "Activity signal for shop %s dropped: %s", event.shop_id, exc
                    )
        else:
            loop.create_task(self._manager.send_to_shop(event.shop_id, message))


def serialize_activity_event(event: ActivityEvent) -> dict[str, Any]:
    """Return the websocket payload representation for ``event``."""

    return {
        "id": event.id,
        "shop_id": event.shop_id,
        "actor_id": event.actor_id,
        "action": event.action,
        "entity_table": event.entity_table,
        "entity_id": event.entity_id,
        "occurred_at": isoformat_or_none(event.occurred_at),
    }


__all__ = [
    "ACTIVITY_CREATED",
    "ActivitySignalPublisher",
    "serialize_activity_event",
]
