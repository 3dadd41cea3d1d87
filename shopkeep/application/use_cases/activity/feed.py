"""Use cases for reading the activity log of a shop."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopkeep.domain.entities import (
    ActivityCategory,
    ActivityEvent,
    ActivityFilters,
    User,
)
from shopkeep.domain.exceptions import ActivityQueryError
from shopkeep.infrastructure.diagnostics import ActivityDiagnostics
from shopkeep.infrastructure.repositories import ActivityEventRepository, UserRepository

from .classification import classify, describe

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "System"
UNKNOWN_ACTOR = "Unknown User"


@dataclass(frozen=True)
class ActivityFeedEntry:
    """An event together with everything the activity log page displays."""

    event: ActivityEvent
    description: str
    category: ActivityCategory | None
    actor_name: str
    actor_role: str | None


def query_recent(
    session: Session,
    shop_id: int,
    *,
    limit: int | None = 100,
    filters: ActivityFilters | None = None,
    diagnostics: ActivityDiagnostics | None = None,
) -> list[ActivityEvent]:
    """Return at most ``limit`` events of ``shop_id``, newest first.

    ``limit=None`` reads every matching event. Read failures are reported and
    turned into an empty list.
    """

    try:
        return ActivityEventRepository(session).list_recent(
            shop_id,
            limit=None if limit is None else max(1, limit),
            filters=filters,
        )
    except SQLAlchemyError as exc:
        session.rollback()
        report_query_failure(diagnostics, shop_id, exc)
    except ValueError as exc:
        report_query_failure(diagnostics, shop_id, exc)
    return []


def build_activity_feed(
    session: Session,
    shop_id: int,
    *,
    limit: int | None = 100,
    filters: ActivityFilters | None = None,
    search: str | None = None,
    diagnostics: ActivityDiagnostics | None = None,
) -> list[ActivityFeedEntry]:
    """Return described and classified events, optionally narrowed by ``search``.

    ``search`` matches case-insensitively on the actor name, the action tag and
    the rendered description of the fetched events.
    """

    events = query_recent(
        session, shop_id, limit=limit, filters=filters, diagnostics=diagnostics
    )
    if not events:
        return []

    try:
        actors = UserRepository(session).get_map_by_ids(
            shop_id, (event.actor_id for event in events)
        )
    except SQLAlchemyError as exc:
        session.rollback()
        report_query_failure(diagnostics, shop_id, exc)
        actors = {}

    entries = [_to_entry(event, actors) for event in events]

    term = (search or "").strip().lower()
    if term:
        entries = [entry for entry in entries if _matches_search(entry, term)]
    return entries


def report_query_failure(
    diagnostics: ActivityDiagnostics | None, shop_id: int | None, exc: Exception
) -> None:
    error = ActivityQueryError(f"Could not read activity for shop {shop_id}: {exc}")
    if diagnostics is not None:
        diagnostics.record_query_failure(shop_id, error)
    else:
        logger.error("%s", error)


def _to_entry(event: ActivityEvent, actors: dict[int, User]) -> ActivityFeedEntry:
    actor_name, actor_role = _resolve_actor(event.actor_id, actors)
    return ActivityFeedEntry(
        event=event,
        description=describe(event),
        category=classify(event),
        actor_name=actor_name,
        actor_role=actor_role,
    )


def _resolve_actor(actor_id: int | None, actors: dict[int, User]) -> tuple[str, str | None]:
    if actor_id is None:
        return SYSTEM_ACTOR, None
    user = actors.get(actor_id)
    if user is None:
        return UNKNOWN_ACTOR, None
    return user.full_name or user.email, user.role


def _matches_search(entry: ActivityFeedEntry, term: str) -> bool:
    haystacks = (entry.actor_name, entry.event.action, entry.description)
    return any(term in (value or "").lower() for value in haystacks)


__all__ = [
    "ActivityFeedEntry",
    "SYSTEM_ACTOR",
    "UNKNOWN_ACTOR",
    "build_activity_feed",
    "query_recent",
    "report_query_failure",
]
