"""Endpoints exposing the staff activity log of the caller's shop."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from shopkeep.application.use_cases.activity import (
    ActivityFeedEntry,
    build_activity_feed,
    category_label,
    csv_filename,
    export_activity_csv,
)
from shopkeep.config import Settings
from shopkeep.domain.entities import ActivityCategory, ActivityFilters, ActivityWindow, User
from shopkeep.infrastructure.database import get_db
from shopkeep.infrastructure.diagnostics import ActivityDiagnostics
from shopkeep.infrastructure.repositories import ShopRepository
from shopkeep.interfaces.api.dependencies import (
    get_app_settings,
    get_diagnostics,
    require_shop_admin,
)
from shopkeep.interfaces.api.schemas import ActivityDiagnosticsRead, ActivityEntryRead

router = APIRouter(prefix="/activity", tags=["activity"])

MAX_EXPORT_ROWS = 1_000_000


def _entry_to_schema(entry: ActivityFeedEntry) -> ActivityEntryRead:
    event = entry.event
    return ActivityEntryRead(
        id=event.id,
        action=event.action,
        description=entry.description,
        category=entry.category.value if entry.category else None,
        category_label=category_label(entry.category),
        actor_id=event.actor_id,
        actor_name=entry.actor_name,
        actor_role=entry.actor_role,
        entity_table=event.entity_table,
        entity_id=event.entity_id,
        occurred_at=event.occurred_at,
        metadata=event.metadata,
        old_values=event.old_values,
        new_values=event.new_values,
    )


def _feed(
    db: Session,
    current_user: User,
    diagnostics: ActivityDiagnostics,
    *,
    limit: int | None,
    category: ActivityCategory | None,
    window: ActivityWindow,
    actor_id: int | None,
    search: str | None,
    exclude_category: ActivityCategory | None = None,
) -> list[ActivityFeedEntry]:
    return build_activity_feed(
        db,
        current_user.shop_id,
        limit=limit,
        filters=ActivityFilters(
            category=category,
            exclude_category=exclude_category,
            window=window,
            actor_id=actor_id,
        ),
        search=search,
        diagnostics=diagnostics,
    )


@router.get("/recent", response_model=list[ActivityEntryRead])
def read_recent_activity(
    limit: int | None = Query(None, ge=1, le=1000, description="Maximum number of events"),
    category: ActivityCategory | None = Query(None),
    window: ActivityWindow = Query(ActivityWindow.ALL),
    actor_id: int | None = Query(None, description="Only events performed by this user"),
    search: str | None = Query(None, max_length=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_shop_admin),
    diagnostics: ActivityDiagnostics = Depends(get_diagnostics),
    settings: Settings = Depends(get_app_settings),
) -> list[ActivityEntryRead]:
    """Return the newest activity of the caller's shop, described and classified."""

    entries = _feed(
        db,
        current_user,
        diagnostics,
        limit=limit or settings.activity_feed_limit,
        category=category,
        window=window,
        actor_id=actor_id,
        search=search,
    )
    return [_entry_to_schema(entry) for entry in entries]


@router.get("/export")
def export_activity(
    limit: int | None = Query(
        None,
        ge=1,
        le=MAX_EXPORT_ROWS,
        description="Maximum number of rows; the whole log by default",
    ),
    category: ActivityCategory | None = Query(None),
    window: ActivityWindow = Query(ActivityWindow.ALL),
    actor_id: int | None = Query(None),
    search: str | None = Query(None, max_length=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_shop_admin),
    diagnostics: ActivityDiagnostics = Depends(get_diagnostics),
) -> Response:
    """Download the filtered activity log as CSV, without login and logout rows."""

    entries = _feed(
        db,
        current_user,
        diagnostics,
        limit=limit,
        category=category,
        exclude_category=ActivityCategory.LOGIN,
        window=window,
        actor_id=actor_id,
        search=search,
    )
    shop = ShopRepository(db).get(current_user.shop_id)
    filename = csv_filename(shop.name if shop else str(current_user.shop_id))
    return Response(
        content=export_activity_csv(entries),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/diagnostics", response_model=ActivityDiagnosticsRead)
def read_activity_diagnostics(
    _: User = Depends(require_shop_admin),
    diagnostics: ActivityDiagnostics = Depends(get_diagnostics),
) -> ActivityDiagnosticsRead:
    """Return counters of activity failures that were not surfaced to callers."""

    snapshot = diagnostics.snapshot()
    return ActivityDiagnosticsRead(
        write_failures=snapshot.write_failures,
        query_failures=snapshot.query_failures,
        publish_failures=snapshot.publish_failures,
        last_error=snapshot.last_error,
        last_error_at=snapshot.last_error_at,
    )


__all__ = ["router"]
