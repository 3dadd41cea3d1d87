"""Derive dashboard notifications from the activity log."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopkeep.domain.entities import (
    LOW_STOCK_ALERT,
    ActivityEvent,
    CatalogAction,
    CatalogVerb,
    Notification,
    NotificationPage,
    NotificationSeverity,
    coerce_metadata,
    parse_action,
)
from shopkeep.infrastructure.diagnostics import ActivityDiagnostics
from shopkeep.infrastructure.repositories import ActivityEventRepository

from ..activity.classification import first_present
from ..activity.feed import report_query_failure

STOCK_ADJUSTED = "stock_adjusted"

NOTIFICATION_ACTIONS: frozenset[str] = frozenset(
    {
        "product_created",
        "product_updated",
        "product_deleted",
        *(
            f"{verb.value}_{entity}"
            for verb in CatalogVerb
            for entity in ("product", "category", "supplier")
        ),
        STOCK_ADJUSTED,
        LOW_STOCK_ALERT,
    }
)

DEFAULT_TITLE = "Activity Update"
DEFAULT_MESSAGE = "An activity has occurred in your shop"

_CATALOG_TITLES = {
    CatalogVerb.CREATE: "New {label} Added",
    CatalogVerb.UPDATE: "{label} Updated",
    CatalogVerb.DELETE: "{label} Deleted",
}
_PRODUCT_MESSAGES = {
    CatalogVerb.CREATE: '{label} "{name}" has been added to inventory',
    CatalogVerb.UPDATE: '{label} "{name}" has been updated',
    CatalogVerb.DELETE: '{label} "{name}" has been removed from inventory',
}
_CATALOG_MESSAGES = {
    CatalogVerb.CREATE: '{label} "{name}" has been added',
    CatalogVerb.UPDATE: '{label} "{name}" has been updated',
    CatalogVerb.DELETE: '{label} "{name}" has been removed',
}
_NAME_KEYS = ("product_name", "name", "company_name", "title")
UNKNOWN_PRODUCT = "Unknown"


def notification_severity(event: ActivityEvent) -> NotificationSeverity:
    if event.action == LOW_STOCK_ALERT:
        return NotificationSeverity.WARNING
    action = parse_action(event.action)
    if isinstance(action, CatalogAction) and action.verb is CatalogVerb.DELETE:
        return NotificationSeverity.DESTRUCTIVE
    return NotificationSeverity.INFO


def notification_text(event: ActivityEvent) -> tuple[str, str]:
    """Return ``(title, message)`` shown for ``event`` on the dashboard."""

    metadata = coerce_metadata(event.metadata)
    name = first_present(metadata, _NAME_KEYS)

    if event.action == LOW_STOCK_ALERT:
        remaining = metadata.get("current_stock") or 0
        return (
            "Low Stock Alert",
            f'Product "{_product_name(metadata)}" is running low on stock'
            f" ({remaining} remaining)",
        )
    if event.action == STOCK_ADJUSTED:
        new_stock = metadata.get("new_stock", metadata.get("quantity")) or 0
        return (
            "Stock Adjusted",
            f'Stock for "{_product_name(metadata)}" has been adjusted to {new_stock}',
        )

    action = parse_action(event.action)
    if isinstance(action, CatalogAction):
        label = action.entity.capitalize()
        messages = _PRODUCT_MESSAGES if action.entity == "product" else _CATALOG_MESSAGES
        message = messages[action.verb]
        return (
            _CATALOG_TITLES[action.verb].format(label=label),
            message.format(label=label, name=name),
        )
    return DEFAULT_TITLE, DEFAULT_MESSAGE


def _product_name(metadata: dict) -> str:
    return str(metadata.get("product_name") or UNKNOWN_PRODUCT)


def to_notification(event: ActivityEvent) -> Notification:
    title, message = notification_text(event)
    return Notification(
        id=event.id,
        action=event.action,
        title=title,
        message=message,
        severity=notification_severity(event),
        created_at=event.occurred_at,
        entity_table=event.entity_table,
        entity_id=event.entity_id,
        metadata=coerce_metadata(event.metadata),
    )


def list_notifications(
    session: Session,
    shop_id: int,
    page: int = 1,
    page_size: int = 5,
    *,
    diagnostics: ActivityDiagnostics | None = None,
) -> NotificationPage:
    """Return one page of notifications for ``shop_id``.

    Pages are 1-based; values below one are clamped. A page past the end has
    no items but still reports the total count.
    """

    page = max(1, page)
    page_size = max(1, page_size)
    offset = (page - 1) * page_size
    repository = ActivityEventRepository(session)
    try:
        total_count = repository.count_by_actions(shop_id, NOTIFICATION_ACTIONS)
        if offset >= total_count:
            return NotificationPage(
                items=[], total_count=total_count, page=page, page_size=page_size
            )
        events = repository.list_by_actions(
            shop_id,
            NOTIFICATION_ACTIONS,
            offset=offset,
            limit=min(page_size, total_count - offset),
        )
    except SQLAlchemyError as exc:
        session.rollback()
        report_query_failure(diagnostics, shop_id, exc)
        return NotificationPage(items=[], total_count=0, page=page, page_size=page_size)
    except ValueError as exc:
        report_query_failure(diagnostics, shop_id, exc)
        return NotificationPage(items=[], total_count=0, page=page, page_size=page_size)

    return NotificationPage(
        items=[to_notification(event) for event in events],
        total_count=total_count,
        page=page,
        page_size=page_size,
    )


__all__ = [
    "DEFAULT_MESSAGE",
    "DEFAULT_TITLE",
    "NOTIFICATION_ACTIONS",
    "list_notifications",
    "notification_severity",
    "notification_text",
    "to_notification",
]
