"""Low stock detection that writes ``low_stock_alert`` events."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopkeep.domain.entities import (
    LOW_STOCK_ALERT,
    STOCK_CHANGE_ACTIONS,
    ActivityEventInput,
    InventoryItem,
)
from shopkeep.infrastructure.repositories import (
    ActivityEventRepository,
    InventoryRepository,
)

from ..activity.feed import report_query_failure
from ..activity.logger import ActivityLogger

logger = logging.getLogger(__name__)

INVENTORY_TABLE = "inventory"


def low_stock_alert_input(
    shop_id: int, item: InventoryItem, actor_id: int | None = None
) -> ActivityEventInput:
    metadata = {
        "product_id": item.product_id,
        "product_name": item.product_name,
        "current_stock": item.quantity,
        "reorder_point": item.reorder_point,
    }
    if item.sku:
        metadata["sku"] = item.sku
    return ActivityEventInput(
        shop_id=shop_id,
        actor_id=actor_id,
        action=LOW_STOCK_ALERT,
        entity_table=INVENTORY_TABLE,
        entity_id=item.product_id,
        metadata=metadata,
    )


def check_low_stock(
    activity_logger: ActivityLogger,
    shop_id: int,
    item: InventoryItem,
    actor_id: int | None = None,
) -> bool:
    """Record an alert for ``item`` when it is at or below its reorder point.

    Returns ``True`` only when an alert was written.
    """

    if not item.is_low_stock():
        return False
    return activity_logger.append(low_stock_alert_input(shop_id, item, actor_id)).ok


def scan_low_stock(
    session: Session,
    shop_id: int,
    activity_logger: ActivityLogger,
    *,
    deduplicate: bool = False,
) -> int:
    """Sweep the inventory of ``shop_id`` and write one alert per low item.

    Every scan re-emits alerts for products that are still low. With
    ``deduplicate`` a product is skipped while its latest alert is newer than
    its latest stock change. Returns the number of alerts written.
    """

    try:
        items = InventoryRepository(session).list_for_shop(shop_id, low_stock_only=True)
    except SQLAlchemyError as exc:
        session.rollback()
        report_query_failure(activity_logger.diagnostics, shop_id, exc)
        return 0

    events = ActivityEventRepository(session)
    emitted = 0
    for item in items:
        if deduplicate and _alert_still_current(events, shop_id, item):
            logger.debug(
                "Skipping repeated low stock alert for product %s in shop %s",
                item.product_id,
                shop_id,
            )
            continue
        if activity_logger.append(low_stock_alert_input(shop_id, item)).ok:
            emitted += 1

    logger.info(
        "Low stock scan for shop %s found %s item(s), emitted %s alert(s)",
        shop_id,
        len(items),
        emitted,
    )
    return emitted


def _alert_still_current(
    events: ActivityEventRepository, shop_id: int, item: InventoryItem
) -> bool:
    entity_id = str(item.product_id)
    try:
        last_alert = events.latest_for_entity(
            shop_id, entity_id=entity_id, actions={LOW_STOCK_ALERT}
        )
        if last_alert is None:
            return False
        last_change = events.latest_for_entity(
            shop_id, entity_id=entity_id, actions=STOCK_CHANGE_ACTIONS
        )
    except SQLAlchemyError as exc:
        events.session.rollback()
        logger.warning("Could not check previous alerts for product %s: %s", entity_id, exc)
        return False
    # Ids are assigned in insertion order.
    return last_change is None or last_alert.id > last_change.id


__all__ = ["check_low_stock", "low_stock_alert_input", "scan_low_stock"]
