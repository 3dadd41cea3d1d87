"""Tests for the low stock scanner."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from shopkeep.application.use_cases.activity import query_recent
from shopkeep.application.use_cases.inventory import check_low_stock, scan_low_stock
from shopkeep.domain.entities import (
    ActivityCategory,
    ActivityEventInput,
    ActivityFilters,
    InventoryItem,
)
from shopkeep.infrastructure.repositories import ActivityEventRepository


def _alerts(db_session, shop_id):
    return [
        event
        for event in query_recent(db_session, shop_id, limit=100)
        if event.action == "low_stock_alert"
    ]


def test_scan_emits_one_alert_per_low_item(activity_logger, db_session, shop, make_product):
    low_id = make_product(shop.shop_id, "Widget", quantity=3, reorder_point=5, sku="W-1")
    make_product(shop.shop_id, "Gadget", quantity=10, reorder_point=5)

    assert scan_low_stock(db_session, shop.shop_id, activity_logger) == 1

    [alert] = _alerts(db_session, shop.shop_id)
    assert alert.actor_id is None
    assert alert.entity_table == "inventory"
    assert alert.entity_id == str(low_id)
    assert alert.metadata == {
        "product_id": low_id,
        "product_name": "Widget",
        "sku": "W-1",
        "current_stock": 3,
        "reorder_point": 5,
    }


@pytest.mark.parametrize(
    ("quantity", "reorder_point", "expected"),
    [(5, 5, 1), (0, 1, 1), (6, 5, 0), (0, 0, 0)],
)
def test_scan_threshold(
    activity_logger, db_session, shop, make_product, quantity, reorder_point, expected
):
    make_product(shop.shop_id, "Item", quantity=quantity, reorder_point=reorder_point)

    assert scan_low_stock(db_session, shop.shop_id, activity_logger) == expected


def test_rescan_emits_duplicates_by_default(activity_logger, db_session, shop, make_product):
    make_product(shop.shop_id, "Widget", quantity=3, reorder_point=5)

    scan_low_stock(db_session, shop.shop_id, activity_logger)
    scan_low_stock(db_session, shop.shop_id, activity_logger)

    assert len(_alerts(db_session, shop.shop_id)) == 2


def test_deduplicate_waits_for_a_stock_change(activity_logger, db_session, shop, make_product):
    product_id = make_product(shop.shop_id, "Widget", quantity=3, reorder_point=5)

    assert scan_low_stock(db_session, shop.shop_id, activity_logger, deduplicate=True) == 1
    assert scan_low_stock(db_session, shop.shop_id, activity_logger, deduplicate=True) == 0

    activity_logger.track_inventory_activity(
        shop.shop_id, shop.staff_id, "stock_adjusted", product_id, 2
    )

    assert scan_low_stock(db_session, shop.shop_id, activity_logger, deduplicate=True) == 1
    assert len(_alerts(db_session, shop.shop_id)) == 2


def test_scan_only_touches_the_callers_shop(
    activity_logger, db_session, shop, other_shop, make_product
):
    make_product(other_shop.shop_id, "Bread", quantity=1, reorder_point=4)

    assert scan_low_stock(db_session, shop.shop_id, activity_logger) == 0
    assert _alerts(db_session, other_shop.shop_id) == []


def test_scan_counts_only_successful_writes(
    activity_logger, db_session, diagnostics, shop, make_product, monkeypatch
):
    make_product(shop.shop_id, "Widget", quantity=1, reorder_point=5)

    def failing_create(self, event):
        raise OperationalError("INSERT INTO activity_events", {}, Exception("read only"))

    monkeypatch.setattr(ActivityEventRepository, "create", failing_create)

    assert scan_low_stock(db_session, shop.shop_id, activity_logger) == 0
    assert diagnostics.snapshot().write_failures == 1


def test_check_low_stock(activity_logger, db_session, shop):
    low = InventoryItem(product_id=7, product_name="Tea", sku=None, quantity=2, reorder_point=2)
    healthy = InventoryItem(product_id=8, product_name="Coffee", sku=None, quantity=9, reorder_point=2)

    assert check_low_stock(activity_logger, shop.shop_id, low, actor_id=shop.staff_id) is True
    assert check_low_stock(activity_logger, shop.shop_id, healthy) is False

    [alert] = _alerts(db_session, shop.shop_id)
    assert alert.actor_id == shop.staff_id
    assert alert.metadata["current_stock"] == 2
    assert "sku" not in alert.metadata


def test_alert_appears_in_inventory_category(activity_logger, db_session, shop):
    activity_logger.append(ActivityEventInput(shop_id=shop.shop_id, action="low_stock_alert"))

    events = query_recent(
        db_session,
        shop.shop_id,
        limit=10,
        filters=ActivityFilters(category=ActivityCategory.INVENTORY),
    )
    assert [event.action for event in events] == ["low_stock_alert"]
