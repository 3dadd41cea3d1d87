"""Tests for the dashboard notification projection."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from shopkeep.application.use_cases.notifications import (
    NOTIFICATION_ACTIONS,
    list_notifications,
    notification_severity,
    notification_text,
)
from shopkeep.domain.entities import ActivityEvent, ActivityEventInput, NotificationSeverity
from shopkeep.infrastructure.repositories import ActivityEventRepository


def _event(action, metadata=None) -> ActivityEvent:
    return ActivityEvent(
        id=1,
        shop_id=1,
        actor_id=None,
        action=action,
        entity_table=None,
        entity_id=None,
        metadata=metadata or {},
    )


def _record(activity_logger, shop_id, action, metadata=None):
    assert activity_logger.append(
        ActivityEventInput(shop_id=shop_id, action=action, metadata=metadata)
    ).ok


@pytest.mark.parametrize(
    ("action", "metadata", "title", "message", "severity"),
    [
        (
            "product_created",
            {"product_name": "Widget"},
            "New Product Added",
            'Product "Widget" has been added to inventory',
            NotificationSeverity.INFO,
        ),
        (
            "update_product",
            {"name": "Widget"},
            "Product Updated",
            'Product "Widget" has been updated',
            NotificationSeverity.INFO,
        ),
        (
            "product_deleted",
            {"product_name": "Widget"},
            "Product Deleted",
            'Product "Widget" has been removed from inventory',
            NotificationSeverity.DESTRUCTIVE,
        ),
        (
            "delete_category",
            {"name": "Snacks"},
            "Category Deleted",
            'Category "Snacks" has been removed',
            NotificationSeverity.DESTRUCTIVE,
        ),
        (
            "create_supplier",
            {"company_name": "Acme Ltd"},
            "New Supplier Added",
            'Supplier "Acme Ltd" has been added',
            NotificationSeverity.INFO,
        ),
        (
            "low_stock_alert",
            {"product_name": "Widget", "current_stock": 3, "reorder_point": 5},
            "Low Stock Alert",
            'Product "Widget" is running low on stock (3 remaining)',
            NotificationSeverity.WARNING,
        ),
        (
            "stock_adjusted",
            {"product_name": "Widget", "new_stock": 8},
            "Stock Adjusted",
            'Stock for "Widget" has been adjusted to 8',
            NotificationSeverity.INFO,
        ),
        (
            "low_stock_alert",
            {},
            "Low Stock Alert",
            'Product "Unknown" is running low on stock (0 remaining)',
            NotificationSeverity.WARNING,
        ),
        (
            "stock_adjusted",
            {"product_id": 4, "quantity": 0},
            "Stock Adjusted",
            'Stock for "Unknown" has been adjusted to 0',
            NotificationSeverity.INFO,
        ),
        (
            "something_else",
            {},
            "Activity Update",
            "An activity has occurred in your shop",
            NotificationSeverity.INFO,
        ),
    ],
)
def test_notification_text_and_severity(action, metadata, title, message, severity):
    event = _event(action, metadata)

    assert notification_text(event) == (title, message)
    assert notification_severity(event) is severity


def test_notification_scope():
    assert "low_stock_alert" in NOTIFICATION_ACTIONS
    assert "delete_supplier" in NOTIFICATION_ACTIONS
    assert "user_login" not in NOTIFICATION_ACTIONS
    assert "create_order" not in NOTIFICATION_ACTIONS


def test_pagination_over_twelve_notifications(activity_logger, db_session, shop):
    for index in range(12):
        _record(activity_logger, shop.shop_id, "product_created", {"product_name": f"P{index}"})
    _record(activity_logger, shop.shop_id, "user_login")
    _record(activity_logger, shop.shop_id, "create_order")

    pages = [list_notifications(db_session, shop.shop_id, page=page, page_size=5) for page in (1, 2, 3, 4)]

    assert [len(page.items) for page in pages] == [5, 5, 2, 0]
    assert {page.total_count for page in pages} == {12}
    assert {page.total_pages for page in pages} == {3}
    assert pages[0].items[0].message == 'Product "P11" has been added to inventory'
    assert pages[2].items[-1].message == 'Product "P0" has been added to inventory'


def test_pages_below_one_are_clamped(activity_logger, db_session, shop):
    _record(activity_logger, shop.shop_id, "product_created", {"product_name": "A"})
    _record(activity_logger, shop.shop_id, "product_created", {"product_name": "B"})

    result = list_notifications(db_session, shop.shop_id, page=0, page_size=0)

    assert (result.page, result.page_size) == (1, 1)
    assert [item.metadata["product_name"] for item in result.items] == ["B"]
    assert result.total_pages == 2


def test_page_far_past_the_end_is_empty(activity_logger, db_session, diagnostics, shop):
    for name in ("A", "B", "C"):
        _record(activity_logger, shop.shop_id, "product_created", {"product_name": name})

    result = list_notifications(
        db_session, shop.shop_id, page=2**62, page_size=5, diagnostics=diagnostics
    )

    assert result.items == []
    assert result.total_count == 3
    assert result.total_pages == 1
    assert diagnostics.snapshot().query_failures == 0


def test_last_page_holds_only_the_remainder(activity_logger, db_session, shop):
    for index in range(7):
        _record(activity_logger, shop.shop_id, "create_category", {"name": f"C{index}"})

    result = list_notifications(db_session, shop.shop_id, page=2, page_size=5)

    assert [item.metadata["name"] for item in result.items] == ["C1", "C0"]


def test_notifications_are_scoped_to_the_shop(activity_logger, db_session, shop, other_shop):
    _record(activity_logger, other_shop.shop_id, "low_stock_alert", {"product_name": "Bread"})

    result = list_notifications(db_session, shop.shop_id)

    assert result.items == []
    assert result.total_count == 0
    assert result.total_pages == 0


def test_query_failure_returns_empty_page(activity_logger, db_session, diagnostics, shop, monkeypatch):
    _record(activity_logger, shop.shop_id, "product_created", {"product_name": "A"})

    def failing_count(self, shop_id, actions):
        raise OperationalError("SELECT count(*)", {}, Exception("timeout"))

    monkeypatch.setattr(ActivityEventRepository, "count_by_actions", failing_count)

    result = list_notifications(db_session, shop.shop_id, diagnostics=diagnostics)

    assert result.items == []
    assert result.total_count == 0
    assert diagnostics.snapshot().query_failures == 1
