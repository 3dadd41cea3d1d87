"""Tests for reading, filtering and rendering the activity log."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import OperationalError

from shopkeep.application.use_cases.activity import (
    SYSTEM_ACTOR,
    UNKNOWN_ACTOR,
    build_activity_feed,
    query_recent,
)
from shopkeep.domain.entities import (
    ActivityCategory,
    ActivityEventInput,
    ActivityFilters,
    ActivityWindow,
)
from shopkeep.infrastructure.repositories import ActivityEventRepository

NOW = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)


def _record(activity_logger, shop_id, action, *, at=None, **kwargs):
    result = activity_logger.append(
        ActivityEventInput(shop_id=shop_id, action=action, occurred_at=at, **kwargs)
    )
    assert result.ok
    return result.event_id


def test_query_recent_is_scoped_to_the_shop(activity_logger, db_session, shop, other_shop):
    _record(activity_logger, shop.shop_id, "create_product")
    _record(activity_logger, other_shop.shop_id, "delete_product")
    _record(activity_logger, shop.shop_id, "update_product")

    events = query_recent(db_session, shop.shop_id, limit=50)

    assert {event.shop_id for event in events} == {shop.shop_id}
    assert [event.action for event in events] == ["update_product", "create_product"]


def test_query_recent_orders_by_time_then_insertion(activity_logger, db_session, shop):
    older = _record(activity_logger, shop.shop_id, "a", at=NOW - timedelta(hours=2))
    tied_first = _record(activity_logger, shop.shop_id, "b", at=NOW)
    newest = _record(activity_logger, shop.shop_id, "c", at=NOW + timedelta(minutes=1))
    tied_second = _record(activity_logger, shop.shop_id, "d", at=NOW)

    events = query_recent(db_session, shop.shop_id, limit=10)

    assert [event.id for event in events] == [newest, tied_second, tied_first, older]


def test_query_recent_honours_limit(activity_logger, db_session, shop):
    for index in range(5):
        _record(activity_logger, shop.shop_id, f"custom_{index}")

    assert len(query_recent(db_session, shop.shop_id, limit=3)) == 3


def test_filters_are_conjunctive(activity_logger, db_session, shop):
    _record(
        activity_logger,
        shop.shop_id,
        "product_created",
        actor_id=shop.staff_id,
        entity_table="products",
        at=NOW - timedelta(hours=3),
    )
    _record(
        activity_logger,
        shop.shop_id,
        "product_updated",
        actor_id=shop.owner_id,
        entity_table="products",
        at=NOW - timedelta(hours=2),
    )
    _record(
        activity_logger,
        shop.shop_id,
        "product_deleted",
        actor_id=shop.staff_id,
        entity_table="products",
        at=NOW - timedelta(days=3),
    )
    _record(
        activity_logger,
        shop.shop_id,
        "create_order",
        actor_id=shop.staff_id,
        at=NOW - timedelta(hours=1),
    )

    filters = ActivityFilters(
        category=ActivityCategory.PRODUCTS,
        window=ActivityWindow.LAST_DAY,
        actor_id=shop.staff_id,
        now=NOW,
    )
    events = query_recent(db_session, shop.shop_id, limit=10, filters=filters)

    assert [event.action for event in events] == ["product_created"]


def test_category_filter_matches_action_keywords(activity_logger, db_session, shop):
    _record(activity_logger, shop.shop_id, "stock_adjusted")
    _record(activity_logger, shop.shop_id, "update_inventory", entity_table="products")
    _record(activity_logger, shop.shop_id, "user_login")

    filters = ActivityFilters(category=ActivityCategory.INVENTORY)
    actions = {event.action for event in query_recent(db_session, shop.shop_id, limit=10, filters=filters)}

    assert actions == {"stock_adjusted", "update_inventory"}


def test_excluded_category_keeps_events_without_a_table(activity_logger, db_session, shop):
    _record(activity_logger, shop.shop_id, "update_shop_settings")
    _record(activity_logger, shop.shop_id, "user_login", entity_table="staff_login_sessions")
    _record(activity_logger, shop.shop_id, "user_logout")
    _record(activity_logger, shop.shop_id, "product_created", entity_table="products")

    filters = ActivityFilters(exclude_category=ActivityCategory.LOGIN)
    events = query_recent(db_session, shop.shop_id, limit=2, filters=filters)

    assert [event.action for event in events] == ["product_created", "update_shop_settings"]


def test_query_recent_without_limit_reads_everything(activity_logger, db_session, shop):
    for _ in range(150):
        _record(activity_logger, shop.shop_id, "update_product")

    assert len(query_recent(db_session, shop.shop_id, limit=None)) == 150


def test_query_failure_returns_empty_list(activity_logger, db_session, diagnostics, shop, monkeypatch):
    _record(activity_logger, shop.shop_id, "create_product")

    def failing_list(self, shop_id, *, limit=100, filters=None):
        raise OperationalError("SELECT", {}, Exception("no such table"))

    monkeypatch.setattr(ActivityEventRepository, "list_recent", failing_list)

    assert query_recent(db_session, shop.shop_id, limit=10, diagnostics=diagnostics) == []
    assert diagnostics.snapshot().query_failures == 1


def test_query_without_shop_is_rejected(db_session, diagnostics):
    assert query_recent(db_session, None, limit=10, diagnostics=diagnostics) == []
    assert diagnostics.snapshot().query_failures == 1


def test_build_activity_feed_resolves_actors(activity_logger, db_session, shop, other_shop):
    _record(activity_logger, shop.shop_id, "low_stock_alert", metadata={"product_name": "Milk"})
    _record(activity_logger, shop.shop_id, "create_category", actor_id=shop.owner_id, metadata={"name": "Dairy"})
    _record(activity_logger, shop.shop_id, "create_category", actor_id=other_shop.owner_id)
    _record(activity_logger, shop.shop_id, "create_category", actor_id=999_999)

    entries = build_activity_feed(db_session, shop.shop_id, limit=10)

    assert [entry.actor_name for entry in entries] == [
        UNKNOWN_ACTOR,
        UNKNOWN_ACTOR,
        "Olivia Owner",
        SYSTEM_ACTOR,
    ]
    owner_entry = entries[2]
    assert owner_entry.actor_role == "shop_admin"
    assert owner_entry.description == "Created new category: Dairy"
    assert owner_entry.category is ActivityCategory.CATEGORIES
    assert entries[3].category is ActivityCategory.INVENTORY


def test_build_activity_feed_search(activity_logger, db_session, shop):
    _record(activity_logger, shop.shop_id, "create_category", actor_id=shop.staff_id, metadata={"name": "Frozen"})
    _record(activity_logger, shop.shop_id, "create_product", actor_id=shop.owner_id, metadata={"name": "Ice cubes"})
    _record(activity_logger, shop.shop_id, "user_login", actor_id=shop.owner_id)

    def actions_for(term):
        return [
            entry.event.action
            for entry in build_activity_feed(db_session, shop.shop_id, limit=10, search=term)
        ]

    assert actions_for("FROZEN") == ["create_category"]
    assert actions_for("sam staff") == ["create_category"]
    assert actions_for("login") == ["user_login"]
    assert actions_for("   ") == ["user_login", "create_product", "create_category"]
    assert actions_for("nothing matches") == []
