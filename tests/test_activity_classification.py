"""Tests for describing and classifying activity events."""

from __future__ import annotations

import pytest

from shopkeep.application.use_cases.activity import (
    category_label,
    classify,
    describe,
    matches_category,
)
from shopkeep.domain.entities import (
    ActivityCategory,
    ActivityEvent,
    CatalogAction,
    CatalogVerb,
    InventoryAction,
    SaleAction,
    SessionAction,
    SettingsAction,
    UnrecognizedAction,
    parse_action,
)


def _event(action, metadata=None, *, entity_table=None, entity_id=None) -> ActivityEvent:
    return ActivityEvent(
        id=1,
        shop_id=1,
        actor_id=None,
        action=action,
        entity_table=entity_table,
        entity_id=entity_id,
        metadata=metadata if metadata is not None else {},
    )


@pytest.mark.parametrize(
    ("action", "metadata", "expected"),
    [
        ("user_login", {"session_id": 4}, "Logged in to the system."),
        ("user_logout", {}, "Logged out of the system."),
        ("create_product", {"name": "Oat Milk"}, "Created new product: Oat Milk"),
        ("update_product", {"title": "Oat Milk 1L"}, "Updated product: Oat Milk 1L"),
        ("delete_product", {}, "Deleted product: N/A"),
        ("product_created", {"product_name": "Rye Bread"}, "Created new product: Rye Bread"),
        ("update_category", {"name": "Dairy"}, "Updated category: Dairy"),
        ("delete_supplier", {"company_name": "Acme Ltd"}, "Deleted supplier: Acme Ltd"),
        ("create_customer", {"email": "ana@example.com"}, "Created new customer: ana@example.com"),
        ("create_order", {"order_number": "SO-12"}, "Created new order: SO-12"),
        ("create_sale", {"transaction_id": "TX-9"}, "Created new sale: TX-9"),
        ("create_user", {"first_name": "Ana"}, "Created new user: Ana"),
        ("process_payment", {"order_number": "SO-12"}, "Processed payment: SO-12"),
        ("fulfill_order", {"order_number": "SO-12"}, "Fulfilled order: SO-12"),
        ("pos_sale", {"transaction_id": "TX-1", "amount": 12.5}, "POS sale: TX-1 (amount: 12.5)"),
        ("pos_refund", {"transaction_id": "TX-2"}, "POS refund: TX-2"),
        ("update_inventory", {"product_name": "Widget"}, "Updated inventory: Widget"),
        ("adjust_stock", {"product_name": "Widget"}, "Adjusted stock: Widget"),
        (
            "stock_adjusted",
            {"product_name": "Widget", "new_stock": 8},
            "Adjusted stock: Widget (new stock: 8)",
        ),
        ("low_stock_alert", {"product_name": "Widget"}, "Low stock alert: Widget"),
        ("update_shop_settings", {}, "Updated shop settings"),
        ("update_shop_profile", {}, "Updated shop profile"),
    ],
)
def test_describe_known_actions(action, metadata, expected):
    assert describe(_event(action, metadata)) == expected


def test_describe_unknown_action_uses_generic_template():
    event = _event("product_viewed", entity_table="products", entity_id="7")

    assert describe(event) == "product_viewed on products (ID: 7)"
    assert describe(_event("inventory_synced")) == "inventory_synced"


def test_describe_decodes_json_string_metadata():
    assert describe(_event("create_category", '{"name": "Snacks"}')) == (
        "Created new category: Snacks"
    )
    assert describe(_event("create_category", "{not json")) == "Created new category: N/A"
    assert describe(_event("create_category", b'["a list"]')) == "Created new category: N/A"


@pytest.mark.parametrize(
    "action",
    ["", "   ", None, "x", "__", "create_", "_product", "CREATE_PRODUCT", "pos_", "☃"],
)
def test_describe_is_total(action):
    description = describe(_event(action, {"unexpected": object()}))

    assert isinstance(description, str)
    assert description


def test_describe_empty_action_is_unknown_activity():
    assert describe(_event("")) == "Unknown activity"


def test_parse_action_returns_tagged_variants():
    assert parse_action("create_product") == CatalogAction(
        verb=CatalogVerb.CREATE, entity="product", tag="create_product"
    )
    assert parse_action("order_updated") == CatalogAction(
        verb=CatalogVerb.UPDATE, entity="order", tag="order_updated"
    )
    assert isinstance(parse_action("user_logout"), SessionAction)
    assert isinstance(parse_action("stock_adjusted"), InventoryAction)
    assert isinstance(parse_action("pos_return"), SaleAction)
    assert isinstance(parse_action("update_shop_profile"), SettingsAction)
    assert parse_action("archive_product") == UnrecognizedAction(tag="archive_product")


@pytest.mark.parametrize(
    ("action", "entity_table", "expected"),
    [
        ("user_login", "staff_login_sessions", ActivityCategory.LOGIN),
        ("user_logout", None, ActivityCategory.LOGIN),
        ("stock_adjusted", "inventory", ActivityCategory.INVENTORY),
        ("low_stock_alert", None, ActivityCategory.INVENTORY),
        ("pos_sale", "pos_transactions", ActivityCategory.POS),
        ("process_payment", None, ActivityCategory.POS),
        ("product_created", "products", ActivityCategory.PRODUCTS),
        ("create_category", None, ActivityCategory.CATEGORIES),
        ("update_supplier", "suppliers", ActivityCategory.SUPPLIERS),
        ("fulfill_order", None, ActivityCategory.ORDERS),
        ("customer_updated", "customers", ActivityCategory.CUSTOMERS),
        ("update_shop_settings", None, None),
    ],
)
def test_classify(action, entity_table, expected):
    assert classify(_event(action, entity_table=entity_table)) is expected


def test_matches_category_uses_table_or_keyword():
    event = _event("update_inventory", entity_table="products")

    assert matches_category(event, ActivityCategory.PRODUCTS)
    assert matches_category(event, ActivityCategory.INVENTORY)
    assert not matches_category(event, ActivityCategory.ORDERS)


def test_category_label_defaults_to_activity():
    assert category_label(ActivityCategory.LOGIN) == "Login/Logout"
    assert category_label(None) == "Activity"
