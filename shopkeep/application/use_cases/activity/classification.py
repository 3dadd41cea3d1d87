"""Pure helpers that turn stored activity events into human readable text.

Nothing in this module touches the database. ``describe`` and ``classify``
must accept any event ever written, including actions added by newer
writers, so every branch has a generic fallback.
"""

from __future__ import annotations

from typing import Any, Mapping

from shopkeep.domain.entities import (
    CATEGORY_PRECEDENCE,
    CATEGORY_RULES,
    ActivityCategory,
    ActivityEvent,
    CatalogAction,
    CatalogVerb,
    InventoryAction,
    SaleAction,
    SessionAction,
    SettingsAction,
    coerce_metadata,
    parse_action,
)

NOT_AVAILABLE = "N/A"
UNKNOWN_ACTIVITY = "Unknown activity"

_VERB_PREFIX = {
    CatalogVerb.CREATE: "Created new",
    CatalogVerb.UPDATE: "Updated",
    CatalogVerb.DELETE: "Deleted",
}

# Metadata keys tried, in order, to name the affected record.
_SUBJECT_KEYS: dict[str, tuple[str, ...]] = {
    "product": ("name", "title", "product_name"),
    "category": ("name",),
    "supplier": ("name", "company_name"),
    "customer": ("name", "email"),
    "order": ("order_number",),
    "sale": ("order_number", "transaction_id"),
    "user": ("first_name", "email"),
}
_SALE_REFERENCE_KEYS = ("order_number", "transaction_id")

_INVENTORY_PREFIX = {
    "update_inventory": "Updated inventory",
    "adjust_stock": "Adjusted stock",
    "stock_adjusted": "Adjusted stock",
    "inventory_counted": "Counted inventory",
    "low_stock_alert": "Low stock alert",
}
_SALE_PREFIX = {
    "process_payment": "Processed payment",
    "pos_sale": "POS sale",
    "pos_return": "POS return",
    "pos_refund": "POS refund",
}
_SETTINGS_TEXT = {
    "update_shop_settings": "Updated shop settings",
    "update_shop_profile": "Updated shop profile",
}


def first_present(metadata: Mapping[str, Any], keys: tuple[str, ...]) -> str:
    """Return the first non-empty value among ``keys`` or ``"N/A"``."""

    for key in keys:
        value = metadata.get(key)
        if value not in (None, ""):
            return str(value)
    return NOT_AVAILABLE


def describe(event: ActivityEvent) -> str:
    """Render ``event`` as a sentence for the staff activity log."""

    metadata = coerce_metadata(event.metadata)
    action = parse_action(event.action)

    if isinstance(action, SessionAction):
        if action.kind == "login":
            return "Logged in to the system."
        return "Logged out of the system."

    if isinstance(action, CatalogAction):
        keys = _SUBJECT_KEYS.get(action.entity, ("name",))
        subject = first_present(metadata, keys)
        return f"{_VERB_PREFIX[action.verb]} {action.entity}: {subject}"

    if isinstance(action, InventoryAction):
        text = f"{_INVENTORY_PREFIX[action.kind]}: {first_present(metadata, ('product_name', 'name'))}"
        new_stock = metadata.get("new_stock")
        if action.kind == "stock_adjusted" and new_stock is not None:
            text = f"{text} (new stock: {new_stock})"
        return text

    if isinstance(action, SaleAction):
        if action.kind == "fulfill_order":
            return f"Fulfilled order: {first_present(metadata, ('order_number',))}"
        text = f"{_SALE_PREFIX[action.kind]}: {first_present(metadata, _SALE_REFERENCE_KEYS)}"
        amount = metadata.get("amount")
        if action.kind.startswith("pos_") and amount is not None:
            text = f"{text} (amount: {amount})"
        return text

    if isinstance(action, SettingsAction):
        return _SETTINGS_TEXT[action.kind]

    return _fallback_description(event)


def _fallback_description(event: ActivityEvent) -> str:
    action = (event.action or "").strip()
    if not action:
        return UNKNOWN_ACTIVITY
    parts = [action]
    if event.entity_table:
        parts.append(f"on {event.entity_table}")
    if event.entity_id:
        parts.append(f"(ID: {event.entity_id})")
    return " ".join(parts)


def matches_category(event: ActivityEvent, category: ActivityCategory) -> bool:
    """Mirror of the SQL category predicate used by the repository."""

    rule = CATEGORY_RULES[category]
    if event.entity_table and event.entity_table in rule.tables:
        return True
    action = (event.action or "").lower()
    return any(keyword in action for keyword in rule.action_keywords)


def classify(event: ActivityEvent) -> ActivityCategory | None:
    """Return the single category reported for ``event`` (``None`` if none)."""

    for category in CATEGORY_PRECEDENCE:
        if matches_category(event, category):
            return category
    return None


def category_label(category: ActivityCategory | None) -> str:
    return category.label if category is not None else "Activity"


__all__ = [
    "NOT_AVAILABLE",
    "UNKNOWN_ACTIVITY",
    "category_label",
    "classify",
    "describe",
    "first_present",
    "matches_category",
]
