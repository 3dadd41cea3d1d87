"""Typed view over the free-form ``action`` tags stored in the activity log.

Writers store plain strings. Readers parse them into one of the variants below
so every consumer works against a closed set of shapes; tags this version does
not know about are wrapped in :class:`UnrecognizedAction` instead of rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class CatalogVerb(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# Entity names used in ``<verb>_<entity>`` and ``<entity>_<verb>ed`` tags.
CATALOG_ENTITIES: tuple[str, ...] = (
    "product",
    "category",
    "supplier",
    "customer",
    "order",
    "sale",
    "user",
)

_PAST_TENSE = {
    "created": CatalogVerb.CREATE,
    "updated": CatalogVerb.UPDATE,
    "deleted": CatalogVerb.DELETE,
}


@dataclass(frozen=True)
class CatalogAction:
    """Creation, update or deletion of a catalog or business record."""

    verb: CatalogVerb
    entity: str
    tag: str


@dataclass(frozen=True)
class SessionAction:
    """Staff member logging in or out."""

    kind: str  # "login" | "logout"
    tag: str


@dataclass(frozen=True)
class InventoryAction:
    """Stock level change or alert."""

    kind: str
    tag: str


@dataclass(frozen=True)
class SaleAction:
    """Point-of-sale and order fulfilment events."""

    kind: str
    tag: str


@dataclass(frozen=True)
class SettingsAction:
    """Changes to the shop configuration."""

    kind: str
    tag: str


@dataclass(frozen=True)
class UnrecognizedAction:
    """Any tag this version does not know how to interpret."""

    tag: str


ActivityAction = Union[
    CatalogAction,
    SessionAction,
    InventoryAction,
    SaleAction,
    SettingsAction,
    UnrecognizedAction,
]

SESSION_ACTIONS = {"user_login": "login", "user_logout": "logout"}
INVENTORY_ACTIONS = frozenset(
    {
        "adjust_stock",
        "update_inventory",
        "stock_adjusted",
        "inventory_counted",
        "low_stock_alert",
    }
)
SALE_ACTIONS = frozenset(
    {"process_payment", "fulfill_order", "pos_sale", "pos_return", "pos_refund"}
)
SETTINGS_ACTIONS = frozenset({"update_shop_settings", "update_shop_profile"})

LOW_STOCK_ALERT = "low_stock_alert"
STOCK_CHANGE_ACTIONS = frozenset(
    {"stock_adjusted", "adjust_stock", "update_inventory", "inventory_counted"}
)


def parse_action(tag: str | None) -> ActivityAction:
    """Map a stored ``action`` string onto its typed variant."""

    normalized = (tag or "").strip().lower()

    if normalized in SESSION_ACTIONS:
        return SessionAction(kind=SESSION_ACTIONS[normalized], tag=normalized)
    if normalized in INVENTORY_ACTIONS:
        return InventoryAction(kind=normalized, tag=normalized)
    if normalized in SALE_ACTIONS:
        return SaleAction(kind=normalized, tag=normalized)
    if normalized in SETTINGS_ACTIONS:
        return SettingsAction(kind=normalized, tag=normalized)

    head, _, tail = normalized.partition("_")
    if tail in CATALOG_ENTITIES:
        try:
            return CatalogAction(verb=CatalogVerb(head), entity=tail, tag=normalized)
        except ValueError:
            pass
    if head in CATALOG_ENTITIES and tail in _PAST_TENSE:
        return CatalogAction(verb=_PAST_TENSE[tail], entity=head, tag=normalized)

    return UnrecognizedAction(tag=tag or "")


__all__ = [
    "ActivityAction",
    "CATALOG_ENTITIES",
    "CatalogAction",
    "CatalogVerb",
    "InventoryAction",
    "LOW_STOCK_ALERT",
    "SaleAction",
    "SessionAction",
    "SettingsAction",
    "STOCK_CHANGE_ACTIONS",
    "UnrecognizedAction",
    "parse_action",
]
