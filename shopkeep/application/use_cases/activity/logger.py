"""Best-effort writer for the shop activity log.

Feature code records what happened through an :class:`ActivityLogger`
created once by the application factory. Every write happens in a session of
its own, so an audit failure can never roll back the business transaction
that triggered it, and failures are reported through :class:`WriteResult`
instead of exceptions.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopkeep.domain.entities import (
    LOW_STOCK_ALERT,
    ActivityEvent,
    ActivityEventInput,
    LoginSession,
)
from shopkeep.domain.exceptions import ActivityWriteError
from shopkeep.infrastructure.diagnostics import ActivityDiagnostics
from shopkeep.infrastructure.notifications import ActivitySignalPublisher
from shopkeep.infrastructure.repositories import (
    ActivityEventRepository,
    LoginSessionRepository,
)
from shopkeep.utils import now_in_app_timezone, whole_minutes_between

logger = logging.getLogger(__name__)

LOGIN_SESSIONS_TABLE = "staff_login_sessions"
POS_ACTIONS = ("pos_sale", "pos_return", "pos_refund")

# Raised while storing a row. Drivers reject out-of-range integers and
# unsupported values without going through SQLAlchemy's wrappers.
STORE_ERRORS = (SQLAlchemyError, OverflowError, TypeError, ValueError)


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a single append."""

    event_id: int | None = None
    error: ActivityWriteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ActivityLogger:
    """Append events and track login sessions without ever raising."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        diagnostics: ActivityDiagnostics | None = None,
        publisher: ActivitySignalPublisher | None = None,
    ) -> None:
        self._session_factory = session_factory
        self.diagnostics = diagnostics or ActivityDiagnostics()
        self._publisher = publisher

    def append(self, event_input: ActivityEventInput) -> WriteResult:
        """Persist ``event_input`` and signal the shop's subscribers."""

        try:
            event = self._build_event(event_input)
        except ActivityWriteError as exc:
            return self._failed(event_input.action, exc)

        session = self._session_factory()
        try:
            saved = ActivityEventRepository(session).create(event)
        except STORE_ERRORS as exc:
            session.rollback()
            error = ActivityWriteError(f"Could not store activity {event.action!r}")
            error.__cause__ = exc
            return self._failed(event.action, error)
        finally:
            session.close()

        logger.debug(
            "Recorded activity %s #%s for shop %s", saved.action, saved.id, saved.shop_id
        )
        self._publish(saved)
        return WriteResult(event_id=saved.id)

    def _publish(self, event: ActivityEvent) -> None:
        if self._publisher is None:
            return
        try:
            self._publisher.dispatch(event)
        except Exception as exc:
            self.diagnostics.record_publish_failure(event.shop_id, exc)

    def track_login(
        self,
        shop_id: int,
        actor_id: int,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> int | None:
        """Open a login session and record ``user_login``.

        Returns the new session id, or ``None`` when the session could not be
        stored.
        """

        if shop_id is None or actor_id is None:
            self.diagnostics.record_write_failure(
                "user_login", "shop_id and actor_id are required to track a login"
            )
            return None

        login_at = now_in_app_timezone()
        session = self._session_factory()
        try:
            login_session = LoginSessionRepository(session).create(
                LoginSession(
                    id=None,
                    shop_id=shop_id,
                    actor_id=actor_id,
                    login_at=login_at,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
            )
        except STORE_ERRORS as exc:
            session.rollback()
            self.diagnostics.record_write_failure("user_login", exc)
            return None
        finally:
            session.close()

        self.append(
            ActivityEventInput(
                shop_id=shop_id,
                actor_id=actor_id,
                action="user_login",
                entity_table=LOGIN_SESSIONS_TABLE,
                entity_id=login_session.id,
                metadata={
                    "session_id": login_session.id,
                    "login_time": login_at.isoformat(),
                },
            )
        )
        return login_session.id

    def track_logout(
        self, shop_id: int, actor_id: int, session_id: int | None = None
    ) -> bool:
        """Close the actor's open session and record ``user_logout``.

        Without ``session_id`` the most recent open session of the actor in
        ``shop_id`` is closed. Returns ``False`` when there is nothing to close.
        """

        logout_at = now_in_app_timezone()
        session = self._session_factory()
        try:
            repository = LoginSessionRepository(session)
            open_session = repository.get_open(shop_id, actor_id, session_id=session_id)
            if open_session is None:
                logger.info(
                    "No open session to close for user %s in shop %s", actor_id, shop_id
                )
                return False
            closed = repository.close(
                open_session.id,
                logout_at=logout_at,
                duration_minutes=whole_minutes_between(open_session.login_at, logout_at),
            )
        except STORE_ERRORS as exc:
            session.rollback()
            self.diagnostics.record_write_failure("user_logout", exc)
            return False
        finally:
            session.close()

        self.append(
            ActivityEventInput(
                shop_id=shop_id,
                actor_id=actor_id,
                action="user_logout",
                entity_table=LOGIN_SESSIONS_TABLE,
                entity_id=closed.id,
                metadata={
                    "session_id": closed.id,
                    "logout_time": logout_at.isoformat(),
                    "duration_minutes": closed.duration_minutes,
                },
            )
        )
        return True

    def track_product_activity(
        self,
        shop_id: int,
        actor_id: int | None,
        action: str,
        product_id: int,
        product_name: str,
        *,
        sku: str | None = None,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> WriteResult:
        payload = {**(metadata or {}), "product_id": product_id, "product_name": product_name}
        if sku:
            payload["sku"] = sku
        return self.append(
            ActivityEventInput(
                shop_id=shop_id,
                actor_id=actor_id,
                action=action,
                entity_table="products",
                entity_id=product_id,
                metadata=payload,
                old_values=old_values,
                new_values=new_values,
            )
        )

    def track_order_activity(
        self,
        shop_id: int,
        actor_id: int | None,
        action: str,
        order_id: int | str,
        *,
        order_number: str | None = None,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> WriteResult:
        payload = {**(metadata or {}), "order_id": order_id}
        if order_number:
            payload["order_number"] = order_number
        return self.append(
            ActivityEventInput(
                shop_id=shop_id,
                actor_id=actor_id,
                action=action,
                entity_table="orders",
                entity_id=order_id,
                metadata=payload,
                old_values=old_values,
                new_values=new_values,
            )
        )

    def track_customer_activity(
        self,
        shop_id: int,
        actor_id: int | None,
        action: str,
        customer_id: int | str,
        *,
        name: str | None = None,
        email: str | None = None,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> WriteResult:
        payload = {**(metadata or {}), "customer_id": customer_id}
        if name:
            payload["name"] = name
        if email:
            payload["email"] = email
        return self.append(
            ActivityEventInput(
                shop_id=shop_id,
                actor_id=actor_id,
                action=action,
                entity_table="customers",
                entity_id=customer_id,
                metadata=payload,
                old_values=old_values,
                new_values=new_values,
            )
        )

    def track_pos_transaction(
        self,
        shop_id: int,
        actor_id: int | None,
        action: str,
        transaction_id: str,
        amount: Decimal | float,
        *,
        metadata: dict[str, Any] | None = None,
    ) -> WriteResult:
        if action not in POS_ACTIONS:
            return self._failed(action, ActivityWriteError(f"Unsupported POS action {action!r}"))
        payload = {
            **(metadata or {}),
            "amount": amount,
            "transaction_id": transaction_id,
        }
        return self.append(
            ActivityEventInput(
                shop_id=shop_id,
                actor_id=actor_id,
                action=action,
                entity_table="pos_transactions",
                entity_id=transaction_id,
                metadata=payload,
                new_values={"amount": amount, "transaction_id": transaction_id},
            )
        )

    def track_inventory_activity(
        self,
        shop_id: int,
        actor_id: int | None,
        action: str,
        product_id: int,
        quantity: int,
        *,
        previous_quantity: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> WriteResult:
        """Record a stock event for ``product_id``.

        ``quantity`` is the stock level after the change. When
        ``previous_quantity`` is known it is kept as the before value.
        """

        payload = {**(metadata or {}), "product_id": product_id}
        if action == LOW_STOCK_ALERT:
            payload.setdefault("current_stock", quantity)
        else:
            payload.setdefault("new_stock", quantity)
        if previous_quantity is not None:
            payload.setdefault("previous_stock", previous_quantity)
        return self.append(
            ActivityEventInput(
                shop_id=shop_id,
                actor_id=actor_id,
                action=action,
                entity_table="inventory",
                entity_id=product_id,
                metadata=payload,
                old_values=(
                    {"quantity": previous_quantity, "product_id": product_id}
                    if previous_quantity is not None
                    else None
                ),
                new_values={"quantity": quantity, "product_id": product_id},
            )
        )

    @staticmethod
    def _build_event(event_input: ActivityEventInput) -> ActivityEvent:
        if event_input.shop_id is None:
            raise ActivityWriteError("shop_id is required")
        action = (event_input.action or "").strip()
        if not action:
            raise ActivityWriteError("action is required")
        entity_id = event_input.entity_id
        return ActivityEvent(
            id=None,
            shop_id=event_input.shop_id,
            actor_id=event_input.actor_id,
            action=action,
            entity_table=event_input.entity_table,
            entity_id=str(entity_id) if entity_id is not None else None,
            metadata=_to_json_object(event_input.metadata, "metadata") or {},
            occurred_at=event_input.occurred_at,
            old_values=_to_json_object(event_input.old_values, "old_values"),
            new_values=_to_json_object(event_input.new_values, "new_values"),
        )

    def _failed(self, action: str | None, error: ActivityWriteError) -> WriteResult:
        self.diagnostics.record_write_failure(action, error.__cause__ or error)
        return WriteResult(error=error)


def _to_json_object(value: Any, field_name: str) -> dict[str, Any] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ActivityWriteError(f"{field_name} must be a mapping")
    try:
        # Decimals, datetimes and UUIDs are stored as their string form.
        return json.loads(json.dumps(value, default=str))
    except (TypeError, ValueError) as exc:
        raise ActivityWriteError(f"{field_name} is not JSON serializable") from exc


__all__ = ["ActivityLogger", "LOGIN_SESSIONS_TABLE", "STORE_ERRORS", "WriteResult"]
