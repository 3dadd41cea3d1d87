"""Use cases listing staff login sessions."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopkeep.domain.entities import LoginSession
from shopkeep.infrastructure.diagnostics import ActivityDiagnostics
from shopkeep.infrastructure.repositories import LoginSessionRepository

from .feed import report_query_failure


def list_login_sessions(
    session: Session,
    shop_id: int,
    *,
    limit: int = 100,
    diagnostics: ActivityDiagnostics | None = None,
) -> list[LoginSession]:
    """Return the most recent login sessions of ``shop_id``."""

    try:
        return list(
            LoginSessionRepository(session).list_for_shop(shop_id, limit=max(1, limit))
        )
    except SQLAlchemyError as exc:
        session.rollback()
        report_query_failure(diagnostics, shop_id, exc)
        return []


def list_active_sessions(
    session: Session,
    shop_id: int,
    *,
    diagnostics: ActivityDiagnostics | None = None,
) -> list[LoginSession]:
    """Return the sessions of ``shop_id`` that have not been logged out."""

    try:
        return list(LoginSessionRepository(session).list_active(shop_id))
    except SQLAlchemyError as exc:
        session.rollback()
        report_query_failure(diagnostics, shop_id, exc)
        return []


__all__ = ["list_active_sessions", "list_login_sessions"]
