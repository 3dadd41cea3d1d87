"""Persistence helpers for staff login sessions."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from shopkeep.domain.entities import LoginSession
from shopkeep.infrastructure.models import LoginSessionModel
from shopkeep.utils import ensure_app_naive_datetime, ensure_app_timezone


class LoginSessionRepository:
    """Create, close and list :class:`LoginSession` rows for a shop."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, login_session: LoginSession) -> LoginSession:
        model = LoginSessionModel(
            shop_id=login_session.shop_id,
            user_id=login_session.actor_id,
            login_at=ensure_app_naive_datetime(login_session.login_at),
            ip_address=login_session.ip_address,
            user_agent=login_session.user_agent,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_open(
        self,
        shop_id: int,
        user_id: int,
        *,
        session_id: int | None = None,
    ) -> LoginSession | None:
        """Return the open session of ``user_id``.

        With ``session_id`` the lookup is restricted to that session; otherwise
        the most recent open session is returned.
        """

        query = (
            self.session.query(LoginSessionModel)
            .filter(LoginSessionModel.shop_id == shop_id)
            .filter(LoginSessionModel.user_id == user_id)
            .filter(LoginSessionModel.logout_at.is_(None))
        )
        if session_id is not None:
            query = query.filter(LoginSessionModel.id == session_id)
        model = (
            query.order_by(LoginSessionModel.login_at.desc(), LoginSessionModel.id.desc())
            .limit(1)
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def close(
        self, session_id: int, *, logout_at: datetime, duration_minutes: int
    ) -> LoginSession:
        model = self.session.get(LoginSessionModel, session_id)
        if model is None:
            msg = f"Login session with id {session_id} not found"
            raise ValueError(msg)
        model.logout_at = ensure_app_naive_datetime(logout_at)
        model.duration_minutes = duration_minutes
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_shop(self, shop_id: int, *, limit: int | None = 100) -> Sequence[LoginSession]:
        query = (
            self.session.query(LoginSessionModel)
            .filter(LoginSessionModel.shop_id == shop_id)
            .order_by(LoginSessionModel.login_at.desc(), LoginSessionModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_active(self, shop_id: int) -> Sequence[LoginSession]:
        query = (
            self.session.query(LoginSessionModel)
            .filter(LoginSessionModel.shop_id == shop_id)
            .filter(LoginSessionModel.logout_at.is_(None))
            .order_by(LoginSessionModel.login_at.desc(), LoginSessionModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: LoginSessionModel) -> LoginSession:
        return LoginSession(
            id=model.id,
            shop_id=model.shop_id,
            actor_id=model.user_id,
            login_at=ensure_app_timezone(model.login_at),
            logout_at=ensure_app_timezone(model.logout_at),
            duration_minutes=model.duration_minutes,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
        )


__all__ = ["LoginSessionRepository"]
