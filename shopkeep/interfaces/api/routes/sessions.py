"""Endpoints listing staff login sessions."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shopkeep.application.use_cases.activity import (
    list_active_sessions,
    list_login_sessions,
)
from shopkeep.domain.entities import LoginSession, User
from shopkeep.infrastructure.database import get_db
from shopkeep.infrastructure.diagnostics import ActivityDiagnostics
from shopkeep.interfaces.api.dependencies import get_diagnostics, require_shop_admin
from shopkeep.interfaces.api.schemas import LoginSessionRead

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _session_to_schema(login_session: LoginSession) -> LoginSessionRead:
    return LoginSessionRead(
        id=login_session.id,
        shop_id=login_session.shop_id,
        actor_id=login_session.actor_id,
        login_at=login_session.login_at,
        logout_at=login_session.logout_at,
        duration_minutes=login_session.duration_minutes,
        ip_address=login_session.ip_address,
        user_agent=login_session.user_agent,
        is_active=login_session.is_active,
    )


@router.get("", response_model=list[LoginSessionRead])
def read_login_sessions(
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_shop_admin),
    diagnostics: ActivityDiagnostics = Depends(get_diagnostics),
) -> list[LoginSessionRead]:
    sessions = list_login_sessions(
        db, current_user.shop_id, limit=limit, diagnostics=diagnostics
    )
    return [_session_to_schema(item) for item in sessions]


@router.get("/active", response_model=list[LoginSessionRead])
def read_active_sessions(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_shop_admin),
    diagnostics: ActivityDiagnostics = Depends(get_diagnostics),
) -> list[LoginSessionRead]:
    """Return the sessions of the shop that have not been logged out yet."""

    sessions = list_active_sessions(db, current_user.shop_id, diagnostics=diagnostics)
    return [_session_to_schema(item) for item in sessions]


__all__ = ["router"]
