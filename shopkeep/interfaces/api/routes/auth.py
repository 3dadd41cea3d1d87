"""Endpoints for obtaining tokens and closing login sessions."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from shopkeep.application.use_cases.activity import ActivityLogger
from shopkeep.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    record_login,
)
from shopkeep.config import get_settings
from shopkeep.domain.entities import User
from shopkeep.infrastructure.database import get_db
from shopkeep.infrastructure.security import create_access_token
from shopkeep.interfaces.api.dependencies import (
    get_activity_logger,
    get_current_active_user,
)
from shopkeep.interfaces.api.schemas import LogoutRequest, LogoutResponse, Token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=Token)
def login_for_access_token(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
):
    """Authenticate by email, open a login session and return a JWT."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
            headers={"WWW-Authenticate": "Bearer"},
        )

    settings = get_settings()
    access_token = create_access_token(
        data={"sub": str(user.id), "shop_id": user.shop_id, "role": user.role},
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )
    record_login(db, user.id)
    session_id = activity_logger.track_login(
        user.shop_id,
        user.id,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    if session_id is None:
        logger.warning("Login of user %s was not recorded as a session", user.id)

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "role": user.role,
        "shop_id": user.shop_id,
        "session_id": session_id,
    }


@router.post("/logout", response_model=LogoutResponse)
def logout(
    payload: LogoutRequest | None = None,
    current_user: User = Depends(get_current_active_user),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
) -> LogoutResponse:
    """Close the caller's login session; closing nothing is not an error."""

    closed = activity_logger.track_logout(
        current_user.shop_id,
        current_user.id,
        session_id=payload.session_id if payload else None,
    )
    return LogoutResponse(closed=closed)


__all__ = ["router"]
