"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from shopkeep.application.use_cases.activity import ActivityLogger
from shopkeep.config import Settings, get_settings
from shopkeep.domain.entities import User
from shopkeep.infrastructure.database import get_db
from shopkeep.infrastructure.diagnostics import ActivityDiagnostics
from shopkeep.infrastructure.repositories import UserRepository
from shopkeep.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_exception(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token.

    The token must name the user (``sub``) and the shop it was issued for;
    a token whose shop no longer matches the user is rejected.
    """

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    subject = payload.get("sub")
    shop_id = payload.get("shop_id")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise _credentials_exception() from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _credentials_exception("User not found")
    if shop_id != user.shop_id:
        raise _credentials_exception()
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    return current_user


def require_shop_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user administers their shop."""

    if not current_user.is_shop_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return current_user


def get_activity_logger(request: Request) -> ActivityLogger:
    """Return the writer created by the application factory."""

    return request.app.state.activity_logger


def get_diagnostics(
    activity_logger: ActivityLogger = Depends(get_activity_logger),
) -> ActivityDiagnostics:
    return activity_logger.diagnostics


def get_app_settings() -> Settings:
    return get_settings()


__all__ = [
    "get_activity_logger",
    "get_app_settings",
    "get_current_active_user",
    "get_current_user",
    "get_diagnostics",
    "oauth2_scheme",
    "require_shop_admin",
    "resolve_current_user",
]
