"""Use case for registering the last login of a user."""

from sqlalchemy.orm import Session

from shopkeep.infrastructure.repositories import UserRepository
from shopkeep.utils import now_in_app_timezone


def record_login(session: Session, user_id: int) -> None:
    """Persist the last login timestamp for the given user."""

    UserRepository(session).update_last_login(user_id, now_in_app_timezone())
