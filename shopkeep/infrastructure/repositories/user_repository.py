"""Persistence layer for shop members and shops."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy.orm import Session

from shopkeep.domain.entities import Shop, User
from shopkeep.infrastructure.models import ShopModel, UserModel
from shopkeep.utils import ensure_app_naive_datetime


class UserRepository:
    """Provide lookup operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, shop_id: int, user_ids: Iterable[int]) -> dict[int, User]:
        """Return members of ``shop_id`` keyed by id; unknown ids are skipped."""

        ids = {user_id for user_id in user_ids if user_id is not None}
        if not ids:
            return {}
        models = (
            self.session.query(UserModel)
            .filter(UserModel.shop_id == shop_id)
            .filter(UserModel.id.in_(ids))
            .all()
        )
        return {model.id: self._to_entity(model) for model in models}

    def create(self, user: User) -> User:
        model = UserModel(
            shop_id=user.shop_id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email.strip().lower(),
            password=user.password,
            role=user.role,
            is_active=user.is_active,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_last_login(self, user_id: int, last_login: datetime) -> None:
        model = self.session.get(UserModel, user_id)
        if model is None:
            return
        model.last_login = ensure_app_naive_datetime(last_login)
        self.session.add(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            shop_id=model.shop_id,
            first_name=model.first_name,
            last_name=model.last_name or "",
            email=model.email,
            password=model.password,
            role=model.role,
            is_active=bool(model.is_active),
            last_login=model.last_login,
            created_at=model.created_at,
        )


class ShopRepository:
    """Create and fetch shops (tenants)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, shop_id: int) -> Shop | None:
        model = self.session.get(ShopModel, shop_id)
        return self._to_entity(model) if model else None

    def create(self, name: str) -> Shop:
        model = ShopModel(name=name)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ShopModel) -> Shop:
        return Shop(id=model.id, name=model.name, created_at=model.created_at)


__all__ = ["ShopRepository", "UserRepository"]
