"""Use cases for registering shops and their members."""

from sqlalchemy.orm import Session

from shopkeep.domain.entities import ROLE_SHOP_ADMIN, ROLE_STAFF, Shop, User
from shopkeep.infrastructure.repositories import ShopRepository, UserRepository
from shopkeep.infrastructure.security import get_password_hash

ALLOWED_ROLES = (ROLE_SHOP_ADMIN, ROLE_STAFF)


def create_user(
    session: Session,
    *,
    shop_id: int,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    role: str = ROLE_STAFF,
) -> User:
    """Create a member of ``shop_id`` ensuring unique email addresses."""

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ValueError("Email is already registered")
    if role not in ALLOWED_ROLES:
        raise ValueError(f"Role {role!r} is not allowed")
    if not password:
        raise ValueError("Password is required")
    if ShopRepository(session).get(shop_id) is None:
        raise ValueError("Shop not found")

    return repository.create(
        User(
            id=None,
            shop_id=shop_id,
            first_name=first_name.strip(),
            last_name=(last_name or "").strip(),
            email=email,
            password=get_password_hash(password),
            role=role,
            is_active=True,
            last_login=None,
            created_at=None,
        )
    )


def create_shop_with_owner(
    session: Session,
    *,
    shop_name: str,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
) -> tuple[Shop, User]:
    """Create a shop and its first administrator."""

    if not shop_name.strip():
        raise ValueError("Shop name is required")
    if UserRepository(session).get_by_email(email):
        raise ValueError("Email is already registered")

    shop = ShopRepository(session).create(shop_name.strip())
    owner = create_user(
        session,
        shop_id=shop.id,
        first_name=first_name,
        last_name=last_name,
        email=email,
        password=password,
        role=ROLE_SHOP_ADMIN,
    )
    return shop, owner
