"""Shared fixtures: an isolated SQLite database and seeded shops."""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "shopkeep_test_api.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ.pop("LOW_STOCK_DEDUPLICATE", None)

from shopkeep.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from shopkeep.application.use_cases.activity import ActivityLogger  # noqa: E402
from shopkeep.infrastructure.database import Base, initialize_database  # noqa: E402
from shopkeep.infrastructure.diagnostics import ActivityDiagnostics  # noqa: E402
from shopkeep.infrastructure.models import (  # noqa: E402
    InventoryModel,
    ProductModel,
    ShopModel,
    UserModel,
)


@dataclass
class SeededShop:
    shop_id: int
    owner_id: int
    staff_id: int


@pytest.fixture()
def engine():
    """In-memory database shared by every session of a test."""

    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    initialize_database(test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def diagnostics() -> ActivityDiagnostics:
    return ActivityDiagnostics()


@pytest.fixture()
def activity_logger(session_factory, diagnostics) -> ActivityLogger:
    return ActivityLogger(session_factory, diagnostics=diagnostics)


def seed_shop(session, name: str, *, owner_email: str, staff_email: str) -> SeededShop:
    """Insert a shop with an owner and a staff member (plain hashes, no login)."""

    shop = ShopModel(name=name)
    session.add(shop)
    session.flush()
    owner = UserModel(
        shop_id=shop.id,
        first_name="Olivia",
        last_name="Owner",
        email=owner_email,
        password="not-a-real-hash",
        role="shop_admin",
    )
    staff = UserModel(
        shop_id=shop.id,
        first_name="Sam",
        last_name="Staff",
        email=staff_email,
        password="not-a-real-hash",
        role="staff",
    )
    session.add_all([owner, staff])
    session.commit()
    return SeededShop(shop_id=shop.id, owner_id=owner.id, staff_id=staff.id)


def seed_product(
    session,
    shop_id: int,
    name: str,
    *,
    quantity: int,
    reorder_point: int,
    sku: str | None = None,
) -> int:
    product = ProductModel(shop_id=shop_id, name=name, sku=sku, price=0)
    product.inventory = InventoryModel(
        shop_id=shop_id, quantity=quantity, reorder_point=reorder_point
    )
    session.add(product)
    session.commit()
    return product.id


@pytest.fixture()
def shop(db_session) -> SeededShop:
    return seed_shop(
        db_session, "Corner Store", owner_email="owner@corner.test", staff_email="sam@corner.test"
    )


@pytest.fixture()
def other_shop(db_session) -> SeededShop:
    return seed_shop(
        db_session, "Harbour Deli", owner_email="owner@deli.test", staff_email="sam@deli.test"
    )


@pytest.fixture()
def make_product(db_session):
    """Return a helper inserting a product and its stock row."""

    def _make(shop_id: int, name: str, *, quantity: int, reorder_point: int, sku=None) -> int:
        return seed_product(
            db_session, shop_id, name, quantity=quantity, reorder_point=reorder_point, sku=sku
        )

    return _make
