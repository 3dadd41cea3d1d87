"""SQLAlchemy model for the append-only shop activity log."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON

from shopkeep.infrastructure.database import Base
from shopkeep.utils import ensure_app_naive_datetime, now_in_app_timezone

_metadata_json_type = JSONB().with_variant(JSON(), "sqlite")


def _naive_now():
    return ensure_app_naive_datetime(now_in_app_timezone())


class ActivityEventModel(Base):
    """Database representation of activity events.

    ``id`` is assigned by the database and doubles as the insertion sequence
    used to break ties between events sharing a timestamp.
    """

    __tablename__ = "activity_events"
    __table_args__ = (
        Index("ix_activity_events_shop_occurred", "shop_id", "occurred_at"),
        Index("ix_activity_events_shop_action", "shop_id", "action"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    shop_id = Column(Integer, ForeignKey("shops.id"), nullable=False, index=True)
    actor_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    action = Column(String(64), nullable=False)
    entity_table = Column(String(64), nullable=True)
    entity_id = Column(String(64), nullable=True)
    # ``metadata`` is reserved on declarative classes.
    payload = Column("metadata", _metadata_json_type, nullable=False, default=dict)
    old_values = Column(_metadata_json_type, nullable=True)
    new_values = Column(_metadata_json_type, nullable=True)
    occurred_at = Column(DateTime(), nullable=False, default=_naive_now)


__all__ = ["ActivityEventModel"]
