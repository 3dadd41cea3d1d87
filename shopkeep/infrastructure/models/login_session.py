"""SQLAlchemy model for staff login sessions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from shopkeep.infrastructure.database import Base


class LoginSessionModel(Base):
    """Database representation of a login/logout bracket."""

    __tablename__ = "staff_login_sessions"

    id = Column(Integer, primary_key=True, index=True)
    shop_id = Column(Integer, ForeignKey("shops.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    login_at = Column(DateTime(), nullable=False)
    logout_at = Column(DateTime(), nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(255), nullable=True)


__all__ = ["LoginSessionModel"]
