"""SQLAlchemy models for shops and their catalog."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from shopkeep.infrastructure.database import Base


class ShopModel(Base):
    """Database representation of a shop (tenant)."""

    __tablename__ = "shops"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class ProductModel(Base):
    """Database representation of a catalog product."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    shop_id = Column(Integer, ForeignKey("shops.id"), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    sku = Column(String(64), nullable=True)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    inventory = relationship(
        "InventoryModel",
        back_populates="product",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="joined",
    )


class InventoryModel(Base):
    """Stock level and reorder threshold of a product."""

    __tablename__ = "inventory"
    __table_args__ = (UniqueConstraint("shop_id", "product_id"),)

    id = Column(Integer, primary_key=True, index=True)
    shop_id = Column(Integer, ForeignKey("shops.id"), nullable=False, index=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    quantity = Column(Integer, nullable=False, default=0)
    reorder_point = Column(Integer, nullable=False, default=0)

    product = relationship("ProductModel", back_populates="inventory")


__all__ = ["InventoryModel", "ProductModel", "ShopModel"]
