"""Persistence layer for catalog products and their stock row."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy.orm import Session

from shopkeep.domain.entities import Product
from shopkeep.infrastructure.models import InventoryModel, ProductModel


class ProductRepository:
    """Provide the few product operations the activity pipeline exercises."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, product: Product) -> Product:
        model = ProductModel(
            shop_id=product.shop_id,
            name=product.name,
            sku=product.sku,
            price=product.price,
        )
        model.inventory = InventoryModel(
            shop_id=product.shop_id,
            quantity=product.quantity,
            reorder_point=product.reorder_point,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, shop_id: int, product_id: int) -> Product | None:
        model = self._get_model(shop_id, product_id)
        return self._to_entity(model) if model else None

    def delete(self, shop_id: int, product_id: int) -> bool:
        """Delete a product of ``shop_id``.

        Returns ``True`` when a record was removed and ``False`` when the
        product does not exist in that shop.
        """

        model = self._get_model(shop_id, product_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _get_model(self, shop_id: int, product_id: int) -> ProductModel | None:
        return (
            self.session.query(ProductModel)
            .filter(ProductModel.shop_id == shop_id)
            .filter(ProductModel.id == product_id)
            .one_or_none()
        )

    @staticmethod
    def _to_entity(model: ProductModel) -> Product:
        inventory = model.inventory
        return Product(
            id=model.id,
            shop_id=model.shop_id,
            name=model.name,
            sku=model.sku,
            price=Decimal(model.price) if model.price is not None else Decimal("0"),
            quantity=inventory.quantity if inventory else 0,
            reorder_point=inventory.reorder_point if inventory else 0,
            created_at=model.created_at,
        )


__all__ = ["ProductRepository"]
