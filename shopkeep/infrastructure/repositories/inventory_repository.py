"""Read access to stock levels joined with their products."""

from __future__ import annotations

from sqlalchemy.orm import Session

from shopkeep.domain.entities import InventoryItem
from shopkeep.infrastructure.models import InventoryModel, ProductModel


class InventoryRepository:
    """Query and update :class:`InventoryItem` snapshots of a shop."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_shop(self, shop_id: int, *, low_stock_only: bool = False) -> list[InventoryItem]:
        """Return the inventory of ``shop_id`` ordered by product id.

        ``low_stock_only`` pushes the threshold comparison into SQL.
        """

        query = (
            self.session.query(InventoryModel, ProductModel)
            .join(ProductModel, InventoryModel.product_id == ProductModel.id)
            .filter(InventoryModel.shop_id == shop_id)
            .filter(ProductModel.shop_id == shop_id)
        )
        if low_stock_only:
            query = query.filter(InventoryModel.reorder_point > 0).filter(
                InventoryModel.quantity <= InventoryModel.reorder_point
            )
        rows = query.order_by(ProductModel.id).all()
        return [self._to_entity(inventory, product) for inventory, product in rows]

    def get_item(self, shop_id: int, product_id: int) -> InventoryItem | None:
        row = (
            self.session.query(InventoryModel, ProductModel)
            .join(ProductModel, InventoryModel.product_id == ProductModel.id)
            .filter(InventoryModel.shop_id == shop_id)
            .filter(InventoryModel.product_id == product_id)
            .one_or_none()
        )
        if row is None:
            return None
        inventory, product = row
        return self._to_entity(inventory, product)

    def set_quantity(self, shop_id: int, product_id: int, quantity: int) -> InventoryItem:
        model = (
            self.session.query(InventoryModel)
            .filter(InventoryModel.shop_id == shop_id)
            .filter(InventoryModel.product_id == product_id)
            .one_or_none()
        )
        if model is None:
            msg = f"Inventory for product {product_id} not found"
            raise ValueError(msg)
        model.quantity = quantity
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model, model.product)

    @staticmethod
    def _to_entity(inventory: InventoryModel, product: ProductModel) -> InventoryItem:
        return InventoryItem(
            product_id=product.id,
            product_name=product.name,
            sku=product.sku,
            quantity=inventory.quantity,
            reorder_point=inventory.reorder_point,
        )


__all__ = ["InventoryRepository"]
