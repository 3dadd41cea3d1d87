"""Use case for adding a product to a shop catalog."""

from decimal import Decimal

from sqlalchemy.orm import Session

from shopkeep.domain.entities import InventoryItem, Product
from shopkeep.infrastructure.repositories import ProductRepository

from ..activity.logger import ActivityLogger
from ..inventory.low_stock import check_low_stock


def create_product(
    session: Session,
    activity_logger: ActivityLogger,
    *,
    shop_id: int,
    actor_id: int | None,
    name: str,
    sku: str | None = None,
    price: Decimal = Decimal("0"),
    quantity: int = 0,
    reorder_point: int = 0,
) -> Product:
    """Create the product with its stock row and record ``product_created``."""

    name = (name or "").strip()
    if not name:
        raise ValueError("Product name is required")
    if quantity < 0:
        raise ValueError("Quantity cannot be negative")
    if reorder_point < 0:
        raise ValueError("Reorder point cannot be negative")
    if price < 0:
        raise ValueError("Price cannot be negative")

    product = ProductRepository(session).create(
        Product(
            id=None,
            shop_id=shop_id,
            name=name,
            sku=sku,
            price=price,
            quantity=quantity,
            reorder_point=reorder_point,
            created_at=None,
        )
    )

    activity_logger.track_product_activity(
        shop_id,
        actor_id,
        "product_created",
        product.id,
        product.name,
        sku=product.sku,
        new_values=product_snapshot(product),
    )
    check_low_stock(
        activity_logger,
        shop_id,
        InventoryItem(
            product_id=product.id,
            product_name=product.name,
            sku=product.sku,
            quantity=product.quantity,
            reorder_point=product.reorder_point,
        ),
        actor_id=actor_id,
    )
    return product


def product_snapshot(product: Product) -> dict:
    """Field values of ``product`` as recorded in the activity log."""

    return {
        "name": product.name,
        "sku": product.sku,
        "price": str(product.price),
        "quantity": product.quantity,
        "reorder_point": product.reorder_point,
    }
