"""Use case for setting the stock level of a product."""

from sqlalchemy.orm import Session

from shopkeep.domain.entities import InventoryItem
from shopkeep.infrastructure.repositories import InventoryRepository

from ..activity.logger import ActivityLogger
from ..inventory.low_stock import check_low_stock
from .errors import ProductNotFoundError


def adjust_stock(
    session: Session,
    activity_logger: ActivityLogger,
    *,
    shop_id: int,
    actor_id: int | None,
    product_id: int,
    quantity: int,
) -> InventoryItem:
    """Store the new quantity, record ``stock_adjusted`` and check the threshold.

    The stock change is committed before anything is logged, so neither the
    audit entry nor the low stock alert can undo it.
    """

    if quantity < 0:
        raise ValueError("Quantity cannot be negative")

    repository = InventoryRepository(session)
    previous = repository.get_item(shop_id, product_id)
    if previous is None:
        raise ProductNotFoundError(product_id)

    item = repository.set_quantity(shop_id, product_id, quantity)

    metadata = {"product_name": item.product_name}
    if item.sku:
        metadata["sku"] = item.sku
    activity_logger.track_inventory_activity(
        shop_id,
        actor_id,
        "stock_adjusted",
        item.product_id,
        item.quantity,
        previous_quantity=previous.quantity,
        metadata=metadata,
    )
    check_low_stock(activity_logger, shop_id, item, actor_id=actor_id)
    return item
