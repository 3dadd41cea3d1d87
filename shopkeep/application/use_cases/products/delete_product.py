"""Use case for removing a product from a shop catalog."""

from sqlalchemy.orm import Session

from shopkeep.domain.entities import Product
from shopkeep.infrastructure.repositories import ProductRepository

from ..activity.logger import ActivityLogger
from .create_product import product_snapshot
from .errors import ProductNotFoundError


def delete_product(
    session: Session,
    activity_logger: ActivityLogger,
    *,
    shop_id: int,
    actor_id: int | None,
    product_id: int,
) -> Product:
    repository = ProductRepository(session)
    product = repository.get(shop_id, product_id)
    if product is None:
        raise ProductNotFoundError(product_id)

    repository.delete(shop_id, product_id)
    activity_logger.track_product_activity(
        shop_id,
        actor_id,
        "product_deleted",
        product.id,
        product.name,
        sku=product.sku,
        old_values=product_snapshot(product),
    )
    return product
