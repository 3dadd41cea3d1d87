"""Endpoints for the catalog operations that feed the activity log."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from shopkeep.application.use_cases.activity import ActivityLogger
from shopkeep.application.use_cases.products import (
    ProductNotFoundError,
    adjust_stock,
    create_product,
    delete_product,
)
from shopkeep.domain.entities import User
from shopkeep.infrastructure.database import get_db
from shopkeep.interfaces.api.dependencies import get_activity_logger, get_current_active_user
from shopkeep.interfaces.api.schemas import (
    InventoryItemRead,
    ProductCreate,
    ProductRead,
    StockUpdate,
)

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product_endpoint(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
) -> ProductRead:
    try:
        product = create_product(
            db,
            activity_logger,
            shop_id=current_user.shop_id,
            actor_id=current_user.id,
            name=payload.name,
            sku=payload.sku,
            price=payload.price,
            quantity=payload.quantity,
            reorder_point=payload.reorder_point,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ProductRead.model_validate(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product_endpoint(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
) -> Response:
    try:
        delete_product(
            db,
            activity_logger,
            shop_id=current_user.shop_id,
            actor_id=current_user.id,
            product_id=product_id,
        )
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{product_id}/stock", response_model=InventoryItemRead)
def update_stock_endpoint(
    product_id: int,
    payload: StockUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
) -> InventoryItemRead:
    """Set the stock of a product; a low level also records an alert."""

    try:
        item = adjust_stock(
            db,
            activity_logger,
            shop_id=current_user.shop_id,
            actor_id=current_user.id,
            product_id=product_id,
            quantity=payload.quantity,
        )
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return InventoryItemRead(
        product_id=item.product_id,
        product_name=item.product_name,
        sku=item.sku,
        quantity=item.quantity,
        reorder_point=item.reorder_point,
        is_low_stock=item.is_low_stock(),
    )


__all__ = ["router"]
