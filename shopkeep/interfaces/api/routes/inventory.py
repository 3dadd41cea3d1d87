"""Endpoints for inventory checks."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopkeep.application.use_cases.activity import ActivityLogger
from shopkeep.application.use_cases.inventory import scan_low_stock
from shopkeep.config import Settings
from shopkeep.domain.entities import User
from shopkeep.infrastructure.database import get_db
from shopkeep.infrastructure.repositories import InventoryRepository
from shopkeep.interfaces.api.dependencies import (
    get_activity_logger,
    get_app_settings,
    get_current_active_user,
    require_shop_admin,
)
from shopkeep.interfaces.api.schemas import InventoryItemRead, LowStockScanResponse

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.get("/low-stock", response_model=list[InventoryItemRead])
def read_low_stock_items(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[InventoryItemRead]:
    items = InventoryRepository(db).list_for_shop(current_user.shop_id, low_stock_only=True)
    return [
        InventoryItemRead(
            product_id=item.product_id,
            product_name=item.product_name,
            sku=item.sku,
            quantity=item.quantity,
            reorder_point=item.reorder_point,
            is_low_stock=item.is_low_stock(),
        )
        for item in items
    ]


@router.post("/low-stock/scan", response_model=LowStockScanResponse)
def run_low_stock_scan(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_shop_admin),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    settings: Settings = Depends(get_app_settings),
) -> LowStockScanResponse:
    """Write a ``low_stock_alert`` for every product at or below its reorder point."""

    emitted = scan_low_stock(
        db,
        current_user.shop_id,
        activity_logger,
        deduplicate=settings.low_stock_deduplicate,
    )
    return LowStockScanResponse(alerts_emitted=emitted)


__all__ = ["router"]
