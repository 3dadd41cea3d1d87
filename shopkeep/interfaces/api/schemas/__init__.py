from .activity import ActivityDiagnosticsRead, ActivityEntryRead
from .auth import LogoutRequest, LogoutResponse, Token
from .notification import NotificationPageRead, NotificationRead
from .product import (
    InventoryItemRead,
    LowStockScanResponse,
    ProductCreate,
    ProductRead,
    StockUpdate,
)
from .session import LoginSessionRead

__all__ = [
    "ActivityDiagnosticsRead",
    "ActivityEntryRead",
    "InventoryItemRead",
    "LoginSessionRead",
    "LogoutRequest",
    "LogoutResponse",
    "LowStockScanResponse",
    "NotificationPageRead",
    "NotificationRead",
    "ProductCreate",
    "ProductRead",
    "StockUpdate",
    "Token",
]
