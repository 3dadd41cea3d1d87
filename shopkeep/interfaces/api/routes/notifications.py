"""Endpoints and websocket handler for shop notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from shopkeep.application.use_cases.notifications import list_notifications
from shopkeep.config import Settings
from shopkeep.domain.entities import Notification, User
from shopkeep.infrastructure.database import SessionLocal, get_db
from shopkeep.infrastructure.diagnostics import ActivityDiagnostics
from shopkeep.infrastructure.notifications import notification_manager
from shopkeep.interfaces.api.dependencies import (
    get_app_settings,
    get_current_active_user,
    get_diagnostics,
    resolve_current_user,
)
from shopkeep.interfaces.api.schemas import NotificationPageRead, NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

MAX_PAGE = 100_000
MAX_PAGE_SIZE = 100


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id,
        action=notification.action,
        title=notification.title,
        message=notification.message,
        severity=notification.severity.value,
        created_at=notification.created_at,
        entity_table=notification.entity_table,
        entity_id=notification.entity_id,
        metadata=notification.metadata,
    )


@router.get("", response_model=NotificationPageRead)
def read_notifications(
    page: int = Query(
        1, le=MAX_PAGE, description="1-based page number; values below 1 read page 1"
    ),
    page_size: int | None = Query(None, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    diagnostics: ActivityDiagnostics = Depends(get_diagnostics),
    settings: Settings = Depends(get_app_settings),
) -> NotificationPageRead:
    """Return one page of alert-worthy activity of the caller's shop."""

    result = list_notifications(
        db,
        current_user.shop_id,
        page=page,
        page_size=page_size if page_size is not None else settings.notifications_page_size,
        diagnostics=diagnostics,
    )
    return NotificationPageRead(
        items=[_notification_to_schema(item) for item in result.items],
        total_count=result.total_count,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Stream ``activity.created`` signals for the shop of the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    if not user.is_active:
        await websocket.close(code=1008)
        return

    shop_id = user.shop_id
    subscribers = await notification_manager.connect(shop_id, user.id, websocket)
    logger.debug("User %s joined shop %s channel (%s open)", user.id, shop_id, subscribers)
    try:
        await websocket.send_json({"type": "ready", "data": {"shop_id": shop_id}})
        while True:
            message = await websocket.receive_json()
            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        logger.debug("Notification websocket of shop %s closed", shop_id)
    finally:
        notification_manager.disconnect(shop_id, websocket)
        logger.debug(
            "Shop %s channel has %s open sockets",
            shop_id,
            notification_manager.connection_count(shop_id),
        )


__all__ = ["router"]
