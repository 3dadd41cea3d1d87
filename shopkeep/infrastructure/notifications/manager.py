"""Shop channels for activity websockets."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Keep the websocket subscribers of every shop channel.

    Each socket is stored with the id of the user who opened it so dropped
    subscribers can be reported by name.
    """

    def __init__(self) -> None:
        self._channels: dict[int, dict[WebSocket, int]] = {}

    async def connect(self, shop_id: int, user_id: int, websocket: WebSocket) -> int:
        """Accept ``websocket`` into the channel of ``shop_id``.

        Returns the number of open sockets on the channel afterwards.
        """

        await websocket.accept()
        channel = self._channels.setdefault(shop_id, {})
        channel[websocket] = user_id
        return len(channel)

    def disconnect(self, shop_id: int, websocket: WebSocket) -> None:
        channel = self._channels.get(shop_id)
        if not channel:
            return
        channel.pop(websocket, None)
        if not channel:
            del self._channels[shop_id]

    def connection_count(self, shop_id: int) -> int:
        return len(self._channels.get(shop_id, {}))

    async def send_to_shop(self, shop_id: int, message: dict[str, Any]) -> int:
        """Send ``message`` on the channel of ``shop_id``.

        Sockets that fail to receive it leave the channel. Returns the number
        of sockets the message reached.
        """

        delivered = 0
        for websocket, user_id in list(self._channels.get(shop_id, {}).items()):
            try:
                await websocket.send_json(message)
            except Exception as exc:
                logger.debug(
                    "Dropping websocket of user %s in shop %s: %s", user_id, shop_id, exc
                )
                self.disconnect(shop_id, websocket)
            else:
                delivered += 1
        return delivered


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
