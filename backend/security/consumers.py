from __future__ import annotations

import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer

from security.listeners import SECURITY_GROUP

logger = logging.getLogger(__name__)


class SecurityConsumer(AsyncJsonWebsocketConsumer):
    async def connect(self):
        user = self.scope.get("user")
        if not user or getattr(user, "is_anonymous", True):
            logger.info("WS connect: rejected anonymous user")
            await self.close(code=4401)
            return
        await self.channel_layer.group_add(SECURITY_GROUP, self.channel_name)
        logger.info("WS connect: accepted user_id=%s", getattr(user, "id", None))
        await self.accept()

    async def receive_json(self, content, **kwargs):
        if content.get("type") == "ping":
            await self.send_json({"type": "pong"})

    async def disconnect(self, code):
        user = self.scope.get("user")
        if user and not getattr(user, "is_anonymous", True):
            await self.channel_layer.group_discard(SECURITY_GROUP, self.channel_name)
        logger.info("WS disconnect: code=%s user_id=%s", code, getattr(user, "id", None) if user else None)

    async def security_alarm_status(self, event):
        await self.send_json({"type": "alarm_status", "alarm_status": event["alarm_status"]})

    async def security_sensor_status(self, event):
        await self.send_json({"type": "sensor_status"})
