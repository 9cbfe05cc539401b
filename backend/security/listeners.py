from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction
from django.utils import timezone

from security.domain import AlarmStatus
from security.models import SecurityEvent, SecurityEventType

logger = logging.getLogger(__name__)

SECURITY_GROUP = "security"


class EventLogStatusListener:
    """Persist every notification as a `SecurityEvent` row."""

    def on_alarm_status_changed(self, alarm_status: AlarmStatus) -> None:
        SecurityEvent.objects.create(
            event_type=SecurityEventType.ALARM_STATUS_CHANGED,
            alarm_status=alarm_status,
            timestamp=timezone.now(),
        )

    def on_sensor_status_changed(self) -> None:
        SecurityEvent.objects.create(
            event_type=SecurityEventType.SENSOR_STATUS_CHANGED,
            alarm_status=None,
            timestamp=timezone.now(),
        )


class ChannelLayerStatusListener:
    """
    Push notifications to websocket clients in the `security` group.

    Sends are deferred until the surrounding transaction commits.
    """

    def __init__(self, group: str = SECURITY_GROUP):
        self.group = group

    def on_alarm_status_changed(self, alarm_status: AlarmStatus) -> None:
        self._schedule({"type": "security.alarm_status", "alarm_status": str(alarm_status)})

    def on_sensor_status_changed(self) -> None:
        self._schedule({"type": "security.sensor_status"})

    def _schedule(self, message: dict[str, str]) -> None:
        transaction.on_commit(lambda: self._send(message))

    def _send(self, message: dict[str, str]) -> None:
        channel_layer = get_channel_layer()
        if channel_layer is None:
            logger.debug("No channel layer configured; dropping %s", message["type"])
            return
        async_to_sync(channel_layer.group_send)(self.group, message)
