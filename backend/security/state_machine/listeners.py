from __future__ import annotations

from typing import Protocol

from security.domain import AlarmStatus


class StatusListener(Protocol):
    def on_alarm_status_changed(self, alarm_status: AlarmStatus) -> None: ...

    def on_sensor_status_changed(self) -> None: ...
