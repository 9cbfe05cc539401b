from __future__ import annotations

from .sensor import Sensor
from .status import AlarmStatus, ArmingStatus, SensorType

__all__ = [
    "AlarmStatus",
    "ArmingStatus",
    "Sensor",
    "SensorType",
]
