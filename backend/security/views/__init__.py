from __future__ import annotations

from .camera import CameraFrameView
from .events import SecurityEventsView
from .sensors import SensorDetailView, SensorsView
from .status import AlarmStatusView, ArmingStatusView, SecurityStatusView

__all__ = [
    "AlarmStatusView",
    "ArmingStatusView",
    "CameraFrameView",
    "SecurityEventsView",
    "SecurityStatusView",
    "SensorDetailView",
    "SensorsView",
]
