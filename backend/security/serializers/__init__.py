from __future__ import annotations

from .events import SecurityEventSerializer
from .sensors import SensorActivationSerializer, SensorCreateSerializer, SensorSerializer
from .status import SecurityStatusSerializer

__all__ = [
    "SecurityEventSerializer",
    "SecurityStatusSerializer",
    "SensorActivationSerializer",
    "SensorCreateSerializer",
    "SensorSerializer",
]
