from __future__ import annotations

from dataclasses import dataclass, field

from .status import SensorType


@dataclass(eq=False)
class Sensor:
    """
    A binary sensor as the controller sees it.

    Identity is the `(name, sensor_type)` pair; `active` is mutable state and
    takes no part in equality, so a sensor keeps its place in a set while it
    is toggled.
    """

    name: str
    sensor_type: SensorType
    active: bool = field(default=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.name, str(self.sensor_type))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.name} ({self.sensor_type})"
