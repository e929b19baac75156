"""Sensor data models."""

from dataclasses import dataclass
from enum import Enum


class SensorType(Enum):
    """Kinds of binary activation sources."""
    DOOR = "door"
    WINDOW = "window"
    MOTION = "motion"


@dataclass(eq=False)
class Sensor:
    """A door, window or motion sensor.

    Identity is ``(name, sensor_type)``; the active flag changes over the
    sensor's lifetime and is excluded from equality, hashing and ordering.
    """
    name: str
    sensor_type: SensorType
    active: bool = False

    def __post_init__(self):
        if not isinstance(self.sensor_type, SensorType):
            self.sensor_type = SensorType(self.sensor_type)

    @property
    def key(self) -> tuple:
        return (self.name, self.sensor_type.value)

    def __eq__(self, other):
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other):
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.key < other.key

    def __hash__(self):
        return hash(self.key)

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'sensor_type': self.sensor_type.value,
            'active': self.active
        }
