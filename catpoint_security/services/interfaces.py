"""Service interfaces and abstract base classes."""

from abc import ABC, abstractmethod
from typing import Any, Set

from ..models.sensor import Sensor
from ..models.status import AlarmStatus, ArmingStatus


class StatusStoreInterface(ABC):
    """Interface for the authoritative alarm, arming and sensor state."""

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        """Get current alarm status."""
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Set current alarm status."""
        pass

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        """Get current arming status."""
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Set current arming status."""
        pass

    @abstractmethod
    def get_sensors(self) -> Set[Sensor]:
        """Get all registered sensors."""
        pass

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        """Register a sensor."""
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        """Unregister a sensor."""
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        """Store the sensor's current active flag."""
        pass


class ImageClassifierInterface(ABC):
    """Interface for the external image classification service."""

    @abstractmethod
    def contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        """Check whether the image contains a cat above the confidence threshold."""
        pass


class StatusListener(ABC):
    """Observer of security service state changes."""

    @abstractmethod
    def notify(self, alarm_status: AlarmStatus) -> None:
        """Called after the alarm status is written."""
        pass

    @abstractmethod
    def cat_detected(self, detected: bool) -> None:
        """Called after each processed image."""
        pass

    @abstractmethod
    def sensor_status_changed(self) -> None:
        """Called after sensors are added, removed or change activation."""
        pass
