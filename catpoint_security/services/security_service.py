"""Security service: the alarm status rule engine.

Alarm status moves between NO_ALARM, PENDING_ALARM and ALARM in response to
three kinds of input:

- sensor activation changes (``set_sensor_active``)
- arming changes requested by the user (``set_arming_status``)
- camera frames run through the image classifier (``process_image``)

The service keeps no copy of the alarm status, arming status or sensor set;
every decision reads the status store and every outcome is written back to
it. The only state held here is whether the last processed image showed a
cat, which arming to ARMED_HOME consults.
"""

import logging
import threading
from typing import Any, List, Optional, Set

from ..models.config import SystemConfig
from ..models.sensor import Sensor
from ..models.status import AlarmStatus, ArmingStatus
from ..utils import any_sensor_active
from ..logging_config import get_logger, log_with_context
from .error_handler import (
    ErrorHandler, ErrorSeverity, SensorNotFoundError, global_error_handler, report_errors
)
from .interfaces import ImageClassifierInterface, StatusListener, StatusStoreInterface

logger = get_logger("security_service")

COMPONENT_NAME = "security_service"


class SecurityService:
    """Aggregates sensor and camera input into an alarm status."""

    def __init__(self,
                 status_store: StatusStoreInterface,
                 image_classifier: ImageClassifierInterface,
                 config: Optional[SystemConfig] = None,
                 error_handler: Optional[ErrorHandler] = None):
        self.status_store = status_store
        self.image_classifier = image_classifier
        self.error_handler = error_handler or global_error_handler
        self.error_handler.register_component(COMPONENT_NAME)

        config = config or SystemConfig()
        self.confidence_threshold = 0.5
        self.set_confidence_threshold(config.cat_confidence_threshold)

        self.status_listeners: List[StatusListener] = []
        self.cat_detected = False

        # Guards each read-evaluate-write sequence against the store.
        self._lock = threading.RLock()

    # Listeners

    def add_status_listener(self, listener: StatusListener) -> None:
        if listener not in self.status_listeners:
            self.status_listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        if listener in self.status_listeners:
            self.status_listeners.remove(listener)

    # Configuration

    def set_confidence_threshold(self, threshold: float) -> None:
        """Set the cat detection confidence threshold."""
        self.confidence_threshold = max(0.0, min(1.0, threshold))
        logger.info(f"Cat confidence threshold set to {self.confidence_threshold}")

    def on_config_changed(self, config: SystemConfig) -> None:
        """Config change callback for ConfigManager."""
        self.set_confidence_threshold(config.cat_confidence_threshold)

    # Read passthroughs

    def get_alarm_status(self) -> AlarmStatus:
        return self.status_store.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self.status_store.get_arming_status()

    def get_sensors(self) -> Set[Sensor]:
        return self.status_store.get_sensors()

    # Sensor management

    @report_errors(COMPONENT_NAME, ErrorSeverity.HIGH)
    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.status_store.add_sensor(sensor)
        logger.info(f"Sensor added: {sensor.name} ({sensor.sensor_type.name})")
        self._notify_sensor_status_changed()

    @report_errors(COMPONENT_NAME, ErrorSeverity.HIGH)
    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.status_store.remove_sensor(sensor)
        logger.info(f"Sensor removed: {sensor.name} ({sensor.sensor_type.name})")
        self._notify_sensor_status_changed()

    # State transitions

    @report_errors(COMPONENT_NAME, ErrorSeverity.HIGH)
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Record a new arming status chosen by the user.

        Disarming clears the alarm. Arming resets every sensor to inactive,
        and arming at home while a cat is in view raises the alarm at once.
        """
        with self._lock:
            if arming_status == ArmingStatus.DISARMED:
                self._set_alarm_status(AlarmStatus.NO_ALARM, f"arming {arming_status.name}")
            else:
                for sensor in self.status_store.get_sensors():
                    sensor.active = False
                    self.status_store.update_sensor(sensor)

                if arming_status == ArmingStatus.ARMED_HOME and self.cat_detected:
                    self._set_alarm_status(AlarmStatus.ALARM, f"arming {arming_status.name}")

            self.status_store.set_arming_status(arming_status)

        logger.info(f"Arming status set to {arming_status.name}")
        if arming_status.is_armed:
            self._notify_sensor_status_changed()

    @report_errors(COMPONENT_NAME, ErrorSeverity.HIGH)
    def set_sensor_active(self, sensor: Sensor, active: bool) -> None:
        """Change a sensor's activation and evaluate alarm transitions.

        Raises:
            SensorNotFoundError: if the store does not hold the sensor.
        """
        with self._lock:
            stored = self._find_sensor(sensor)
            was_active = stored.active

            sensor.active = active
            self.status_store.update_sensor(sensor)

            if active:
                self._handle_sensor_activated(sensor, was_active)
            elif was_active:
                self._handle_sensor_deactivated(sensor)
            else:
                logger.debug(f"Sensor {sensor.name} already inactive, alarm status untouched")

        self._notify_sensor_status_changed()

    @report_errors(COMPONENT_NAME, ErrorSeverity.MEDIUM)
    def process_image(self, image: Any) -> bool:
        """Run a camera frame through the classifier and apply the result.

        Returns:
            Whether the classifier found a cat.
        """
        with self._lock:
            detected = self.image_classifier.contains_cat(image, self.confidence_threshold)
            self.cat_detected = detected

            if detected and self.status_store.get_arming_status() == ArmingStatus.ARMED_HOME:
                self._set_alarm_status(AlarmStatus.ALARM, "image")
            elif not detected and not any_sensor_active(self.status_store.get_sensors()):
                self._set_alarm_status(AlarmStatus.NO_ALARM, "image")

        logger.debug(f"Image processed: cat_detected={detected}")
        for listener in list(self.status_listeners):
            listener.cat_detected(detected)
        return detected

    # Rule evaluation

    def _handle_sensor_activated(self, sensor: Sensor, was_active: bool) -> None:
        trigger = f"sensor {sensor.name}"
        alarm_status = self.status_store.get_alarm_status()

        if alarm_status == AlarmStatus.ALARM:
            # Sensors never clear a raised alarm; once disarmed it drops to pending.
            if not was_active and self.status_store.get_arming_status() == ArmingStatus.DISARMED:
                self._set_alarm_status(AlarmStatus.PENDING_ALARM, trigger)
            return

        if was_active and alarm_status != AlarmStatus.PENDING_ALARM:
            return

        if not self.status_store.get_arming_status().is_armed:
            return

        if alarm_status == AlarmStatus.NO_ALARM:
            self._set_alarm_status(AlarmStatus.PENDING_ALARM, trigger)
        elif alarm_status == AlarmStatus.PENDING_ALARM:
            self._set_alarm_status(AlarmStatus.ALARM, trigger)

    def _handle_sensor_deactivated(self, sensor: Sensor) -> None:
        trigger = f"sensor {sensor.name}"
        alarm_status = self.status_store.get_alarm_status()

        if alarm_status == AlarmStatus.ALARM:
            if self.status_store.get_arming_status() == ArmingStatus.DISARMED:
                self._set_alarm_status(AlarmStatus.PENDING_ALARM, trigger)
        elif alarm_status == AlarmStatus.PENDING_ALARM:
            if not any_sensor_active(self.status_store.get_sensors()):
                self._set_alarm_status(AlarmStatus.NO_ALARM, trigger)

    def _find_sensor(self, sensor: Sensor) -> Sensor:
        for stored in self.status_store.get_sensors():
            if stored == sensor:
                return stored
        raise SensorNotFoundError(sensor)

    def _set_alarm_status(self, alarm_status: AlarmStatus, trigger: str) -> None:
        self.status_store.set_alarm_status(alarm_status)
        log_with_context(logger, logging.INFO, f"Alarm status changed to {alarm_status.name}",
                         {"trigger": trigger})
        for listener in list(self.status_listeners):
            listener.notify(alarm_status)

    def _notify_sensor_status_changed(self) -> None:
        for listener in list(self.status_listeners):
            listener.sensor_status_changed()
