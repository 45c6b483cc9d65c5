"""
Catpoint Security Service - alarm decision engine

Receives sensor, arming and camera events, decides the alarm status and
notifies status listeners.

Alarm status transitions:
NO_ALARM → PENDING_ALARM → ALARM

Key rules:
1. Sensor activation escalates only while armed
2. Sensor deactivation downgrades regardless of arming status
3. ALARM ignores explicit sensor activation/deactivation
4. Disarming always clears to NO_ALARM
5. A cat seen while ARMED_HOME (or arming home after a cat was seen) → ALARM
6. No cat and all sensors inactive → NO_ALARM

Durable state lives in the SecurityRepository. The only state kept here is
the last cat-detection result and the registered listeners.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import structlog

from ..domain.enums import AlarmStatus, ArmingStatus
from ..domain.models import Sensor
from ..hardware.image_classifier import ImageClassifier
from .listeners import StatusListener
from .repository import SecurityRepository

logger = structlog.get_logger()


@dataclass
class SecurityServiceConfig:
    """Configuration for SecurityService."""
    # Minimum classifier confidence (0-1) for "cat present"
    cat_confidence_threshold: float = 0.5

    def __post_init__(self):
        if not 0.0 <= self.cat_confidence_threshold <= 1.0:
            raise ValueError('cat_confidence_threshold must be between 0.0 and 1.0')


class SecurityService:
    """Alarm decision engine.

    Single-threaded and synchronous: every call reads state, decides, writes
    state and notifies listeners before returning. Callers driving it from
    several threads must serialize access themselves.
    """

    def __init__(
        self,
        repository: SecurityRepository,
        image_classifier: ImageClassifier,
        config: Optional[SecurityServiceConfig] = None,
    ):
        self.repository = repository
        self.image_classifier = image_classifier
        self.config = config or SecurityServiceConfig()

        # Insertion-ordered set
        self._listeners: dict[StatusListener, None] = {}
        self._cat_detected = False

    @property
    def cat_detected(self) -> bool:
        """Result of the last processed image."""
        return self._cat_detected

    # =========================================================================
    # Listeners
    # =========================================================================

    def add_status_listener(self, listener: StatusListener) -> None:
        """Register a listener. Adding it again has no effect."""
        self._listeners[listener] = None

    def remove_status_listener(self, listener: StatusListener) -> None:
        """Unregister a listener. Unknown listeners are ignored."""
        self._listeners.pop(listener, None)

    def _snapshot_listeners(self) -> list[StatusListener]:
        # Copy, so a listener may unregister itself while being notified
        return list(self._listeners)

    # =========================================================================
    # Arming
    # =========================================================================

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Set the arming status. May change the alarm status and sensors."""
        logger.info("Arming status changed", arming_status=arming_status.value)

        if self._cat_detected and arming_status == ArmingStatus.ARMED_HOME:
            self.set_alarm_status(AlarmStatus.ALARM)

        if arming_status == ArmingStatus.DISARMED:
            self.set_alarm_status(AlarmStatus.NO_ALARM)
        else:
            for sensor in list(self.get_sensors()):
                if sensor.active:
                    self.change_sensor_activation_status(sensor, False)

        self.repository.set_arming_status(arming_status)

        for listener in self._snapshot_listeners():
            listener.on_sensor_status_changed()

    # =========================================================================
    # Alarm status
    # =========================================================================

    def set_alarm_status(self, status: AlarmStatus) -> None:
        """Change the alarm status and notify all listeners."""
        logger.info("Alarm status changed", status=status.value)
        self.repository.set_alarm_status(status)
        for listener in self._snapshot_listeners():
            listener.on_notify(status)

    def _handle_sensor_activated(self) -> None:
        if self.repository.get_arming_status() == ArmingStatus.DISARMED:
            return

        alarm_status = self.repository.get_alarm_status()
        if alarm_status == AlarmStatus.NO_ALARM:
            self.set_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm_status == AlarmStatus.PENDING_ALARM:
            self.set_alarm_status(AlarmStatus.ALARM)

    def _handle_sensor_deactivated(self) -> None:
        alarm_status = self.repository.get_alarm_status()
        if alarm_status == AlarmStatus.PENDING_ALARM:
            self.set_alarm_status(AlarmStatus.NO_ALARM)
        elif alarm_status == AlarmStatus.ALARM:
            self.set_alarm_status(AlarmStatus.PENDING_ALARM)

    # =========================================================================
    # Sensors
    # =========================================================================

    def change_sensor_activation_status(
        self,
        sensor: Sensor,
        active: Optional[bool] = None,
    ) -> Sensor:
        """Change a sensor's activation and update the alarm status if needed.

        With ``active=None`` the sensor is left as is and only the alarm
        status is reconciled. The resulting snapshot is always written back
        to the repository and returned.
        """
        alarm_status = self.repository.get_alarm_status()
        arming_status = self.repository.get_arming_status()

        if active is None:
            if alarm_status == AlarmStatus.PENDING_ALARM and not sensor.active:
                self._handle_sensor_deactivated()
            elif alarm_status == AlarmStatus.ALARM and arming_status == ArmingStatus.DISARMED:
                self._handle_sensor_deactivated()
        else:
            if alarm_status != AlarmStatus.ALARM:
                if active:
                    self._handle_sensor_activated()
                elif sensor.active:
                    self._handle_sensor_deactivated()
            sensor = sensor.with_active(active)

        logger.debug(
            "Sensor updated",
            sensor_id=sensor.sensor_id,
            name=sensor.name,
            active=sensor.active,
        )
        self.repository.update_sensor(sensor)
        return sensor

    # =========================================================================
    # Camera
    # =========================================================================

    def process_image(self, image: np.ndarray) -> None:
        """Classify a camera frame and update the alarm status accordingly."""
        cat = self.image_classifier.contains_cat(image, self.config.cat_confidence_threshold)
        self._cat_detected_changed(cat)

    def _cat_detected_changed(self, cat: bool) -> None:
        self._cat_detected = cat
        logger.debug("Cat detection", cat=cat)

        if cat and self.repository.get_arming_status() == ArmingStatus.ARMED_HOME:
            self.set_alarm_status(AlarmStatus.ALARM)
        elif not cat and all(not sensor.active for sensor in self.repository.get_sensors()):
            self.set_alarm_status(AlarmStatus.NO_ALARM)

        for listener in self._snapshot_listeners():
            listener.on_cat_detected(cat)

    # =========================================================================
    # Repository pass-throughs
    # =========================================================================

    def get_alarm_status(self) -> AlarmStatus:
        return self.repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self.repository.get_arming_status()

    def get_sensors(self) -> set[Sensor]:
        return self.repository.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        self.repository.add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        self.repository.remove_sensor(sensor)
