"""
Security Repository

State store for sensors, arming status and alarm status. The engine is the
only writer of alarm status; it re-reads every status from here before
making a decision, so implementations are the system of record.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

import structlog

from ..domain.enums import AlarmStatus, ArmingStatus
from ..domain.models import Sensor

logger = structlog.get_logger()


# =============================================================================
# Interface
# =============================================================================

class SecurityRepository(ABC):
    """Storage interface consumed by SecurityService.

    All calls are synchronous. Persistence errors are the implementation's
    concern and propagate to the caller unchanged.
    """

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        pass

    @abstractmethod
    def set_alarm_status(self, status: AlarmStatus) -> None:
        pass

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        pass

    @abstractmethod
    def set_arming_status(self, status: ArmingStatus) -> None:
        pass

    @abstractmethod
    def get_sensors(self) -> set[Sensor]:
        pass

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        pass


# =============================================================================
# In-memory implementation
# =============================================================================

class InMemorySecurityRepository(SecurityRepository):
    """Process-local state store.

    Sensors are keyed by ``sensor_id``. Updating an unknown sensor adds it;
    removing an unknown sensor does nothing.
    """

    def __init__(
        self,
        alarm_status: AlarmStatus = AlarmStatus.NO_ALARM,
        arming_status: ArmingStatus = ArmingStatus.DISARMED,
        sensors: Optional[Iterable[Sensor]] = None,
    ):
        self._alarm_status = alarm_status
        self._arming_status = arming_status
        self._sensors: dict[str, Sensor] = {}
        for sensor in sensors or ():
            self._sensors[sensor.sensor_id] = sensor

    def get_alarm_status(self) -> AlarmStatus:
        return self._alarm_status

    def set_alarm_status(self, status: AlarmStatus) -> None:
        self._alarm_status = status

    def get_arming_status(self) -> ArmingStatus:
        return self._arming_status

    def set_arming_status(self, status: ArmingStatus) -> None:
        self._arming_status = status

    def get_sensors(self) -> set[Sensor]:
        """Return a new set, so callers cannot mutate the store through it."""
        return set(self._sensors.values())

    def get_sensor(self, sensor_id: str) -> Optional[Sensor]:
        """Look up the stored snapshot of a sensor by ID."""
        return self._sensors.get(sensor_id)

    def add_sensor(self, sensor: Sensor) -> None:
        self._sensors[sensor.sensor_id] = sensor
        logger.debug("Sensor added", sensor_id=sensor.sensor_id, name=sensor.name)

    def remove_sensor(self, sensor: Sensor) -> None:
        if self._sensors.pop(sensor.sensor_id, None) is not None:
            logger.debug("Sensor removed", sensor_id=sensor.sensor_id, name=sensor.name)

    def update_sensor(self, sensor: Sensor) -> None:
        self._sensors[sensor.sensor_id] = sensor
