"""
Status Listeners

Observers registered with SecurityService. Every registered listener is
called exactly once per triggering event; the order across listeners is
not defined.
"""

from abc import ABC, abstractmethod

from ..domain.enums import AlarmStatus


class StatusListener(ABC):
    """Receives sensor, cat-detection and alarm-status events."""

    @abstractmethod
    def on_sensor_status_changed(self) -> None:
        """Generic "something about the sensors changed" signal."""
        pass

    @abstractmethod
    def on_cat_detected(self, cat: bool) -> None:
        pass

    @abstractmethod
    def on_notify(self, status: AlarmStatus) -> None:
        """Called with the new value after every alarm status write."""
        pass


class RecordingStatusListener(StatusListener):
    """Listener that keeps everything it receives."""

    def __init__(self):
        self.notifications: list[AlarmStatus] = []
        self.cat_detections: list[bool] = []
        self.sensor_changes: int = 0

    def on_sensor_status_changed(self) -> None:
        self.sensor_changes += 1

    def on_cat_detected(self, cat: bool) -> None:
        self.cat_detections.append(cat)

    def on_notify(self, status: AlarmStatus) -> None:
        self.notifications.append(status)

    def clear(self) -> None:
        self.notifications.clear()
        self.cat_detections.clear()
        self.sensor_changes = 0
