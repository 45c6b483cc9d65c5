"""
Catpoint Core Enums

Alarm status, arming status and sensor types shared by the engine,
the state store and the status listeners.
"""

from enum import Enum


# =============================================================================
# Alarm Status
# =============================================================================

class AlarmStatus(str, Enum):
    """Current alert level of the system.

    Mutated only by SecurityService.set_alarm_status().
    """
    NO_ALARM = "no_alarm"             # Nothing going on
    PENDING_ALARM = "pending_alarm"   # One sensor tripped, waiting for confirmation
    ALARM = "alarm"                   # Full alarm

    @property
    def description(self) -> str:
        return _ALARM_DESCRIPTIONS[self]


_ALARM_DESCRIPTIONS = {
    AlarmStatus.NO_ALARM: "Cool and Good",
    AlarmStatus.PENDING_ALARM: "I'm in Danger...",
    AlarmStatus.ALARM: "Awooga!",
}


# =============================================================================
# Arming Status
# =============================================================================

class ArmingStatus(str, Enum):
    """Whether and how the system is armed."""
    DISARMED = "disarmed"
    ARMED_HOME = "armed_home"   # Occupants inside, camera watches for cats
    ARMED_AWAY = "armed_away"

    @property
    def description(self) -> str:
        return _ARMING_DESCRIPTIONS[self]


_ARMING_DESCRIPTIONS = {
    ArmingStatus.DISARMED: "Disarmed",
    ArmingStatus.ARMED_HOME: "Armed - At Home",
    ArmingStatus.ARMED_AWAY: "Armed - Away",
}


# =============================================================================
# Sensor Type
# =============================================================================

class SensorType(str, Enum):
    """Kind of binary sensor."""
    DOOR = "door"
    WINDOW = "window"
    MOTION = "motion"
